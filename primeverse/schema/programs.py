"""SQLAlchemy table definition for the program catalog, plus its seed rows."""

from decimal import Decimal

from sqlalchemy import Table, Column, String, Text, DateTime, UniqueConstraint

from primeverse.schema.base import (
    metadata,
    SurrogateKey,
    Money,
    JSONBlob,
    CURRENT_TIMESTAMP,
)

programs = Table(
    "programs",
    metadata,
    Column("id", SurrogateKey, primary_key=True, autoincrement=True),
    Column("name", String(50), nullable=False),
    Column("price", Money, nullable=True),
    Column("original_price", Money, nullable=True),
    Column("description", Text, nullable=True),
    Column("contact_phone", String(20), nullable=True),
    Column("whatsapp_number", String(20), nullable=True),
    Column("features", JSONBlob, nullable=True),
    Column(
        "created_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    Column(
        "updated_at",
        DateTime(timezone=True),
        server_default=CURRENT_TIMESTAMP,
    ),
    UniqueConstraint("name", name="programs_name_key"),
)

# Static catalog inserted by apply_schema / migration 001.
# Format: (name, price, original_price, description, contact_phone, whatsapp_number)
_PROGRAM_ROWS = [
    ("PrimeStart", Decimal("5000"), Decimal("10000"),
     "Perfect for beginners. $5K and $10K traders.",
     "+91-9876543210", "+91-9876543210"),
    ("PrimeAdvance", None, None,
     "Advanced program for $25K and $50K traders.",
     "+91-9876543210", "+91-9876543210"),
    ("PrimeElite", None, None,
     "Premium program for $100K and $200K traders.",
     "+91-8765432109", "+91-8765432109"),
]

PROGRAM_SEED = [
    {
        "name": name,
        "price": price,
        "original_price": original_price,
        "description": description,
        "contact_phone": contact_phone,
        "whatsapp_number": whatsapp_number,
    }
    for name, price, original_price, description, contact_phone, whatsapp_number
    in _PROGRAM_ROWS
]

PROGRAM_NAMES = [row["name"] for row in PROGRAM_SEED]
