"""PrimeVerse payment tracking schema.

Tables, row-level access policies, seed data, migrations and reports
for the payment-tracking database.
"""

__version__ = "0.1.0"
