"""Configuration module for the schema tooling.

This module provides:
- Settings management with environment variables
- PostgreSQL async engine lifecycle
"""

from primeverse.settings import Settings, get_settings
from .postgres import (
    dispose_engine,
    get_db_transaction,
    get_engine,
    init_engine,
    init_engine_from_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # PostgreSQL
    "dispose_engine",
    "get_db_transaction",
    "get_engine",
    "init_engine",
    "init_engine_from_settings",
]
