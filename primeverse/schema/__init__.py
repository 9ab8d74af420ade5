"""Relational schema for payments, contact logs, programs and stats.

Import table objects from the per-table modules or from definitions:
    from primeverse.schema.payments import payments
    from primeverse.schema.definitions import ALL_TABLES, metadata

Apply or verify the schema:
    from primeverse.schema.setup import apply_schema, verify_schema
"""
