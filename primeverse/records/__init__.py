"""Insert helpers used by application code against the payment schema.

These add no validation of their own. Duplicate transaction ids, missing
required fields and malformed values surface as the engine's own
SQLAlchemy errors (IntegrityError / DBAPIError).
"""

from primeverse.records.service import (
    get_program,
    list_programs,
    log_contact,
    record_metric,
    record_payment,
    set_payment_status,
)

__all__ = [
    "get_program",
    "list_programs",
    "log_contact",
    "record_metric",
    "record_payment",
    "set_payment_status",
]
