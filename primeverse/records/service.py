"""Record payments, contact attempts and metrics."""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from sqlalchemy import select, update
from sqlalchemy.engine import Connection

from primeverse.logging_config import get_logger
from primeverse.schema.contact_logs import contact_logs
from primeverse.schema.payments import payments
from primeverse.schema.programs import programs
from primeverse.schema.stats import stats

logger = get_logger(name=__name__)

Amount = Union[Decimal, int, float, str]


def _without_unset(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None entries so server defaults apply."""
    return {key: value for key, value in values.items() if value is not None}


def record_payment(
    connection: Connection,
    *,
    program: str,
    full_name: str,
    email: str,
    phone: str,
    transaction_id: str,
    amount: Amount,
    currency: Optional[str] = None,
    payment_method: Optional[str] = None,
    status: Optional[str] = None,
) -> int:
    """Insert one completed payment and return its id.

    Omitted currency, payment_method and status take the column defaults
    (INR, UPI, completed).

    Raises:
        sqlalchemy.exc.IntegrityError: duplicate transaction_id or a missing
            required field.
    """
    values = _without_unset({
        "currency": currency,
        "payment_method": payment_method,
        "status": status,
    })
    result = connection.execute(
        payments.insert().values(
            program=program,
            full_name=full_name,
            email=email,
            phone=phone,
            transaction_id=transaction_id,
            amount=amount,
            **values,
        )
    )
    payment_id = result.inserted_primary_key[0]
    logger.info(
        "Recorded payment {} for {} ({} {})",
        transaction_id,
        program,
        amount,
        currency or "INR",
    )
    return payment_id


def set_payment_status(connection: Connection, transaction_id: str, status: str) -> int:
    """Change a payment's status. Returns the number of rows updated.

    ``updated_at`` is left as it was; no trigger maintains it.
    """
    result = connection.execute(
        update(payments)
        .where(payments.c.transaction_id == transaction_id)
        .values(status=status)
    )
    if result.rowcount == 0:
        logger.warning("No payment with transaction id {}", transaction_id)
    return result.rowcount


def log_contact(
    connection: Connection,
    *,
    program: str,
    contact_method: str,
    user_ip: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> int:
    """Append a contact attempt and return its id."""
    result = connection.execute(
        contact_logs.insert().values(
            program=program,
            contact_method=contact_method,
            user_ip=user_ip,
            user_agent=user_agent,
        )
    )
    logger.debug("Logged {} contact for {}", contact_method, program)
    return result.inserted_primary_key[0]


def record_metric(
    connection: Connection,
    metric_name: str,
    metric_value: Optional[Amount],
    day: date,
) -> int:
    """Append a metric value for a date. Repeated (metric, date) pairs are allowed."""
    result = connection.execute(
        stats.insert().values(
            metric_name=metric_name,
            metric_value=metric_value,
            date=day,
        )
    )
    return result.inserted_primary_key[0]


def get_program(connection: Connection, name: str) -> Optional[dict]:
    """Fetch one catalog entry by name."""
    row = connection.execute(
        select(programs).where(programs.c.name == name)
    ).first()
    return dict(row._mapping) if row is not None else None


def list_programs(connection: Connection) -> List[dict]:
    """All catalog entries ordered by id (seed order)."""
    result = connection.execute(select(programs).order_by(programs.c.id))
    return [dict(row._mapping) for row in result]
