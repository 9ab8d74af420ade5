"""Combined schema definitions, imported from the per-table modules.

The shared MetaData instance (from schema/base.py) is the single source
of truth for both ``apply_schema`` and Alembic.
"""

from primeverse.schema.base import metadata  # noqa: F401

from primeverse.schema.payments import payments  # noqa: F401
from primeverse.schema.contact_logs import contact_logs  # noqa: F401
from primeverse.schema.programs import programs, PROGRAM_SEED, PROGRAM_NAMES  # noqa: F401
from primeverse.schema.stats import stats  # noqa: F401

# Creation order
ALL_TABLES = ["payments", "contact_logs", "programs", "stats"]

# Expected index names per table
ALL_INDEXES = {
    table.name: sorted(index.name for index in table.indexes)
    for table in (payments, contact_logs, programs, stats)
}
