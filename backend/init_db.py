from sqlalchemy import inspect
import logging

from database import engine, Base
import models  # noqa: F401  (registers the tables on Base.metadata)

logger = logging.getLogger(__name__)

EXPECTED_TABLES = ('cars', 'interventions', 'operations', 'operation_lines', 'contacts')


def init_database(bind=None):
    """
    Create missing tables.

    Args:
        bind: Engine to initialize (defaults to the application engine)

    Returns:
        Names of the tables that were created
    """
    target = bind or engine
    existing = set(inspect(target).get_table_names())
    Base.metadata.create_all(bind=target)

    created = [table for table in EXPECTED_TABLES if table not in existing]
    if created:
        logger.info(f"Created tables: {', '.join(created)}")
    else:
        logger.info("Database schema up to date")
    return created
