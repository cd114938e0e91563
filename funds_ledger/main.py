"""
Funds Ledger: application wiring.

Loads settings, configures logging, builds the engine and
returns it together with a ready store. The caller owns the
engine and disposes of it on shutdown.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from funds_ledger.config import Settings, get_settings
from funds_ledger.logging_config import setup_logging
from funds_ledger.models.base import (
    create_store_engine,
    init_db,
    make_session_factory,
)
from funds_ledger.services.store import SQLStore

logger = logging.getLogger(__name__)


async def create_store(
    settings: Settings | None = None,
    create_tables: bool = False,
) -> tuple[AsyncEngine, SQLStore]:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FILE, settings.DB_ECHO)

    engine = create_store_engine(settings=settings)
    if create_tables:
        await init_db(engine)

    logger.info(
        "%s %s ready (%s)",
        settings.APP_NAME,
        settings.APP_VERSION,
        settings.ENVIRONMENT,
    )
    return engine, SQLStore(make_session_factory(engine))
