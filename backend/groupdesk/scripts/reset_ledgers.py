"""Reset Ledgers — deletes ledger data for the first group so it can be re-seeded.

Usage:
    groupdesk-reset-ledgers
    python -m groupdesk.scripts.reset_ledgers

Takes no arguments. Reads DATABASE_URL like the API does, logs each deletion
count, exits 0 on success and 1 on any error. The engine is disposed before
the process exits, whatever the outcome.
"""

import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from groupdesk.config import get_settings
from groupdesk.core.domain_types import GroupId
from groupdesk.db.session import create_script_engine, create_session_factory
from groupdesk.infrastructure.observability import setup_logging
from groupdesk.services.ledger_reset import (
    LedgerResetSummary, find_first_group, reset_group_ledgers,
)

logger = logging.getLogger(__name__)


class GroupNotFoundError(RuntimeError):
    """No group exists to reset."""


async def reset_first_group(
    session_factory: async_sessionmaker[AsyncSession],
) -> LedgerResetSummary:
    logger.info("Deleting existing ledger data...")
    async with session_factory() as db:
        group = await find_first_group(db)
        if group is None:
            raise GroupNotFoundError("No group found.")
        logger.info(f"Group: {group.name} (ID: {group.id})")
        summary = await reset_group_ledgers(db, GroupId(group.id))
    logger.info("Reset complete. Run the seed next.")
    return summary


async def run(database_url: str) -> LedgerResetSummary:
    engine = create_script_engine(database_url)
    try:
        return await reset_first_group(create_session_factory(engine))
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, fmt="text")
    try:
        asyncio.run(run(settings.database_url))
    except Exception as e:
        logger.error(f"Ledger reset failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
