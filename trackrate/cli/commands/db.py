"""Database commands: migrations and counter reconciliation."""

import asyncio
import sys

import cyclopts

from trackrate.application.di import create_container
from trackrate.cli.console import get_console
from trackrate.config import Config, configure_logging
from trackrate.domain.rating.model.rating import CounterCorrection
from trackrate.domain.rating.service.aggregator import RatingAggregator
from trackrate.domain.shared.error import TrackRateError
from trackrate.infrastructure.persistence.migrate import run_migrations
from trackrate.util.di.scope import Scope


def migrate() -> None:
    """Apply pending database migrations."""
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    run_migrations(config.database.url)
    console.success("Database is up to date")


async def _reconcile(config: Config) -> list[CounterCorrection]:
    container = create_container(config)
    try:
        async with container(scope=Scope.UOW) as uow:
            aggregator = await uow.get(RatingAggregator)
            return await aggregator.reconcile_counters()
    finally:
        await container.close()


def reconcile() -> None:
    """Recompute every user's rating counter from live ratings."""
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)

    try:
        corrections = asyncio.run(_reconcile(config))
    except TrackRateError as e:
        console.error(e.message, hint=e.code)
        sys.exit(1)

    if not corrections:
        console.success("All rating counters match live ratings")
        return

    console.table(
        [c.model_dump() for c in corrections],
        [("user_id", "User"), ("recorded", "Recorded"), ("actual", "Actual")],
        title="Corrected counters",
    )
    console.warning(f"Corrected {len(corrections)} counter(s)")
