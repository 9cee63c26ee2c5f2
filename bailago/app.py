"""Application runtime.

Storage is in memory and lives as long as the container, so the inactivity
sweep runs as a background task of the same process that serves requests.
Hosts enter ``run_app`` once and resolve use cases from the yielded
container. Logging and Logfire are configured on entry.

    async with run_app() as container:
        async with container() as request_container:
            use_case = await request_container.get(LoginUseCase)
            ...
"""

import asyncio
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import AsyncGenerator

import logfire
from dishka import AsyncContainer

from bailago.config import Settings
from bailago.domain.service import AccountLifecycleManager
from bailago.util.di.container import create_container
from bailago.util.logging import setup_logging
from bailago.util.observability import configure_logfire, instrument_httpx


async def _sweep_forever(
    container: AsyncContainer, interval: timedelta, stop_event: asyncio.Event
) -> None:
    async with container() as request_container:
        lifecycle = await request_container.get(AccountLifecycleManager)
        try:
            await lifecycle.run_periodically(interval, stop_event)
        except Exception as e:
            logfire.error(
                "Inactivity sweep loop crashed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=True,
            )
            raise


@asynccontextmanager
async def run_app(
    sweep_interval: timedelta | None = None,
) -> AsyncGenerator[AsyncContainer, None]:
    """Build the production container and keep the inactivity sweep running.

    The first sweep starts immediately. On exit the loop is stopped, a sweep
    in progress completes, and the container is closed.

    Args:
        sweep_interval: Delay between sweeps. Defaults to
            ``LIFECYCLE__SWEEP_INTERVAL_HOURS``.

    Yields:
        The application container
    """
    container = create_container()
    settings = await container.get(Settings)

    setup_logging(settings)
    configure_logfire(settings)
    if settings.push.enabled:
        instrument_httpx()

    if sweep_interval is None:
        sweep_interval = timedelta(hours=settings.lifecycle.sweep_interval_hours)

    stop_event = asyncio.Event()
    sweep_task = asyncio.create_task(_sweep_forever(container, sweep_interval, stop_event))
    logfire.info("Application started", sweep_interval_s=sweep_interval.total_seconds())

    try:
        yield container
    finally:
        stop_event.set()
        try:
            await sweep_task
        finally:
            await container.close()
            logfire.info("Application stopped")
