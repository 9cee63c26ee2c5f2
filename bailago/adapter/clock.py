"""Clock adapters."""

from datetime import datetime, timedelta, timezone

from bailago.domain.service.ports import Clock


class SystemClock(Clock):
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FrozenClock(Clock):
    """Clock for tests. Time only moves when told to.

    Lifecycle tests move it forward by months to cross the inactivity
    thresholds without waiting.
    """

    def __init__(self, start: datetime | None = None) -> None:
        """Initialize frozen clock.

        Args:
            start: Initial instant, defaults to a fixed UTC date
        """
        self._now = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._now

    def advance(self, **kwargs: float) -> datetime:
        """Move the clock forward.

        Args:
            **kwargs: ``timedelta`` keyword arguments (days=90, hours=1, ...)

        Returns:
            The new current time
        """
        self._now = self._now + timedelta(**kwargs)
        return self._now

    def set(self, instant: datetime) -> None:
        self._now = instant
