"""Injectable time sources. Everything that stamps or compares dates takes one of these."""
from datetime import date, datetime, timedelta, tzinfo


class SystemClock:
    """Wall clock in the machine's local time zone."""

    def now(self) -> datetime:
        return datetime.now().astimezone()

    def today(self) -> date:
        '''Calendar day of the local midnight that starts "now".'''
        return self.now().date()

    @property
    def tz(self) -> tzinfo:
        return self.now().tzinfo


class FixedClock(SystemClock):
    """Clock frozen at a given instant; tests move it with advance()."""

    def __init__(self, instant: datetime):
        if instant.tzinfo is None:
            instant = instant.astimezone()
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def advance(self, days: int = 0, **kwargs) -> "FixedClock":
        self._instant = self._instant + timedelta(days=days, **kwargs)
        return self


__all__ = ['SystemClock', 'FixedClock']
