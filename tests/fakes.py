"""Deterministic stand-ins used by the test suite."""

from datetime import datetime, timedelta


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


# Fixed "now" for every test; 2025 due dates are in the future relative to it
NOW = datetime(2024, 12, 31, 12, 0, 0)
