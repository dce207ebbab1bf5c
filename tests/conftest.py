from __future__ import annotations

from datetime import datetime, timezone

import pytest

from salon_booking.core.config import Settings
from salon_booking.wiring.dependencies import Container, build_container


class FrozenClock:
    """Callable clock the tests can move by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def set(self, now: datetime) -> None:
        self.now = now


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        ENV="test",
        BUSINESS_TIMEZONE="UTC",
        STORE_PROVIDER="memory",
        DATA_DIR=str(tmp_path),
        SEED_DEFAULT_SCHEDULES=True,
    )


@pytest.fixture
def clock() -> FrozenClock:
    # Monday 2024-06-03 09:00 UTC, one week before the dates the tests book
    return FrozenClock(utc(2024, 6, 3, 9, 0))


@pytest.fixture
def container(test_settings: Settings, clock: FrozenClock) -> Container:
    return build_container(test_settings, clock=clock)
