from datetime import datetime, timedelta

import pytest

from guardian_booking.core.context import BookingContext
from guardian_booking.stores.seed import build_demo_catalog, seed_demo_appointments

# Monday. Tomorrow is Tuesday 2026-01-06, the week started Sunday 2026-01-04.
MONDAY_MORNING = datetime(2026, 1, 5, 9, 0)


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(MONDAY_MORNING)


@pytest.fixture
def context(clock: FakeClock) -> BookingContext:
    return BookingContext(catalog=build_demo_catalog(), clock=clock)


@pytest.fixture
def seeded_context(context: BookingContext, clock: FakeClock) -> BookingContext:
    seed_demo_appointments(context.repository, clock())
    return context
