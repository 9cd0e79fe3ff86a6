"""Wiring for the catalog, repository, rules and notifier used by one guardian."""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

from guardian_booking.core import config
from guardian_booking.rules.validation import AppointmentValidator
from guardian_booking.services.notifications import AppointmentNotifier
from guardian_booking.stores.appointments import AppointmentRepository
from guardian_booking.stores.catalog import CatalogStore
from guardian_booking.stores.seed import build_demo_catalog, seed_demo_appointments

if TYPE_CHECKING:
    from guardian_booking.rules.workflow import BookingFlow


class BookingContext:
    """Everything a booking flow needs, passed explicitly instead of shared globally.

    All collaborators read time from the same ``clock`` so tests can pin "now".
    """

    def __init__(
        self,
        catalog: CatalogStore,
        repository: AppointmentRepository | None = None,
        notifier: AppointmentNotifier | None = None,
        clock: Callable[[], datetime] = datetime.now,
        submission_delay_seconds: float = 0.0,
    ) -> None:
        self.catalog = catalog
        self.clock = clock
        self.repository = repository if repository is not None else AppointmentRepository(clock=clock)
        self.notifier = notifier if notifier is not None else AppointmentNotifier(clock=clock)
        self.submission_delay_seconds = submission_delay_seconds
        self.validator = AppointmentValidator(catalog, self.repository, clock=clock)
        self.active_flow: 'BookingFlow | None' = None


def build_context(clock: Callable[[], datetime] = datetime.now) -> BookingContext:
    context = BookingContext(
        catalog=build_demo_catalog(),
        clock=clock,
        submission_delay_seconds=config.SUBMISSION_DELAY_SECONDS,
    )
    if config.SEED_DEMO_DATA:
        seed_demo_appointments(context.repository, clock())
    return context


_context: BookingContext | None = None


def get_context() -> BookingContext:
    global _context

    if _context is None:
        _context = build_context()
    return _context
