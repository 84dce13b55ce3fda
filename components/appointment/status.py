"""Appointment status lifecycle."""

from enum import Enum
from typing import Dict, FrozenSet, Optional

from components.core.exceptions import InvalidStatusTransition


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELED = "canceled"


INITIAL_STATUS = AppointmentStatus.SCHEDULED

# Forward step offered by the agenda for each status
NEXT_STATUS: Dict[AppointmentStatus, AppointmentStatus] = {
    AppointmentStatus.SCHEDULED: AppointmentStatus.CONFIRMED,
    AppointmentStatus.CONFIRMED: AppointmentStatus.COMPLETED,
}

TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset({AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELED}),
    AppointmentStatus.CONFIRMED: frozenset({AppointmentStatus.COMPLETED, AppointmentStatus.CANCELED}),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELED: frozenset(),
}


def is_terminal(status: AppointmentStatus) -> bool:
    return not TRANSITIONS[AppointmentStatus(status)]


def can_transition(current: AppointmentStatus, target: AppointmentStatus) -> bool:
    return AppointmentStatus(target) in TRANSITIONS[AppointmentStatus(current)]


def next_status(current: AppointmentStatus) -> Optional[AppointmentStatus]:
    """Forward step from ``current``, or None once completed or canceled."""
    return NEXT_STATUS.get(AppointmentStatus(current))


def check_transition(current: AppointmentStatus, target: AppointmentStatus) -> AppointmentStatus:
    """Return ``target`` if reachable from ``current``, otherwise raise."""
    if not can_transition(current, target):
        raise InvalidStatusTransition(
            f"Cannot change appointment status from {AppointmentStatus(current).value} "
            f"to {AppointmentStatus(target).value}"
        )
    return AppointmentStatus(target)
