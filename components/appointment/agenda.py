"""Week and day selection for the agenda screen.

The time slots are only the options offered when booking. Nothing here, or
anywhere else, checks bookings for overlap.
"""

from datetime import date, timedelta
from typing import Any, Iterable, List

from components.report.engine import parse_date, week_start


def _time_slots() -> List[str]:
    slots = []
    for hour in range(7, 22):
        slots.append(f"{hour:02d}:00")
        slots.append(f"{hour:02d}:30")
    return slots


TIME_SLOTS = _time_slots()
DEFAULT_TIME = "09:00"


def week_window(current: date) -> List[date]:
    """The seven days, Sunday first, of the week containing ``current``."""
    start = week_start(current)
    return [start + timedelta(days=offset) for offset in range(7)]


def appointments_on(appointments: Iterable[Any], day: date) -> List[Any]:
    """Appointments on ``day`` ordered by their zero-padded ``HH:MM`` time."""
    selected = [appointment for appointment in appointments if parse_date(appointment.date) == day]
    return sorted(selected, key=lambda appointment: appointment.time or "")
