from datetime import date
from types import SimpleNamespace

import pytest

from components.appointment.agenda import DEFAULT_TIME, TIME_SLOTS, appointments_on, week_window
from components.appointment.status import (
    AppointmentStatus,
    INITIAL_STATUS,
    can_transition,
    check_transition,
    is_terminal,
    next_status,
)
from components.core.exceptions import InvalidStatusTransition


def test_time_slots_cover_half_hours_from_seven_to_half_past_nine():
    assert len(TIME_SLOTS) == 30
    assert TIME_SLOTS[0] == "07:00"
    assert TIME_SLOTS[-1] == "21:30"
    assert DEFAULT_TIME in TIME_SLOTS


def test_week_window_starts_on_sunday():
    days = week_window(date(2024, 5, 15))
    assert days[0] == date(2024, 5, 12)
    assert days[-1] == date(2024, 5, 18)
    assert len(days) == 7


def test_week_window_on_a_sunday_starts_that_day():
    assert week_window(date(2024, 5, 12))[0] == date(2024, 5, 12)


def test_appointments_on_orders_by_time():
    records = [
        SimpleNamespace(date="2024-05-15", time="14:30"),
        SimpleNamespace(date="2024-05-16", time="07:00"),
        SimpleNamespace(date=date(2024, 5, 15), time="08:00"),
        SimpleNamespace(date="2024-05-15", time="09:00"),
    ]
    selected = appointments_on(records, date(2024, 5, 15))
    assert [r.time for r in selected] == ["08:00", "09:00", "14:30"]


def test_new_appointments_start_scheduled():
    assert INITIAL_STATUS == AppointmentStatus.SCHEDULED


def test_forward_steps():
    assert next_status("scheduled") == AppointmentStatus.CONFIRMED
    assert next_status("confirmed") == AppointmentStatus.COMPLETED
    assert next_status("completed") is None
    assert next_status("canceled") is None


@pytest.mark.parametrize("current", ["scheduled", "confirmed"])
def test_open_appointments_can_be_canceled(current):
    assert can_transition(current, "canceled")
    assert check_transition(current, "canceled") == AppointmentStatus.CANCELED


@pytest.mark.parametrize("current", ["completed", "canceled"])
def test_terminal_statuses_have_no_way_out(current):
    assert is_terminal(current)
    for target in AppointmentStatus:
        with pytest.raises(InvalidStatusTransition):
            check_transition(current, target)


def test_cannot_skip_confirmation():
    assert not can_transition("scheduled", "completed")
    with pytest.raises(InvalidStatusTransition):
        check_transition("scheduled", "completed")
