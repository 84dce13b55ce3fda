"""
Quota and aggregation functions behind the dashboard, agenda, financial and
report screens.

Every function here is pure: it takes an already-fetched snapshot of records
(ORM rows or schema objects, read by attribute) plus an explicit reference
date or month, and never touches the database. Records whose date is missing
or malformed are left out of any date-based computation. Money is summed as
``Decimal``.
"""

import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from components.account.policy import (
    Plan,
    QUOTA_WARNING_PERCENTAGE,
    monthly_quota,
    normalize_plan,
)
from components.core.exceptions import ValidationFailed

MONEY = Decimal("0.01")
ONE_DECIMAL = Decimal("0.1")
ZERO = Decimal("0")

STATUSES = ("scheduled", "confirmed", "completed", "canceled")
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
PERIOD_PRESETS = ("week", "month", "quarter", "year")


def parse_date(value: Any) -> Optional[date]:
    """Calendar date of a stored value, or None when missing or malformed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def month_key(value: Any) -> Optional[str]:
    """``YYYY-MM`` of a stored date value."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}"


def parse_month(month: str) -> Tuple[int, int]:
    """Split a ``YYYY-MM`` key into year and month."""
    try:
        year, number = (int(part) for part in month.split("-"))
    except (AttributeError, ValueError):
        raise ValidationFailed(f"Invalid month: {month}. Expected YYYY-MM")
    if not 1 <= number <= 12:
        raise ValidationFailed(f"Invalid month: {month}. Expected YYYY-MM")
    return year, number


def shift_month(month: str, delta: int) -> str:
    """Month key ``delta`` months after (or before, if negative) ``month``."""
    year, number = parse_month(month)
    index = year * 12 + (number - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def months_ago(day: date, months: int) -> date:
    """Same day ``months`` months earlier, clamped to the month's length."""
    year, number = parse_month(shift_month(month_key(day), -months))
    last_day = calendar.monthrange(year, number)[1]
    return date(year, number, min(day.day, last_day))


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def to_money(value: Any) -> Decimal:
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return ZERO


def _value(record: Any, field: str) -> Optional[str]:
    raw = getattr(record, field, None)
    return getattr(raw, "value", raw)


def _sum(values: Iterable[Any]) -> Decimal:
    total = ZERO
    for value in values:
        total += to_money(value)
    return total


def in_month(records: Iterable[Any], month: str) -> List[Any]:
    return [record for record in records if month_key(record.date) == month]


def filter_period(records: Iterable[Any], start: date, end: date) -> List[Any]:
    """Records dated between ``start`` and ``end`` inclusive."""
    selected = []
    for record in records:
        day = parse_date(record.date)
        if day is not None and start <= day <= end:
            selected.append(record)
    return selected


def period_bounds(preset: str, today: date) -> Tuple[date, date]:
    """Date range of a report period preset relative to ``today``."""
    if preset == "week":
        start = week_start(today)
        return start, start + timedelta(days=6)
    if preset == "month":
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)
    if preset == "quarter":
        return months_ago(today, 3), today
    if preset == "year":
        return months_ago(today, 12), today
    raise ValidationFailed(f"Unknown period: {preset}. Expected one of {', '.join(PERIOD_PRESETS)}")


# Quota

def count_in_month(appointments: Iterable[Any], month: str) -> int:
    """Appointments dated in ``month``, whatever their status."""
    return sum(1 for appointment in appointments if month_key(appointment.date) == month)


def quota_reached(plan: Any, count: int) -> bool:
    quota = monthly_quota(plan)
    return quota is not None and count >= quota


def monthly_usage(account: Any, appointments: Iterable[Any], month: str) -> int:
    """
    Appointments used in ``month``.

    The account's cached counter is trusted only while its reference month is
    ``month``; otherwise the count is recomputed from the snapshot.
    """
    cached = getattr(account, "appointments_this_month", None)
    if getattr(account, "reference_month", None) == month and cached is not None:
        return cached
    return count_in_month(appointments, month)


def usage_percentage(plan: Any, used: int) -> Decimal:
    """Share of the monthly quota used, 0 for unlimited plans."""
    quota = monthly_quota(plan)
    if not quota:
        return ZERO
    return (Decimal(used) * 100 / quota).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def near_quota(plan: Any, used: int) -> bool:
    quota = monthly_quota(plan)
    return quota is not None and used * 100 >= QUOTA_WARNING_PERCENTAGE * quota


# Appointment aggregates

def todays_appointments(appointments: Iterable[Any], today: date) -> List[Any]:
    """Appointments on ``today`` that are not canceled, in input order."""
    return [
        appointment for appointment in appointments
        if parse_date(appointment.date) == today and _value(appointment, "status") != "canceled"
    ]


def completed(appointments: Iterable[Any]) -> List[Any]:
    return [appointment for appointment in appointments if _value(appointment, "status") == "completed"]


def completion_rate(appointments: Sequence[Any]) -> Decimal:
    """Percentage of completed appointments, one decimal place."""
    total = len(appointments)
    if total == 0:
        return ZERO
    rate = Decimal(len(completed(appointments))) * 100 / total
    return rate.quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP)


def average_ticket(appointments: Iterable[Any]) -> Decimal:
    """Mean snapshotted value of completed appointments."""
    done = completed(appointments)
    if not done:
        return ZERO
    total = _sum(appointment.value for appointment in done)
    return (total / len(done)).quantize(MONEY, rounding=ROUND_HALF_UP)


def group_by_weekday(appointments: Iterable[Any]) -> List[int]:
    """Appointment counts indexed Sunday..Saturday."""
    buckets = [0] * 7
    for appointment in appointments:
        day = parse_date(appointment.date)
        if day is not None:
            buckets[(day.weekday() + 1) % 7] += 1
    return buckets


def group_by_status(appointments: Iterable[Any]) -> Dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    for appointment in appointments:
        status = _value(appointment, "status")
        if status in counts:
            counts[status] += 1
    return counts


def top_n(appointments: Iterable[Any], n: int) -> List[Tuple[str, int]]:
    """Most booked services; ties keep first-seen order."""
    counts: Dict[str, int] = {}
    for appointment in appointments:
        name = appointment.service_name
        if name:
            counts[name] = counts.get(name, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:n]


# Transaction aggregates

def sum_transactions(transactions: Iterable[Any], kind: str) -> Decimal:
    return _sum(
        transaction.amount for transaction in transactions
        if _value(transaction, "type") == kind
    )


def balance(transactions: Sequence[Any]) -> Decimal:
    return sum_transactions(transactions, "income") - sum_transactions(transactions, "expense")


def group_by_category(transactions: Iterable[Any], kind: str) -> Dict[str, Decimal]:
    """Amount per category for one transaction type; absent categories omitted."""
    totals: Dict[str, Decimal] = {}
    for transaction in transactions:
        if _value(transaction, "type") != kind:
            continue
        category = _value(transaction, "category") or "other"
        totals[category] = totals.get(category, ZERO) + to_money(transaction.amount)
    return totals


def revenue_for_month(plan: Any, appointments: Iterable[Any], transactions: Iterable[Any], month: str) -> Decimal:
    """
    Month revenue as each plan sees it.

    Premium accounts keep a ledger, so revenue is their income transactions.
    Everyone else gets the value of completed appointments.
    """
    if normalize_plan(plan) == Plan.PREMIUM:
        return sum_transactions(in_month(transactions, month), "income")
    return _sum(appointment.value for appointment in completed(in_month(appointments, month)))


def monthly_trend(
    appointments: Sequence[Any],
    transactions: Sequence[Any],
    months_back: int,
    today: date,
) -> List[Dict[str, Any]]:
    """One zero-filled entry per month from ``months_back`` months ago to now."""
    counts: Dict[str, int] = {}
    for appointment in appointments:
        key = month_key(appointment.date)
        if key is not None:
            counts[key] = counts.get(key, 0) + 1

    income: Dict[str, Decimal] = {}
    expense: Dict[str, Decimal] = {}
    for transaction in transactions:
        key = month_key(transaction.date)
        kind = _value(transaction, "type")
        target = income if kind == "income" else expense if kind == "expense" else None
        if key is not None and target is not None:
            target[key] = target.get(key, ZERO) + to_money(transaction.amount)

    current = month_key(today)
    trend = []
    for offset in range(months_back, -1, -1):
        key = shift_month(current, -offset)
        trend.append({
            "month": key,
            "appointment_count": counts.get(key, 0),
            "income": income.get(key, ZERO),
            "expense": expense.get(key, ZERO),
        })
    return trend
