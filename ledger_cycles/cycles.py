"""Billing-cycle resolution and calendar arithmetic.

Every function here is pure. Card closing days are caller-validated
integers in 1..31; nothing is clamped to the length of a short month
when resolving a cycle, while :func:`cycle_bounds` lets out-of-range
days roll over on the calendar (day 0 is the last day of the previous
month, day 31 of a 30-day month is the 1st of the next).
"""

from datetime import date, datetime, timedelta

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from ledger_cycles.exceptions import MalformedDateError
from ledger_cycles.models.base import Cycle, CycleBounds

NOON = 12


def normalize_date(value: date | datetime | str, hour: int = NOON) -> datetime:
    """Pin a calendar date to a fixed time of day.

    Parameters
    ----------
    value : date | datetime | str
        A date, a datetime (naive or aware) or an ISO 8601 string.
    hour : int
        Hour of day to pin the result to.

    Returns
    -------
    datetime
        Naive datetime on the same calendar day at ``hour:00``.

    Raises
    ------
    MalformedDateError
        If a string value cannot be parsed.
    """
    if isinstance(value, str):
        try:
            value = isoparse(value.strip())
        except (ValueError, OverflowError) as exc:
            raise MalformedDateError(f"Unparseable date: {value!r}") from exc

    if isinstance(value, datetime):
        day = value.date()
    elif isinstance(value, date):
        day = value
    else:
        raise MalformedDateError(f"Unsupported date value: {value!r}")

    return datetime(day.year, day.month, day.day, hour)


def add_months(value: datetime, months: int) -> datetime:
    """Advance ``value`` by whole calendar months.

    Day-of-month is clamped to the target month's last day, so
    2024-01-31 + 1 month is 2024-02-29 and never spills into March.
    """
    return value + relativedelta(months=months)


def calendar_date(year: int, month: int, day: int) -> date:
    """Build a date letting month and day overflow roll over the calendar."""
    year_offset, month_index = divmod(month - 1, 12)
    first = date(year + year_offset, month_index + 1, 1)
    return first + timedelta(days=day - 1)


def resolve_cycle(value: date, closing_day: int) -> Cycle:
    """Return the billing cycle a dated entry belongs to.

    A purchase made after the statement closes lands on the following
    month's invoice; anything up to and including the closing day stays
    in its own month.
    """
    cycle = Cycle.of(value)
    if value.day > closing_day:
        return cycle.next()
    return cycle


def cycle_bounds(target_month: int, target_year: int, closing_day: int) -> CycleBounds:
    """Inclusive date window of the invoice closing in ``target_month``.

    ``start`` is ``closing_day`` of the previous month and ``end`` is
    ``closing_day - 1`` of the target month.
    """
    start = calendar_date(target_year, target_month - 1, closing_day)
    end = calendar_date(target_year, target_month, closing_day - 1)
    return CycleBounds(start=start, end=end)


def in_calendar_month(value: date, month: int, year: int) -> bool:
    """Check whether a date falls in the given calendar month."""
    return value.month == month and value.year == year
