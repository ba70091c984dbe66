"""Date helpers for week-based aggregation."""

from datetime import date, datetime, timedelta
from typing import List, Optional, Union

DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[str, date, datetime]


def parse_date(value: DateLike) -> date:
    """Parse a canonical YYYY-MM-DD string (or date/datetime) into a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value.strip(), DATE_FORMAT).date()


def format_date(value: DateLike) -> str:
    """Format a date as YYYY-MM-DD."""
    return parse_date(value).strftime(DATE_FORMAT)


def week_start_of(value: DateLike) -> date:
    """Return the Monday of the week containing the given date."""
    day = parse_date(value)
    return day - timedelta(days=day.weekday())


def dates_between(start: DateLike, end: DateLike) -> List[str]:
    """Every date from start to end inclusive, ascending, as YYYY-MM-DD strings."""
    first = parse_date(start)
    last = parse_date(end)
    return [
        format_date(first + timedelta(days=offset))
        for offset in range((last - first).days + 1)
    ]


def week_dates(week_start: DateLike) -> List[str]:
    """The 7 dates Monday through Sunday of the week starting at week_start."""
    start = parse_date(week_start)
    return dates_between(start, start + timedelta(days=6))


def previous_week_start(week_start: DateLike) -> str:
    """The Monday one week before the given week start."""
    return format_date(parse_date(week_start) - timedelta(weeks=1))


def doc_id(user_id: str, day: Optional[DateLike]) -> str:
    """Deterministic per-user, per-date document id."""
    return f"{user_id}_{format_date(day)}"
