"""Week bucketing helpers.

Every meal date belongs to exactly one Monday..Sunday week. The week is
identified by ``week_<monday>_to_<sunday>`` and that key is the only thing
used to decide which JSON file holds a date's meals.
"""
from datetime import date, datetime, timedelta
from typing import Union

from mealog.utilities.config import DATE_FORMAT, TIME_FORMATS
from mealog.utilities.errors import ValidationError

DateLike = Union[date, datetime, str]


def parse_date(value: DateLike) -> date:
    """Accept a date, a datetime, ``YYYY-MM-DD`` or a full ISO-8601 timestamp."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Invalid date: {value!r}")
    text = value.strip()
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        # fromisoformat on older interpreters rejects the trailing 'Z'
        return datetime.fromisoformat(text.replace('Z', '+00:00')).date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from None


def start_of_week(value: DateLike) -> date:
    d = parse_date(value)
    # weekday(): Monday=0 .. Sunday=6, so Sunday goes back six days
    return d - timedelta(days=d.weekday())


def end_of_week(value: DateLike) -> date:
    return start_of_week(value) + timedelta(days=6)


def format_date(value: DateLike) -> str:
    return parse_date(value).strftime(DATE_FORMAT)


def week_bucket_key(value: DateLike) -> str:
    """Storage key of the week containing ``value``, e.g. ``week_2024-06-10_to_2024-06-16``."""
    return f"week_{format_date(start_of_week(value))}_to_{format_date(end_of_week(value))}"


def week_file_name(value: DateLike) -> str:
    return f"{week_bucket_key(value)}.json"


def same_week(a: DateLike, b: DateLike) -> bool:
    return start_of_week(a) == start_of_week(b)


def meal_timestamp(date_str: str, time_str: str) -> int:
    """Epoch milliseconds of ``date_str`` + ``time_str`` in local time."""
    day = parse_date(date_str)
    if not isinstance(time_str, str):
        raise ValidationError(f"Invalid time: {time_str!r}")
    for fmt in TIME_FORMATS:
        try:
            t = datetime.strptime(time_str.strip(), fmt).time()
            break
        except ValueError:
            continue
    else:
        raise ValidationError(f"Invalid time (expected HH:MM): {time_str!r}")
    return int(datetime.combine(day, t).timestamp() * 1000)


__all__ = [
    'parse_date', 'start_of_week', 'end_of_week', 'format_date',
    'week_bucket_key', 'week_file_name', 'same_week', 'meal_timestamp',
]
