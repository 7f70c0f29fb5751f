import calendar
import re

from elektron.errors import (
    DayOutOfRange,
    InvalidNumber,
    InvalidRegion,
    MonthOutOfRange,
    YearOutOfRange,
)
from elektron.schemas import DateRegionQuery, Region


MIN_YEAR = 2020
MAX_YEAR = 2030
REGIONS = tuple(region.value for region in Region)
DIGITS = re.compile(r"[+-]?[0-9]+")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def _parse_int(value: str) -> int:
    # ASCII digits only, int() alone also takes underscores and other scripts
    if not isinstance(value, str) or not DIGITS.fullmatch(value.strip()):
        raise InvalidNumber("År, måned og dag må være gyldige tall")
    return int(value.strip(), 10)


def validate_query(year: str, month: str, day: str, region: str) -> DateRegionQuery:
    """Turn raw path parameters into a DateRegionQuery.

    Raises a ValidationError subclass for the first rule that fails:
    number parsing, year range, month range, day range for that month,
    then region.
    """
    year_num = _parse_int(year)
    month_num = _parse_int(month)
    day_num = _parse_int(day)

    if year_num < MIN_YEAR or year_num > MAX_YEAR:
        raise YearOutOfRange(f"År må være mellom {MIN_YEAR} og {MAX_YEAR}")
    if month_num < 1 or month_num > 12:
        raise MonthOutOfRange("Måned må være mellom 1 og 12")

    last_day = days_in_month(year_num, month_num)
    if day_num < 1 or day_num > last_day:
        raise DayOutOfRange(f"Dag må være mellom 1 og {last_day}")

    if region not in REGIONS:
        raise InvalidRegion("Region må være NO1-NO5")

    return DateRegionQuery(year=year_num, month=month_num, day=day_num, region=Region(region))
