"""Date range derivation from archive fields and advanced from/to overrides."""

import calendar
import logging
from datetime import timezone
from typing import Any

from dateutil import parser as dateutil_parser

from .models import AdvancedFields, DateRange, SearchRequest

logger = logging.getLogger(__name__)

DAY_START = "00:00:00"
DAY_END = "23:59:59"


def _positive_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        value = int(str(value).strip())
    except ValueError:
        return None
    return value if value > 0 else None


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def parse_date(value: str | None) -> str | None:
    """
    Parse a free-form date, returning ``YYYY-MM-DD`` or None if unparseable.

    Timezone-aware values are converted to UTC before the day is taken.
    """
    if not value:
        return None
    try:
        parsed = dateutil_parser.parse(value)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Ignoring unparseable date: {value!r} - {e}")
        return None
    return f"{parsed.year:04d}-{parsed.month:02d}-{parsed.day:02d}"


class DateRangeResolver:
    """Derives the ``[start, end]`` window for a request."""

    def __init__(self, default_field: str = "post_date"):
        self.default_field = default_field

    def archive_range(self, request: SearchRequest) -> DateRange | None:
        """Range covering the requested year, month or day archive."""
        year = _positive_int(request.year)
        if year is None or year > 9999:
            return None

        month = _positive_int(request.month)
        if month is None or month > 12:
            return DateRange(start=f"{year:04d}-01-01 {DAY_START}", end=f"{year:04d}-12-31 {DAY_END}")

        last_day = days_in_month(year, month)
        prefix = f"{year:04d}-{month:02d}"

        day = _positive_int(request.day)
        if day is not None and day <= last_day:
            return DateRange(start=f"{prefix}-{day:02d} {DAY_START}", end=f"{prefix}-{day:02d} {DAY_END}")

        return DateRange(start=f"{prefix}-01 {DAY_START}", end=f"{prefix}-{last_day:02d} {DAY_END}")

    def resolve(self, request: SearchRequest, advanced: AdvancedFields | None = None) -> DateRange | None:
        """
        Resolve the date window for a request.

        Archive fields (year, month, day) produce the initial window. A valid
        ``from`` replaces the start and a valid ``to`` replaces the end;
        unparseable values leave the window untouched.

        Returns:
            DateRange, or None when neither archive fields nor valid
            from/to values were supplied
        """
        archive = self.archive_range(request)
        advanced = advanced or AdvancedFields()

        start = archive.start if archive else None
        end = archive.end if archive else None
        field = archive.field if archive else None

        date_from = parse_date(advanced.date_from)
        if date_from:
            start = f"{date_from} {DAY_START}"

        date_to = parse_date(advanced.date_to)
        if date_to:
            end = f"{date_to} {DAY_END}"

        if start is None and end is None:
            return None

        # Fixed-width format, so string order is chronological order
        if start and end and start > end:
            logger.debug(f"Swapping inverted date range {start} > {end}")
            start_day = start.split(" ")[0]
            end_day = end.split(" ")[0]
            start = f"{end_day} {DAY_START}"
            end = f"{start_day} {DAY_END}"

        return DateRange(start=start, end=end, field=field or self.default_field)
