"""RFC 3339 timestamp parsing and the fixed microsecond display format."""

import re
from datetime import datetime, timedelta, timezone

RFC3339_PATTERN = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))\Z",
    re.ASCII,
)

DISPLAY_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


class TimestampFormatError(ValueError):
    """Raised when a structured line's timestamp is not valid RFC 3339."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid RFC 3339 timestamp: {value!r}")


def parse_rfc3339(value: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping the wall-clock time of its own offset.

    Fractional seconds may have any number of digits; anything past
    microseconds is truncated. A leap second (:60) is clamped to :59.
    """
    match = RFC3339_PATTERN.match(value)
    if not match:
        raise TimestampFormatError(value)

    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = match.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    if off_m is not None and int(off_m) > 59:
        raise TimestampFormatError(value)
    # datetime has no leap seconds
    if second == "60":
        second = "59"

    try:
        if zulu:
            tz = timezone.utc
        else:
            offset = timedelta(hours=int(off_h), minutes=int(off_m))
            tz = timezone(-offset if sign == "-" else offset)
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second),
            microsecond, tzinfo=tz,
        )
    except ValueError as exc:
        raise TimestampFormatError(value) from exc


def format_timestamp(value: str) -> str:
    """Reformat an RFC 3339 string as YYYY-MM-DD HH:MM:SS.ffffff."""
    return parse_rfc3339(value).strftime(DISPLAY_FORMAT)
