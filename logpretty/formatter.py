"""Line renderer — turns one raw log line into the fixed human-readable layout."""

import json
import logging
from typing import Any

from logpretty.colors import RESET, ColorPalette, colorize
from logpretty.parser import LogRecord, Unstructured, parse_line
from logpretty.timestamp import TimestampFormatError, format_timestamp

logger = logging.getLogger(__name__)

LEVEL_WIDTH = 5
COMPONENT_WIDTH = 3
SUBCOMPONENT_WIDTH = 6

ABORT = "abort"
PASSTHROUGH = "passthrough"
BAD_TIMESTAMP_POLICIES = (ABORT, PASSTHROUGH)


def format_value(value: Any) -> str:
    """Render an extra-field value as a compact JSON literal."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def colored_level(level: str, palette: ColorPalette | None) -> str:
    """Pad the level to at least five columns and wrap it in its category color.

    With colors on, unknown levels get no color but still end in a reset.
    """
    padded = level.ljust(LEVEL_WIDTH)
    if palette is None:
        return padded
    return f"{palette.for_level(level) or ''}{padded}{RESET}"


def colored_key(key: str, palette: ColorPalette | None) -> str:
    return colorize(key, palette.key if palette is not None else None)


def format_record(record: LogRecord, palette: ColorPalette | None = None, concise: bool = False) -> str:
    """Lay out a parsed record: timestamp, level, component[-sub], message, extras.

    Raises TimestampFormatError when the record's ts isn't RFC 3339.
    """
    ts = format_timestamp(record.timestamp)
    subcomponent = f"-{record.subcomponent}" if record.subcomponent else ""
    message = record.message.replace("\r", " ")

    line = (
        f"{ts} {colored_level(record.level, palette)} "
        f"{record.component:<{COMPONENT_WIDTH}}{subcomponent:<{SUBCOMPONENT_WIDTH}} {message}"
    )

    if concise:
        return line

    extras = "".join(
        f" {colored_key(key, palette)}:{format_value(value)}"
        for key, value in record.extra_fields.items()
    )
    return line + extras


def render_line(raw: str, palette: ColorPalette | None = None, concise: bool = False) -> str:
    """Render one input line; anything that isn't a JSON object comes back unchanged."""
    parsed = parse_line(raw)
    if isinstance(parsed, Unstructured):
        return parsed.raw
    return format_record(parsed, palette, concise)


class LineRenderer:
    """Long-lived renderer holding the palette, concise flag and bad-timestamp policy."""

    def __init__(self, palette: ColorPalette | None = None, concise: bool = False,
                 on_bad_timestamp: str = ABORT):
        if on_bad_timestamp not in BAD_TIMESTAMP_POLICIES:
            raise ValueError(f"Invalid bad-timestamp policy: '{on_bad_timestamp}'")
        self.palette = palette
        self.concise = concise
        self.on_bad_timestamp = on_bad_timestamp

    def render(self, raw: str) -> str:
        try:
            return render_line(raw, self.palette, self.concise)
        except TimestampFormatError as exc:
            if self.on_bad_timestamp == ABORT:
                raise
            logger.warning("%s, passing line through unchanged", exc)
            return raw
