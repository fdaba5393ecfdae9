"""JSON log line parser — frozen dataclasses with a silent fallback for plain text."""

import json
from dataclasses import dataclass, field
from typing import Any

from logpretty.reader import ENCODING, ERRORS

# JSON key -> LogRecord attribute
RECOGNIZED_FIELDS = {
    "ts": "timestamp",
    "level": "level",
    "component": "component",
    "subcomponent": "subcomponent",
    "msg": "message",
}


@dataclass(frozen=True)
class LogRecord:
    timestamp: str = ""
    level: str = ""
    component: str = ""
    subcomponent: str = ""
    message: str = ""
    extra_fields: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Unstructured:
    raw: str


def _reject_constant(name: str):
    # NaN / Infinity are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def _encodable(decoded: Any) -> bool:
    """False if any key or string holds a surrogate the output codec can't write."""
    pending = [decoded]
    while pending:
        value = pending.pop()
        if isinstance(value, dict):
            pending.extend(value.keys())
            pending.extend(value.values())
        elif isinstance(value, list):
            pending.extend(value)
        elif isinstance(value, str):
            try:
                value.encode(ENCODING, ERRORS)
            except UnicodeEncodeError:
                return False
    return True


def parse_line(raw: str) -> LogRecord | Unstructured:
    """Parse a single line into a LogRecord, or Unstructured if it isn't a JSON object."""
    try:
        decoded = json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return Unstructured(raw)

    if not isinstance(decoded, dict) or not _encodable(decoded):
        return Unstructured(raw)

    recognized = {}
    extra_fields = {}
    for key, value in decoded.items():
        attr = RECOGNIZED_FIELDS.get(key)
        if attr is None:
            extra_fields[key] = value
        elif isinstance(value, str):
            recognized[attr] = value

    return LogRecord(extra_fields=extra_fields, **recognized)
