"""
JSON token kinds and a walker that turns a decoded builtin tree into tokens.

A token is a `(JsonToken, value)` pair. Structural tokens carry `None`,
PROPERTY_NAME carries the key, scalars carry their Python value.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterator, Tuple

Token = Tuple["JsonToken", Any]

_ISO_DATETIME = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{1,6})?(Z|[+-]\d{2}:\d{2})?$"
)


class JsonToken(Enum):
    NONE = "none"
    START_OBJECT = "start_object"
    PROPERTY_NAME = "property_name"
    END_OBJECT = "end_object"
    START_ARRAY = "start_array"
    END_ARRAY = "end_array"
    COMMENT = "comment"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"
    DATE = "date"
    BYTES = "bytes"

    @property
    def is_start(self) -> bool:
        return self in (JsonToken.START_OBJECT, JsonToken.START_ARRAY)


def parse_iso_datetime(value: str) -> datetime | None:
    """Return a datetime for ISO-8601 date-time strings (YYYY-MM-DDTHH:MM:SS...), else None."""
    if not _ISO_DATETIME.match(value):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def scalar_token(value: Any, parse_dates: bool = False) -> Token:
    """Classify a single builtin scalar."""
    if value is None:
        return JsonToken.NULL, None
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return JsonToken.BOOLEAN, value
    if isinstance(value, int):
        return JsonToken.INTEGER, value
    if isinstance(value, float):
        return JsonToken.FLOAT, value
    if isinstance(value, (datetime, date)):
        return JsonToken.DATE, value
    if isinstance(value, (bytes, bytearray)):
        return JsonToken.BYTES, bytes(value)
    if isinstance(value, str):
        if parse_dates:
            parsed = parse_iso_datetime(value)
            if parsed is not None:
                return JsonToken.DATE, parsed
        return JsonToken.STRING, value
    return JsonToken.STRING, str(value)


def iter_tokens(obj: Any, parse_dates: bool = False) -> Iterator[Token]:
    """Walk a decoded tree (json / yaml output) depth-first, yielding tokens."""
    if isinstance(obj, dict):
        yield JsonToken.START_OBJECT, None
        for key, value in obj.items():
            yield JsonToken.PROPERTY_NAME, str(key)
            yield from iter_tokens(value, parse_dates)
        yield JsonToken.END_OBJECT, None
    elif isinstance(obj, (list, tuple, set, frozenset)):
        yield JsonToken.START_ARRAY, None
        for item in obj:
            yield from iter_tokens(item, parse_dates)
        yield JsonToken.END_ARRAY, None
    else:
        yield scalar_token(obj, parse_dates)
