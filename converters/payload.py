"""
Generic payload converter: reads/writes an untyped JSON value tree
(dicts, lists, scalars) token by token.

Reading is tolerant: an unterminated object or array yields None for the
whole construct, null array elements are skipped, and date tokens become
sortable ISO strings (YYYY-MM-DDTHH:MM:SS). Writing None emits nothing, so a
tree is not guaranteed to survive write -> read unchanged; read -> write -> read
is stable.
"""
from collections.abc import Iterator, Mapping, Sequence, Set
from datetime import date, datetime
from typing import Any, get_args, get_origin

from converters.base import JsonConverter
from serialization.reader import JsonReader
from serialization.tokens import JsonToken
from serialization.writer import JsonWriter

SORTABLE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_SCALAR_TOKENS = (
    JsonToken.INTEGER,
    JsonToken.FLOAT,
    JsonToken.STRING,
    JsonToken.BOOLEAN,
    JsonToken.UNDEFINED,
    JsonToken.NULL,
    JsonToken.BYTES,
)


class JsonPayloadConverter(JsonConverter):
    def can_convert(self, object_type: Any) -> bool:
        """Untyped mappings only: dict, Mapping, dict[str, Any] / dict[str, object]."""
        origin = get_origin(object_type) or object_type
        if not isinstance(origin, type) or not issubclass(origin, Mapping):
            return False
        args = get_args(object_type)
        return not args or args[-1] in (Any, object)

    def read_json(self, reader: JsonReader, object_type: Any, serializer=None) -> Any:
        return self.read_value(reader)

    def write_json(self, writer: JsonWriter, value: Any, serializer=None) -> None:
        self.write_value(writer, value)

    def read_value(self, reader: JsonReader) -> Any:
        while reader.token_type is JsonToken.COMMENT:
            if not reader.read():
                return None

        token = reader.token_type
        if token is JsonToken.START_OBJECT:
            return self._read_object(reader)
        if token is JsonToken.START_ARRAY:
            return self._read_array(reader)
        if token is JsonToken.DATE:
            value = reader.value
            return value.strftime(SORTABLE_DATE_FORMAT) if isinstance(value, (datetime, date)) else ""
        if token in _SCALAR_TOKENS:
            return reader.value
        return None

    def _read_object(self, reader: JsonReader) -> dict[str, Any] | None:
        obj: dict[str, Any] = {}
        while reader.read():
            token = reader.token_type
            if token is JsonToken.PROPERTY_NAME:
                if reader.value is None:
                    continue
                name = str(reader.value)
                if not reader.read():
                    return None
                obj[name] = self.read_value(reader)
            elif token is JsonToken.COMMENT:
                continue
            elif token is JsonToken.END_OBJECT:
                return obj
            else:
                return None
        return None

    def _read_array(self, reader: JsonReader) -> list[Any] | None:
        items: list[Any] = []
        while reader.read():
            token = reader.token_type
            if token is JsonToken.COMMENT:
                continue
            if token is JsonToken.END_ARRAY:
                return items
            value = self.read_value(reader)
            if value is None:
                continue
            items.append(value)
        return None

    def write_value(self, writer: JsonWriter, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            self._write_object(writer, value)
        elif _is_array(value):
            self._write_array(writer, value)
        else:
            writer.write_value(value)

    def _write_object(self, writer: JsonWriter, value: Mapping) -> None:
        writer.write_start_object()
        for key, item in value.items():
            writer.write_property_name(str(key))
            self.write_value(writer, item)
        writer.write_end_object()

    def _write_array(self, writer: JsonWriter, value: Any) -> None:
        writer.write_start_array()
        try:
            items = iter(value)
        except TypeError:
            # array-like but not iterable (e.g. a 0-d numpy array)
            items = iter(())
        for item in items:
            self.write_value(writer, item)
        writer.write_end_array()


def _is_array(value: Any) -> bool:
    if isinstance(value, (str, bytes, bytearray)):
        return False
    return isinstance(value, (Sequence, Set, Iterator)) or hasattr(value, "__array__")
