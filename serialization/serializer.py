"""
Typed JSON serializer. Converters registered on an instance take over the
types they claim (first match wins); everything else is handled here:
dataclasses field by field, lists/tuples/sets, dict[str, T], Optional[T],
enums and plain scalars.

The same token path serves JSON text (JsonReader.from_text / JsonTextWriter)
and YAML (JsonReader.from_value / ValueTreeWriter over yaml.safe_load/dump output).
"""
from __future__ import annotations

import base64
import logging
import types
from collections.abc import Mapping
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Union, get_args, get_origin, get_type_hints

from converters.address import IpAddressConverter
from converters.base import JsonConverter
from converters.endpoint import EndpointConverter
from converters.payload import JsonPayloadConverter
from serialization.naming import NamingConvention, get_naming_convention
from serialization.reader import JsonReader
from serialization.tokens import JsonToken
from serialization.writer import JsonTextWriter, JsonWriter, ValueTreeWriter

logger = logging.getLogger("file_data")

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def default_converters() -> list[JsonConverter]:
    return [EndpointConverter(), IpAddressConverter()]


def payload_converters() -> list[JsonConverter]:
    """Defaults plus the untyped payload converter for dict[str, Any] values."""
    return [JsonPayloadConverter(), *default_converters()]


class JsonSerializer:
    def __init__(
        self,
        converters: Iterable[JsonConverter] | None = None,
        naming_convention: str | NamingConvention | None = None,
        parse_dates: bool = False,
    ):
        self.converters: list[JsonConverter] = (
            list(converters) if converters is not None else default_converters()
        )
        self.naming_convention = get_naming_convention(naming_convention)
        self.parse_dates = parse_dates

    def with_naming(self, naming_convention: str | NamingConvention | None) -> "JsonSerializer":
        """Copy sharing this serializer's converters, with a different key naming convention."""
        return JsonSerializer(self.converters, naming_convention, self.parse_dates)

    def find_converter(self, object_type: Any) -> JsonConverter | None:
        for converter in self.converters:
            if converter.can_convert(object_type):
                return converter
        return None

    # ---- writing ----

    def serialize(self, writer: JsonWriter, value: Any) -> None:
        if value is None:
            writer.write_null()
            return

        converter = self.find_converter(type(value))
        if converter is not None:
            converter.write_json(writer, value, self)
        elif is_dataclass(value) and not isinstance(value, type):
            writer.write_start_object()
            for f in fields(value):
                writer.write_property_name(self.naming_convention(f.name))
                self.serialize(writer, getattr(value, f.name))
            writer.write_end_object()
        elif isinstance(value, Mapping):
            writer.write_start_object()
            for key, item in value.items():
                writer.write_property_name(str(key))
                self.serialize(writer, item)
            writer.write_end_object()
        elif isinstance(value, _SEQUENCE_TYPES):
            writer.write_start_array()
            for item in value:
                self.serialize(writer, item)
            writer.write_end_array()
        else:
            writer.write_value(value)

    def to_text(self, value: Any, indent: int | None = 2) -> str:
        writer = JsonTextWriter(indent=indent)
        self.serialize(writer, value)
        return writer.getvalue()

    def to_value(self, value: Any) -> Any:
        """Serialize into a builtin tree (dicts, lists, scalars), e.g. for yaml.safe_dump."""
        writer = ValueTreeWriter()
        self.serialize(writer, value)
        return writer.result

    # ---- reading ----

    def deserialize(self, reader: JsonReader, target_type: Any = None) -> Any:
        """Read one value of `target_type` (None: untyped builtin tree) from `reader`."""
        if reader.token_type is JsonToken.NONE and not reader.read():
            return None
        return self._read(reader, target_type)

    def from_text(self, text: str, target_type: Any = None) -> Any:
        return self.deserialize(JsonReader.from_text(text, parse_dates=self.parse_dates), target_type)

    def from_value(self, obj: Any, target_type: Any = None) -> Any:
        return self.deserialize(JsonReader.from_value(obj, parse_dates=self.parse_dates), target_type)

    def _read(self, reader: JsonReader, target: Any) -> Any:
        while reader.token_type is JsonToken.COMMENT:
            if not reader.read():
                return None

        if target is None or target is Any or target is object or isinstance(target, str):
            return reader.load_token()

        converter = self.find_converter(target)
        if converter is not None:
            return converter.read_json(reader, target, self)

        origin = get_origin(target)
        args = get_args(target)

        if origin in (Union, types.UnionType):
            if reader.token_type is JsonToken.NULL:
                return None
            options = [a for a in args if a is not type(None)]
            if len(options) == 1:
                return self._read(reader, options[0])
            return reader.load_token()

        if reader.token_type is JsonToken.NULL:
            return None

        if is_dataclass(target) and isinstance(target, type):
            return self._read_dataclass(reader, target)

        container = origin or target
        if container in _SEQUENCE_TYPES:
            item_type = args[0] if args else Any
            return container(self._read_array(reader, item_type))

        if isinstance(container, type) and issubclass(container, Mapping):
            value_type = args[1] if len(args) == 2 else Any
            return self._read_mapping(reader, value_type)

        if isinstance(target, type) and issubclass(target, Enum):
            return target(reader.load_token())

        return _coerce_scalar(reader.load_token(), target)

    def _read_dataclass(self, reader: JsonReader, target: type) -> Any:
        if reader.token_type is not JsonToken.START_OBJECT:
            raise ValueError(f"Expected an object for {target.__name__}, got {reader.token_type.name}")

        hints = _type_hints(target)
        by_key = {}
        for f in fields(target):
            if f.init:
                by_key[f.name] = f
                by_key[self.naming_convention(f.name)] = f

        kwargs: dict[str, Any] = {}
        while reader.read():
            token = reader.token_type
            if token is JsonToken.COMMENT:
                continue
            if token is JsonToken.END_OBJECT:
                return target(**kwargs)
            if token is not JsonToken.PROPERTY_NAME:
                raise ValueError(f"Unexpected token {token.name} in {target.__name__}")
            key = str(reader.value)
            if not reader.read():
                break
            f = by_key.get(key)
            if f is None:
                logger.debug("Ignoring unknown key %r for %s", key, target.__name__)
                reader.skip()
                continue
            kwargs[f.name] = self._read(reader, hints.get(f.name, Any))
        raise ValueError(f"Unexpected end of input while reading {target.__name__}")

    def _read_array(self, reader: JsonReader, item_type: Any) -> list[Any]:
        if reader.token_type is not JsonToken.START_ARRAY:
            raise ValueError(f"Expected an array, got {reader.token_type.name}")
        items: list[Any] = []
        while reader.read():
            if reader.token_type is JsonToken.COMMENT:
                continue
            if reader.token_type is JsonToken.END_ARRAY:
                return items
            items.append(self._read(reader, item_type))
        raise ValueError("Unexpected end of input while reading array")

    def _read_mapping(self, reader: JsonReader, value_type: Any) -> dict[str, Any]:
        if reader.token_type is not JsonToken.START_OBJECT:
            raise ValueError(f"Expected an object, got {reader.token_type.name}")
        obj: dict[str, Any] = {}
        while reader.read():
            token = reader.token_type
            if token is JsonToken.COMMENT:
                continue
            if token is JsonToken.END_OBJECT:
                return obj
            if token is not JsonToken.PROPERTY_NAME:
                raise ValueError(f"Unexpected token {token.name} in object")
            key = str(reader.value)
            if not reader.read():
                break
            obj[key] = self._read(reader, value_type)
        raise ValueError("Unexpected end of input while reading object")


def _type_hints(target: type) -> dict[str, Any]:
    try:
        return get_type_hints(target)
    except (NameError, TypeError):
        # unresolvable forward references: fall back to untyped reads
        return {f.name: f.type for f in fields(target) if not isinstance(f.type, str)}


def _coerce_scalar(value: Any, target: Any) -> Any:
    """Light coercion between JSON scalars and the annotated type; anything else passes through."""
    if not isinstance(target, type) or value is None or isinstance(value, target):
        return value
    if target is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if target is int and isinstance(value, float) and value.is_integer():
        return int(value)
    if target is str and isinstance(value, (datetime, date)):
        return value.isoformat()
    if target is datetime and isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    if target is date and isinstance(value, str):
        return date.fromisoformat(value)
    if target is bytes and isinstance(value, str):
        return base64.b64decode(value)
    return value
