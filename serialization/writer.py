"""
Push-model JSON token writers.

ValueTreeWriter assembles a builtin tree (dicts, lists, scalars) that can be
handed to yaml.safe_dump; JsonTextWriter renders the same tree as JSON text.
A property name left without a value is completed with null when the next
property or the end of the object arrives.
"""
from __future__ import annotations

import base64
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any


class JsonWriter(ABC):
    @abstractmethod
    def write_start_object(self) -> None: ...

    @abstractmethod
    def write_property_name(self, name: str) -> None: ...

    @abstractmethod
    def write_end_object(self) -> None: ...

    @abstractmethod
    def write_start_array(self) -> None: ...

    @abstractmethod
    def write_end_array(self) -> None: ...

    @abstractmethod
    def write_value(self, value: Any) -> None:
        """Write a single scalar using the writer's default scalar encoding."""

    def write_null(self) -> None:
        self.write_value(None)


@dataclass
class _Frame:
    container: dict | list
    key: str | None = None


class ValueTreeWriter(JsonWriter):
    def __init__(self) -> None:
        self._stack: list[_Frame] = []
        self._result: Any = None
        self.has_result = False

    @property
    def result(self) -> Any:
        if self._stack:
            raise ValueError("Writer still has open objects or arrays")
        return self._result

    def write_start_object(self) -> None:
        obj: dict[str, Any] = {}
        self._emit(obj)
        self._stack.append(_Frame(obj))

    def write_property_name(self, name: str) -> None:
        frame = self._complete_property(self._top(dict))
        frame.key = str(name)

    def write_end_object(self) -> None:
        self._complete_property(self._top(dict))
        self._stack.pop()

    def write_start_array(self) -> None:
        items: list[Any] = []
        self._emit(items)
        self._stack.append(_Frame(items))

    def write_end_array(self) -> None:
        self._top(list)
        self._stack.pop()

    def write_value(self, value: Any) -> None:
        self._emit(self.encode_scalar(value))

    def encode_scalar(self, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    def _top(self, kind: type) -> _Frame:
        if not self._stack or not isinstance(self._stack[-1].container, kind):
            raise ValueError(f"No open {'object' if kind is dict else 'array'} to write to")
        return self._stack[-1]

    def _complete_property(self, frame: _Frame) -> _Frame:
        if frame.key is not None:
            frame.container[frame.key] = None
            frame.key = None
        return frame

    def _emit(self, value: Any) -> None:
        if not self._stack:
            if self.has_result:
                raise ValueError("Only one top-level value can be written")
            self._result = value
            self.has_result = True
            return
        frame = self._stack[-1]
        if isinstance(frame.container, list):
            frame.container.append(value)
            return
        if frame.key is None:
            raise ValueError("Property name must be written before a value inside an object")
        frame.container[frame.key] = value
        frame.key = None


class JsonTextWriter(ValueTreeWriter):
    def __init__(self, indent: int | None = 2) -> None:
        super().__init__()
        self.indent = indent

    def encode_scalar(self, value: Any) -> Any:
        value = super().encode_scalar(value)
        if value is None or isinstance(value, (bool, int, float, str)):
            return value
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if isinstance(value, (bytes, bytearray)):
            return base64.b64encode(bytes(value)).decode("ascii")
        if isinstance(value, Decimal):
            return float(value)
        raise TypeError(f"Unsupported value type for JSON: {type(value).__name__}")

    def getvalue(self) -> str:
        """JSON text of everything written so far; empty string when nothing was written."""
        if not self.has_result:
            return ""
        return json.dumps(self.result, ensure_ascii=False, indent=self.indent)
