"""Base converter: a pluggable reader/writer for one family of value types."""
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from serialization.reader import JsonReader
from serialization.writer import JsonWriter

if TYPE_CHECKING:
    from serialization.serializer import JsonSerializer


class JsonConverter(ABC):
    @abstractmethod
    def can_convert(self, object_type: Any) -> bool:
        """True if this converter handles `object_type` (a class or typing alias)."""
        raise NotImplementedError

    @abstractmethod
    def read_json(
        self,
        reader: JsonReader,
        object_type: Any,
        serializer: "JsonSerializer | None" = None,
    ) -> Any:
        """Read a value of `object_type`; the reader is positioned on its first token."""
        raise NotImplementedError

    @abstractmethod
    def write_json(
        self,
        writer: JsonWriter,
        value: Any,
        serializer: "JsonSerializer | None" = None,
    ) -> None:
        raise NotImplementedError
