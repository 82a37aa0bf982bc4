"""Endpoint converter: Endpoint <-> "address:port" string."""
from ipaddress import ip_address
from typing import Any

from converters.base import JsonConverter
from models.endpoint import Endpoint
from serialization.reader import JsonReader
from serialization.writer import JsonWriter


class EndpointConverter(JsonConverter):
    def can_convert(self, object_type: Any) -> bool:
        return object_type is Endpoint

    def read_json(self, reader: JsonReader, object_type: Any, serializer=None) -> Endpoint | None:
        """Parse "address:port".

        Raises ValueError on a null/empty token or an invalid address segment;
        returns None when there is no port segment or the port is not an integer.
        IPv6 addresses (which contain colons) are not supported.
        """
        raw = reader.load_token()
        text = "" if raw is None else str(raw)
        if not text:
            raise ValueError("Read a null or empty value, unable to parse it into an endpoint.")

        components = text.split(":")
        if len(components) < 2:
            return None
        try:
            port = int(components[1])
        except ValueError:
            return None

        return Endpoint(ip_address(components[0]), port)

    def write_json(self, writer: JsonWriter, value: Any, serializer=None) -> None:
        if not isinstance(value, Endpoint):
            raise TypeError("Data is not an Endpoint. Unable to write to JSON.")
        if value.is_empty:
            writer.write_null()
            return
        writer.write_value(str(value))
