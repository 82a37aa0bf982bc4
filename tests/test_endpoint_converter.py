from ipaddress import IPv4Address

import pytest

from converters.endpoint import EndpointConverter
from models.endpoint import Endpoint
from serialization.reader import JsonReader
from serialization.serializer import JsonSerializer
from serialization.writer import JsonTextWriter

conv = EndpointConverter()


def _read(value):
    reader = JsonReader.from_value(value)
    reader.read()
    return conv.read_json(reader, Endpoint)


def _write(value) -> str:
    writer = JsonTextWriter(indent=None)
    conv.write_json(writer, value)
    return writer.getvalue()


def test_can_convert():
    assert conv.can_convert(Endpoint)
    assert not conv.can_convert(str)


def test_read_address_and_port():
    endpoint = _read("127.0.0.1:8080")
    assert endpoint == Endpoint(IPv4Address("127.0.0.1"), 8080)


def test_write_address_and_port():
    assert _write(Endpoint(IPv4Address("127.0.0.1"), 8080)) == '"127.0.0.1:8080"'


def test_read_without_port_segment_returns_none():
    assert _read("notanumber") is None


def test_read_non_integer_port_returns_none():
    assert _read("10.0.0.1:http") is None


@pytest.mark.parametrize("value", ["", None])
def test_read_null_or_empty_raises(value):
    with pytest.raises(ValueError):
        _read(value)


def test_read_invalid_address_raises():
    with pytest.raises(ValueError):
        _read("999.1.1.1:80")


def test_read_port_out_of_range_raises():
    with pytest.raises(ValueError):
        _read("10.0.0.1:70000")


def test_write_empty_endpoint_writes_null():
    assert _write(Endpoint()) == "null"


def test_write_non_endpoint_raises_type_error():
    with pytest.raises(TypeError):
        _write("127.0.0.1:8080")


def test_endpoint_field_through_serializer():
    from dataclasses import dataclass

    @dataclass
    class Server:
        name: str = ""
        bind: Endpoint | None = None

    serializer = JsonSerializer()
    text = serializer.to_text(Server("api", Endpoint(IPv4Address("0.0.0.0"), 443)), indent=None)
    assert text == '{"name": "api", "bind": "0.0.0.0:443"}'
    assert serializer.from_text(text, Server) == Server("api", Endpoint(IPv4Address("0.0.0.0"), 443))
