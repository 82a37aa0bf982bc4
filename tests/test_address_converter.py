from ipaddress import IPv4Address, IPv6Address

import pytest

from converters.address import IpAddressConverter
from models.endpoint import NO_ADDRESS, IPAddress
from serialization.reader import JsonReader
from serialization.writer import ValueTreeWriter

conv = IpAddressConverter()


def _read(value, object_type):
    reader = JsonReader.from_value(value)
    reader.read()
    return conv.read_json(reader, object_type)


def _write(value):
    writer = ValueTreeWriter()
    conv.write_json(writer, value)
    return writer.result


def test_can_convert_addresses_and_address_lists():
    assert conv.can_convert(IPv4Address)
    assert conv.can_convert(IPv6Address)
    assert conv.can_convert(IPAddress)
    assert conv.can_convert(IPv4Address | IPv6Address)
    assert conv.can_convert(list[IPv4Address])
    assert not conv.can_convert(str)
    assert not conv.can_convert(list[str])


def test_read_single_address():
    assert _read("10.1.2.3", IPv4Address) == IPv4Address("10.1.2.3")
    assert _read("::1", IPv6Address) == IPv6Address("::1")


def test_read_single_invalid_address_raises():
    with pytest.raises(ValueError):
        _read("garbage", IPv4Address)


def test_read_list_substitutes_sentinel_for_bad_elements():
    result = _read(["10.0.0.1", "garbage", "10.0.0.2"], list[IPv4Address])
    assert result == [IPv4Address("10.0.0.1"), NO_ADDRESS, IPv4Address("10.0.0.2")]
    assert len(result) == 3


def test_read_list_from_non_array_raises():
    with pytest.raises(ValueError):
        _read("10.0.0.1", list[IPv4Address])


def test_read_unsupported_type_raises_type_error():
    with pytest.raises(TypeError, match="str"):
        _read("10.0.0.1", str)


def test_write_single_and_list():
    assert _write(IPv4Address("10.0.0.1")) == "10.0.0.1"
    assert _write([IPv4Address("10.0.0.1"), IPv6Address("::1")]) == ["10.0.0.1", "::1"]
    assert _write([]) == []


def test_write_unsupported_value_raises_type_error():
    with pytest.raises(TypeError):
        _write(42)
    with pytest.raises(TypeError):
        _write(["10.0.0.1"])
