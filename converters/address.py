"""IP address converter: a single address or a list of addresses <-> string(s)."""
import types
from ipaddress import IPv4Address, IPv6Address, ip_address
from typing import Any, Union, get_args, get_origin

from converters.base import JsonConverter
from models.endpoint import NO_ADDRESS, IPAddress
from serialization.reader import JsonReader
from serialization.writer import JsonWriter

INVALID_ARGUMENT_MESSAGE = (
    "{} is not a valid IP address or list of IP addresses. Unable to convert it to or from JSON."
)
_ADDRESS_CLASSES = (IPv4Address, IPv6Address)


def _is_address_type(object_type: Any) -> bool:
    if object_type in _ADDRESS_CLASSES:
        return True
    if get_origin(object_type) in (Union, types.UnionType):
        args = set(get_args(object_type))
        return bool(args) and args <= set(_ADDRESS_CLASSES)
    return False


def _is_address_list_type(object_type: Any) -> bool:
    args = get_args(object_type)
    return get_origin(object_type) is list and len(args) == 1 and _is_address_type(args[0])


def _try_parse(value: Any) -> IPAddress:
    try:
        return ip_address(str(value))
    except ValueError:
        return NO_ADDRESS


class IpAddressConverter(JsonConverter):
    def can_convert(self, object_type: Any) -> bool:
        return _is_address_type(object_type) or _is_address_list_type(object_type)

    def read_json(self, reader: JsonReader, object_type: Any, serializer=None) -> Any:
        if _is_address_type(object_type):
            raw = reader.load_token()
            try:
                return ip_address("" if raw is None else str(raw))
            except ValueError:
                raise ValueError("Unable to parse IP address from the current token.") from None

        if _is_address_list_type(object_type):
            raw = reader.load_token()
            if not isinstance(raw, list):
                raise ValueError("Expected an array of IP addresses.")
            # a bad element becomes NO_ADDRESS instead of failing the whole list
            return [_try_parse(item) for item in raw]

        raise TypeError(INVALID_ARGUMENT_MESSAGE.format(_type_name(object_type)))

    def write_json(self, writer: JsonWriter, value: Any, serializer=None) -> None:
        if isinstance(value, _ADDRESS_CLASSES):
            writer.write_value(str(value))
            return

        if isinstance(value, list) and all(isinstance(a, _ADDRESS_CLASSES) for a in value):
            writer.write_start_array()
            for address in value:
                writer.write_value(str(address))
            writer.write_end_array()
            return

        raise TypeError(INVALID_ARGUMENT_MESSAGE.format(type(value).__name__))


def _type_name(object_type: Any) -> str:
    return getattr(object_type, "__name__", None) or repr(object_type)
