"""Endpoint model: IP address + port."""
from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address
from typing import Union

IPAddress = Union[IPv4Address, IPv6Address]

# Substituted for list elements that fail to parse as an address.
NO_ADDRESS = IPv4Address("255.255.255.255")


@dataclass(frozen=True)
class Endpoint:
    address: IPAddress | None = None
    port: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Port out of range: {self.port}")

    @property
    def is_empty(self) -> bool:
        """No address and port 0."""
        return self.address is None and self.port == 0

    def __str__(self) -> str:
        address = "" if self.address is None else str(self.address)
        return f"{address}:{self.port}"
