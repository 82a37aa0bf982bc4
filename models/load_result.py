"""Result of a store load: status, loaded data, and the path it came from."""
from dataclasses import dataclass
from enum import Enum
from typing import Any


class LoadStatus(Enum):
    LOADED = "loaded"
    # no candidate file existed
    NOT_FOUND = "not_found"
    # a candidate existed but could not be read or parsed
    INVALID = "invalid"
    # nothing loaded; a default instance was written to the primary path
    CREATED = "created"


@dataclass
class LoadResult:
    status: LoadStatus
    data: Any = None
    path: str | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED

    def __bool__(self) -> bool:
        return self.ok
