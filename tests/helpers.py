from dataclasses import dataclass
from pathlib import Path

from storage.locations import DataLocation
from storage.path_providers import DataPathProvider


@dataclass(frozen=True)
class DirPath(DataPathProvider):
    """Test provider rooted at a temp directory: <root>/<location>."""

    root: str

    def get_data_path(self, location: DataLocation) -> str:
        return f"{self.root}/{location.value}"


def write_file(root: Path, name: str, content: str, location: DataLocation = DataLocation.APPLICATION_DATA) -> Path:
    path = root / location.value / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
