"""
File data store: typed load/save of JSON, YAML, text and XML files under the
directories supplied by path providers.

Loads try the primary provider's path first, then every fallback provider
in registration order, and stop at the first file that reads and parses.
Saves only ever write under the primary provider's path. Neither raises for
missing files, I/O or parse errors: loads return a LoadResult, saves a bool.
"""
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Callable, Iterable, get_origin

import yaml

from models.load_result import LoadResult, LoadStatus
from serialization.naming import NamingConvention, get_naming_convention, underscored
from serialization.serializer import JsonSerializer
from storage.locations import DataLocation
from storage.path_providers import DataPathProvider, SpecialFolderPath
from utils.fs import with_default_extension, write_text_atomic

logger = logging.getLogger("file_data")

JSON_EXTENSION = ".json"
YAML_EXTENSION = ".yaml"
TEXT_EXTENSION = ".txt"
XML_EXTENSION = ".xml"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


class FileDataStore:
    def __init__(
        self,
        primary_path: DataPathProvider | None = None,
        fallback_paths: Iterable[DataPathProvider] = (),
        serializer: JsonSerializer | None = None,
    ):
        self._primary: DataPathProvider = primary_path or SpecialFolderPath()
        self._fallbacks: list[DataPathProvider] = []
        for provider in fallback_paths:
            self.add_fallback_path(provider)
        self.serializer = serializer or JsonSerializer()

    # ---- provider configuration ----

    @property
    def primary_path(self) -> DataPathProvider:
        return self._primary

    @property
    def fallback_paths(self) -> tuple[DataPathProvider, ...]:
        return tuple(self._fallbacks)

    def set_primary_path(self, provider: DataPathProvider | None) -> None:
        """Replace the primary provider; None restores the special-folder default."""
        self._primary = provider or SpecialFolderPath()

    def initialize(self, primary_path: DataPathProvider, *fallback_paths: DataPathProvider) -> None:
        self._primary = primary_path
        for provider in fallback_paths:
            self.add_fallback_path(provider)

    def add_fallback_path(self, provider: DataPathProvider) -> None:
        if provider not in self._fallbacks:
            self._fallbacks.append(provider)

    def remove_fallback_path(self, provider: DataPathProvider) -> None:
        if provider in self._fallbacks:
            self._fallbacks.remove(provider)

    # ---- path resolution ----

    def primary_file_path(self, file_path: str, location: DataLocation = DataLocation.APPLICATION_DATA) -> str:
        return _join(self._primary, location, file_path)

    def candidate_paths(self, file_path: str, location: DataLocation = DataLocation.APPLICATION_DATA) -> list[str]:
        """Primary path first, then each fallback in registration order."""
        return [_join(p, location, file_path) for p in (self._primary, *self._fallbacks)]

    def try_find_full_path(
        self, file_path: str, location: DataLocation = DataLocation.APPLICATION_DATA
    ) -> str | None:
        """Return the first candidate path where the file exists, or None. No default extension."""
        for candidate in self.candidate_paths(file_path, location):
            if Path(candidate).is_file():
                return candidate
        logger.debug("File %s not found in any %s path", file_path, location.value)
        return None

    # ---- loads ----

    def load_json(
        self,
        file_path: str,
        target_type: Any = None,
        location: DataLocation = DataLocation.APPLICATION_DATA,
        create_if_missing: bool = False,
    ) -> LoadResult:
        """Load JSON into `target_type` (None: untyped dicts/lists/scalars).

        A blank file loads as None.
        """
        result = self._load(
            file_path,
            location,
            JSON_EXTENSION,
            lambda text: self.serializer.from_text(text, target_type) if text.strip() else None,
        )
        if not result and create_if_missing:
            return self._create_default(
                file_path, location, target_type, JSON_EXTENSION, result,
                lambda data: self.save_json(file_path, data, location),
            )
        return result

    def load_yaml(
        self,
        file_path: str,
        target_type: Any = None,
        location: DataLocation = DataLocation.APPLICATION_DATA,
        naming_convention: str | NamingConvention | None = None,
        create_if_missing: bool = False,
    ) -> LoadResult:
        """Load YAML into `target_type`; dataclass keys follow `naming_convention` (default underscored)."""
        serializer = self._yaml_serializer(naming_convention)
        result = self._load(
            file_path,
            location,
            YAML_EXTENSION,
            lambda text: serializer.from_value(yaml.safe_load(text), target_type),
        )
        if not result and create_if_missing:
            return self._create_default(
                file_path, location, target_type, YAML_EXTENSION, result,
                lambda data: self.save_yaml(file_path, data, location, naming_convention),
            )
        return result

    def load_text(self, file_path: str, location: DataLocation = DataLocation.APPLICATION_DATA) -> LoadResult:
        return self._load(file_path, location, TEXT_EXTENSION, lambda text: text, default="")

    def load_xml(self, file_path: str, location: DataLocation = DataLocation.APPLICATION_DATA) -> LoadResult:
        """Load an XML document; data is the list of the root element's child elements."""
        return self._load(file_path, location, XML_EXTENSION, _xml_children)

    # ---- saves ----

    def save_json(self, file_path: str, data: Any, location: DataLocation = DataLocation.APPLICATION_DATA) -> bool:
        path = self._save_path(file_path, location, JSON_EXTENSION)
        return self._save(path, lambda: self.serializer.to_text(data))

    def save_yaml(
        self,
        file_path: str,
        data: Any,
        location: DataLocation = DataLocation.APPLICATION_DATA,
        naming_convention: str | NamingConvention | None = None,
    ) -> bool:
        serializer = self._yaml_serializer(naming_convention)
        path = self._save_path(file_path, location, YAML_EXTENSION)
        return self._save(
            path,
            lambda: yaml.safe_dump(serializer.to_value(data), sort_keys=False, allow_unicode=True),
        )

    def save_text(
        self,
        file_path: str,
        data: str,
        location: DataLocation = DataLocation.APPLICATION_DATA,
        append: bool = False,
    ) -> bool:
        """Write text; with append, existing content and `data` are joined by a newline.

        An existing file that cannot be read fails the append instead of being replaced.
        """
        path = self._save_path(file_path, location, TEXT_EXTENSION)

        def render() -> str:
            if append and path.is_file():
                existing = path.read_text(encoding="utf-8", errors="replace")
                return f"{existing}\n{data}"
            return data

        return self._save(path, render)

    def save_xml(
        self,
        file_path: str,
        element: ET.Element | ET.ElementTree,
        location: DataLocation = DataLocation.APPLICATION_DATA,
    ) -> bool:
        path = self._save_path(file_path, location, XML_EXTENSION)
        root = element.getroot() if isinstance(element, ET.ElementTree) else element
        return self._save(path, lambda: XML_DECLARATION + ET.tostring(root, encoding="unicode"))

    # ---- internals ----

    def _yaml_serializer(self, naming_convention: str | NamingConvention | None) -> JsonSerializer:
        return self.serializer.with_naming(get_naming_convention(naming_convention, default=underscored))

    def _load(
        self,
        file_path: str,
        location: DataLocation,
        extension: str,
        parse: Callable[[str], Any],
        default: Any = None,
    ) -> LoadResult:
        status = LoadStatus.NOT_FOUND
        error: Exception | None = None
        for index, candidate in enumerate(self.candidate_paths(file_path, location)):
            path = Path(with_default_extension(candidate, extension))
            if not path.is_file():
                continue
            try:
                data = parse(path.read_text(encoding="utf-8"))
            except Exception as e:
                logger.debug("Failed to load %s: %s", path, e)
                status, error = LoadStatus.INVALID, e
                continue
            if index > 0:
                logger.info("Loaded %s from fallback path", path)
            return LoadResult(LoadStatus.LOADED, data, str(path))
        return LoadResult(status, default, None, error)

    def _create_default(
        self,
        file_path: str,
        location: DataLocation,
        target_type: Any,
        extension: str,
        failed: LoadResult,
        save: Callable[[Any], bool],
    ) -> LoadResult:
        data = _default_instance(target_type)
        if not save(data):
            return failed
        path = self._save_path(file_path, location, extension)
        logger.info("Created missing file %s with default data", path)
        return LoadResult(LoadStatus.CREATED, data, str(path), failed.error)

    def _save_path(self, file_path: str, location: DataLocation, extension: str) -> Path:
        return Path(with_default_extension(self.primary_file_path(file_path, location), extension))

    def _save(self, path: Path, render: Callable[[], str]) -> bool:
        try:
            write_text_atomic(path, render())
        except Exception as e:
            logger.warning("Failed to save %s: %s", path, e)
            return False
        return True


def _join(provider: DataPathProvider, location: DataLocation, file_path: str) -> str:
    return f"{provider.get_data_path(location)}/{file_path}"


def _default_instance(target_type: Any) -> Any:
    """target_type() for classes and generic aliases (list[int] -> []); {} when untyped."""
    if target_type is None or target_type is Any:
        return {}
    return (get_origin(target_type) or target_type)()


def _xml_children(text: str) -> list[ET.Element]:
    if not text:
        raise ValueError("XML document is empty")
    return list(ET.fromstring(text))
