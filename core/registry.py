"""
Path provider registry: provider names used in config -> classes. Build a
FileDataStore from config.
"""
import dataclasses
import logging
from typing import Any, Type

from serialization.serializer import JsonSerializer, payload_converters
from storage.data_store import FileDataStore
from storage.path_providers import (
    DataPathProvider,
    DebugPath,
    NextToExecutablePath,
    SpecialFolderPath,
)

logger = logging.getLogger("file_data")

DEFAULT_PRIMARY = "special_folder"

PATH_PROVIDERS: dict[str, Type[DataPathProvider]] = {
    "special_folder": SpecialFolderPath,
    "next_to_executable": NextToExecutablePath,
    "debug": DebugPath,
}


def register_path_provider(name: str, cls: Type[DataPathProvider]) -> None:
    PATH_PROVIDERS[name] = cls


def get_path_provider(name: str) -> Type[DataPathProvider] | None:
    return PATH_PROVIDERS.get(name)


def build_path_provider(entry: str | dict[str, Any], defaults: dict[str, Any] | None = None) -> DataPathProvider | None:
    """Instantiate a provider from 'name' or {'name': ..., <options>}.

    Options the provider class does not accept are ignored; `defaults`
    (e.g. app_name) fill in options the entry does not set.
    """
    if isinstance(entry, str):
        name, options = entry, {}
    elif isinstance(entry, dict) and entry.get("name"):
        name, options = entry["name"], {k: v for k, v in entry.items() if k != "name"}
    else:
        logger.warning("Invalid path provider entry: %r", entry)
        return None

    cls = get_path_provider(name)
    if cls is None:
        logger.warning("Unknown path provider: %s", name)
        return None

    merged = {**(defaults or {}), **options}
    if dataclasses.is_dataclass(cls):
        accepted = {f.name for f in dataclasses.fields(cls) if f.init}
        merged = {k: v for k, v in merged.items() if k in accepted}
    else:
        merged = {}
    return cls(**merged)


def build_store_from_config(config: dict[str, Any]) -> FileDataStore:
    """Build a FileDataStore from the `data_store` section of a loaded config."""
    settings = config.get("data_store") or {}
    defaults = {k: settings[k] for k in ("app_name",) if settings.get(k)}

    primary = build_path_provider(settings.get("primary") or DEFAULT_PRIMARY, defaults)
    if primary is None:
        logger.warning("Falling back to %s primary path", DEFAULT_PRIMARY)
        primary = build_path_provider(DEFAULT_PRIMARY, defaults)

    fallbacks: list[DataPathProvider] = []
    for entry in settings.get("fallbacks") or []:
        provider = build_path_provider(entry, defaults)
        if provider is not None:
            fallbacks.append(provider)

    converters = payload_converters() if settings.get("payload_converter") else None
    return FileDataStore(primary, fallbacks, JsonSerializer(converters))
