"""
Path providers: map a DataLocation to the directory that holds its files.

Three strategies are shipped; the composing application picks one as the
store's primary path and may register others as fallbacks.
"""
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from platformdirs import PlatformDirs, user_documents_dir

from storage.locations import DataLocation


def default_app_name() -> str:
    """Name of the running program (script or frozen executable), without extension."""
    return Path(sys.argv[0] or "python").stem or "python"


class DataPathProvider(ABC):
    @abstractmethod
    def get_data_path(self, location: DataLocation) -> str:
        """Return the directory for `location`, without a trailing separator."""
        raise NotImplementedError


@dataclass(frozen=True)
class SpecialFolderPath(DataPathProvider):
    """OS special folders + app name.

    - APPLICATION_DATA: local (non-roaming) app data dir, e.g. %LOCALAPPDATA%/<app>
    - USER_DATA: <documents>/<app>
    - SAVE_DATA: <documents>/<app>/Saves
    """

    app_name: str | None = None

    @property
    def name(self) -> str:
        return self.app_name or default_app_name()

    def get_data_path(self, location: DataLocation) -> str:
        if location is DataLocation.APPLICATION_DATA:
            dirs = PlatformDirs(appname=self.name, appauthor=False, roaming=False)
            return Path(dirs.user_data_dir).as_posix()
        documents = Path(user_documents_dir()) / self.name
        if location is DataLocation.USER_DATA:
            return documents.as_posix()
        if location is DataLocation.SAVE_DATA:
            return (documents / "Saves").as_posix()
        return "/Data"


@dataclass(frozen=True)
class NextToExecutablePath(DataPathProvider):
    """Data/ folder beside the running program (or beside `base_dir` when given)."""

    base_dir: str | None = None

    def _root(self) -> Path:
        if self.base_dir is not None:
            return Path(self.base_dir)
        return Path(sys.argv[0] or ".").resolve().parent

    def get_data_path(self, location: DataLocation) -> str:
        data = self._root() / "Data"
        if location is DataLocation.USER_DATA:
            data = data / "User"
        elif location is DataLocation.SAVE_DATA:
            data = data / "Saves"
        return data.as_posix()


@dataclass(frozen=True)
class DebugPath(DataPathProvider):
    """Source-tree layout used while developing: ../../Data/<Location>."""

    def get_data_path(self, location: DataLocation) -> str:
        return {
            DataLocation.APPLICATION_DATA: "../../Data/ApplicationData",
            DataLocation.USER_DATA: "../../Data/UserData",
            DataLocation.SAVE_DATA: "../../Data/SaveData",
        }.get(location, "../../Data")
