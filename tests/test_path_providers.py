import sys
from pathlib import Path

import pytest

from storage.locations import DataLocation
from storage.path_providers import DebugPath, NextToExecutablePath, SpecialFolderPath, default_app_name


def test_debug_path_layout():
    provider = DebugPath()
    assert provider.get_data_path(DataLocation.APPLICATION_DATA) == "../../Data/ApplicationData"
    assert provider.get_data_path(DataLocation.USER_DATA) == "../../Data/UserData"
    assert provider.get_data_path(DataLocation.SAVE_DATA) == "../../Data/SaveData"


def test_next_to_executable_with_base_dir(tmp_path: Path):
    provider = NextToExecutablePath(base_dir=str(tmp_path))
    root = tmp_path.as_posix()
    assert provider.get_data_path(DataLocation.APPLICATION_DATA) == f"{root}/Data"
    assert provider.get_data_path(DataLocation.USER_DATA) == f"{root}/Data/User"
    assert provider.get_data_path(DataLocation.SAVE_DATA) == f"{root}/Data/Saves"


def test_next_to_executable_defaults_to_program_dir(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(sys, "argv", [str(tmp_path / "game.py")])
    path = NextToExecutablePath().get_data_path(DataLocation.APPLICATION_DATA)
    assert path == f"{tmp_path.resolve().as_posix()}/Data"


def test_default_app_name_from_program(monkeypatch):
    monkeypatch.setattr(sys, "argv", ["/opt/tools/farm-sim.py"])
    assert default_app_name() == "farm-sim"
    assert SpecialFolderPath().name == "farm-sim"


def test_special_folder_path_layout():
    provider = SpecialFolderPath(app_name="demo")
    user = provider.get_data_path(DataLocation.USER_DATA)
    assert user.endswith("/demo")
    assert provider.get_data_path(DataLocation.SAVE_DATA) == f"{user}/Saves"
    assert "demo" in provider.get_data_path(DataLocation.APPLICATION_DATA)


@pytest.mark.skipif(sys.platform != "linux", reason="XDG layout")
def test_special_folder_application_data_follows_xdg(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    path = SpecialFolderPath(app_name="demo").get_data_path(DataLocation.APPLICATION_DATA)
    assert path == f"{tmp_path.as_posix()}/demo"


def test_providers_compare_by_value():
    assert DebugPath() == DebugPath()
    assert SpecialFolderPath("a") == SpecialFolderPath("a")
    assert SpecialFolderPath("a") != SpecialFolderPath("b")
    assert len({NextToExecutablePath("/x"), NextToExecutablePath("/x")}) == 1
