from pathlib import Path

import pytest

from storage.data_store import FileDataStore
from tests.helpers import DirPath


@pytest.fixture
def primary_dir(tmp_path: Path) -> Path:
    return tmp_path / "primary"


@pytest.fixture
def fallback_dir(tmp_path: Path) -> Path:
    return tmp_path / "fallback"


@pytest.fixture
def store(primary_dir: Path, fallback_dir: Path) -> FileDataStore:
    return FileDataStore(DirPath(str(primary_dir)), [DirPath(str(fallback_dir))])
