"""Filesystem helpers: default extensions and atomic text writes."""
import os
import stat
import tempfile
from pathlib import Path


def with_default_extension(file_path: str, extension: str) -> str:
    """Append `extension` (e.g. '.json') when the file name has none."""
    if Path(file_path).suffix:
        return file_path
    return file_path + extension


def write_text_atomic(path: Path, text: str) -> None:
    """Write text via a temp file in the same directory, then replace the target.

    Parent directories are created. The target keeps its permission bits; a new
    file gets the usual 0o666 minus umask. OSError propagates and the temp file
    is removed on failure.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = _target_mode(path)
    fd, tmp_path = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


def _target_mode(path: Path) -> int:
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_current_umask()


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask
