"""File I/O operations for materialization."""

from __future__ import annotations

import os
import shutil
import stat
import tempfile
from pathlib import Path

EXECUTE_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def read_text(path: Path) -> str:
    """Read a UTF-8 file with its line endings left as they are."""
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def atomic_write_text(path: Path, text: str, mode: int = 0o644) -> None:
    """Write text to a file atomically using a temporary file.

    Newlines are written untranslated, so text read with :func:`read_text`
    keeps its CRLF or LF line endings.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
    """
    ensure_parent(path)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                pass


def copy_file(source: Path, destination: Path) -> None:
    """Copy a file byte for byte, keeping its permission bits."""
    ensure_parent(destination)
    shutil.copyfile(source, destination)
    shutil.copymode(source, destination)


def make_executable(path: Path) -> None:
    """Add execute permission wherever read permission is granted."""
    mode = path.stat().st_mode
    read_bits = mode & (stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)
    os.chmod(path, mode | stat.S_IXUSR | (read_bits >> 2 & EXECUTE_BITS))
