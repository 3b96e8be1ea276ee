"""Filesystem helpers shared by the archive assembler and the stager."""

import errno
import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

TEXT_ENCODING = "utf-8"


def write_text(path: Path, contents: str) -> Path:
    """Write ``contents`` as UTF-8, creating parent directories as needed.

    Newlines are written as-is on every platform.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=TEXT_ENCODING, newline="") as f:
        f.write(contents)
    return path


def copy_file(source: Path, destination: Path) -> Path:
    """Copy a file, replacing anything already at ``destination``."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)
    return destination


def move_file(source: Path, destination: Path) -> Path:
    """Move a file, atomically replacing ``destination`` when on the same filesystem."""
    destination.parent.mkdir(parents=True, exist_ok=True)
    try:
        os.replace(source, destination)
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise
        # Cross-device move; fall back to copy + unlink
        shutil.move(str(source), str(destination))
    return destination


@contextmanager
def scratch_dir(parent: Path, prefix: str = "tmp-") -> Iterator[Path]:
    """A temporary directory under ``parent``, removed on exit."""
    parent.mkdir(parents=True, exist_ok=True)
    with tempfile.TemporaryDirectory(prefix=prefix, dir=parent) as tmp:
        logger.debug("Using scratch directory %s", tmp)
        yield Path(tmp)
