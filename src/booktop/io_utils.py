"""Filesystem helpers shared by config and bookcase persistence."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


def atomic_write_text(path: Path, text: str, prefix: str = ".booktop-") -> None:
    """Write ``text`` to ``path`` via a sibling temp file and ``os.replace``.

    Readers never observe a partially written file. The temp file is removed
    when the write fails. Raises OSError.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=prefix)
    closed = False
    try:
        os.write(fd, text.encode("utf-8"))
        os.close(fd)
        closed = True
        os.replace(tmp_path, path)
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


__all__ = ["atomic_write_text"]
