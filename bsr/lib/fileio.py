"""
File writing helpers.
"""

import os
import tempfile
from pathlib import Path


def write_atomic(path: Path, content: str) -> None:
    """Write content to file atomically using temp file + rename.

    Parent directories are created on demand. A failed write leaves any
    existing file untouched.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, str(path))
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
