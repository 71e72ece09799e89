"""
Snapshot swap: stage writes on a scratch copy, publish by atomic replace.

The primitive knows nothing about SQLite; it works on any single-file store.
The scratch file lives in the same directory as the live file so the final
``os.replace`` never crosses a filesystem boundary.
"""

import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path


@contextmanager
def snapshot_swap(live_path: Path | str, copy_existing: bool = True) -> Iterator[Path]:
    """
    Yield a private scratch copy of ``live_path`` and publish it on success.

    Args:
        live_path: The file readers open
        copy_existing: Seed the scratch file with the current live content.
            If False (or there is no live file yet) the scratch file starts empty.

    Yields:
        Path of the scratch file. All handles on it must be closed before the
        block exits.

    On a clean exit the scratch file atomically replaces the live file. On any
    exception the scratch file is removed and the live file is left as it was.
    """
    live_path = Path(live_path)
    live_path.parent.mkdir(parents=True, exist_ok=True)

    fd, scratch_name = tempfile.mkstemp(
        prefix=f".{live_path.name}.", suffix=".tmp", dir=live_path.parent
    )
    os.close(fd)
    scratch = Path(scratch_name)

    try:
        if copy_existing and live_path.exists():
            shutil.copyfile(live_path, scratch)
        yield scratch
        os.replace(scratch, live_path)
    except BaseException:
        scratch.unlink(missing_ok=True)
        raise
