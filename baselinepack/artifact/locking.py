"""Advisory file locks and create-exclusive writes for shared files."""

from __future__ import annotations

from contextlib import contextmanager
import os
from pathlib import Path
import time
from typing import IO, Iterator

if os.name == "nt":
    import msvcrt
else:
    import fcntl

EMPTY_READ_RETRIES = 50
EMPTY_READ_DELAY_S = 0.01


@contextmanager
def file_lock(handle: IO[str], *, shared: bool) -> Iterator[None]:
    """Hold an advisory lock on an open file for the duration of the block.

    POSIX uses ``flock`` (shared or exclusive). Windows only has exclusive
    byte-range locks, so shared requests take no lock there.
    """
    fd = handle.fileno()
    if os.name == "nt":
        if shared:
            yield
            return
        msvcrt.locking(fd, msvcrt.LK_LOCK, 1)
        try:
            yield
        finally:
            os.lseek(fd, 0, os.SEEK_SET)
            msvcrt.locking(fd, msvcrt.LK_UNLCK, 1)
        return

    fcntl.flock(fd, fcntl.LOCK_SH if shared else fcntl.LOCK_EX)
    try:
        yield
    finally:
        fcntl.flock(fd, fcntl.LOCK_UN)


def create_exclusive(path: Path, text: str) -> bool:
    """Create ``path`` holding ``text`` under an exclusive lock.

    Returns False without touching the file when it already exists. A failed
    write removes the partial file so readers never see it.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o644)
    except FileExistsError:
        return False

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
            with file_lock(handle, shared=False):
                handle.write(text)
                handle.flush()
                os.fsync(handle.fileno())
    except BaseException:
        path.unlink(missing_ok=True)
        raise
    return True


def read_shared(path: Path) -> str:
    """Read ``path`` under a shared lock.

    A file created but not yet locked by its writer reads as empty; such reads
    are retried briefly before the empty text is returned.
    """
    attempts = 0
    while True:
        with path.open("r", encoding="utf-8") as handle:
            with file_lock(handle, shared=True):
                text = handle.read()
        if text or attempts >= EMPTY_READ_RETRIES:
            return text
        attempts += 1
        time.sleep(EMPTY_READ_DELAY_S)
