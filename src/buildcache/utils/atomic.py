import errno
import os
import logging
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union

logger = logging.getLogger(__name__)

STAGING_PREFIX = "build-cache-"
STAGING_SUFFIX = ".tmp"

# errnos meaning "this filesystem can't hard link here", not "destination exists"
_LINK_UNSUPPORTED = {errno.EPERM, errno.EXDEV, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP}


def delete_quietly(path: Union[str, Path]) -> None:
    """Best-effort removal; failures are logged and otherwise ignored."""
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug(f"Failed to delete {path}: {e}")


def current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def fsync_file(path: Union[str, Path]) -> None:
    fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(fd)
    finally:
        os.close(fd)


@contextmanager
def staging_file(directory: Path) -> Iterator[Path]:
    """
    Creates a uniquely named empty file in `directory` and yields its path.

    The file is removed on exit unless the caller has already moved it away,
    so it never outlives the block regardless of how the block exits.
    """
    fd, name = tempfile.mkstemp(prefix=STAGING_PREFIX, suffix=STAGING_SUFFIX, dir=directory)
    try:
        try:
            # mkstemp creates 0600; entries get the same mode a plain open() would
            os.chmod(name, 0o666 & ~current_umask())
            created = os.fstat(fd)
        finally:
            os.close(fd)
    except OSError:
        delete_quietly(name)
        raise
    tmp_path = Path(name)
    try:
        yield tmp_path
    finally:
        # After a rename the name is free again; don't remove someone else's file.
        try:
            current = os.lstat(tmp_path)
        except OSError:
            current = None
        if current is not None and (current.st_dev, current.st_ino) == (created.st_dev, created.st_ino):
            delete_quietly(tmp_path)


def is_staging_name(name: str) -> bool:
    return name.startswith(STAGING_PREFIX) and name.endswith(STAGING_SUFFIX)


def publish_replace(src: Path, dst: Path) -> None:
    """Atomically renames src to dst, replacing any existing dst."""
    try:
        os.replace(src, dst)
    except OSError as e:
        raise OSError(f"Cannot rename {src} to {dst}: {e}") from e


def publish_exclusive(src: Path, dst: Path) -> bool:
    """
    Atomically publishes src at dst only if dst does not exist yet.

    Returns False when another writer got there first; src is left in place
    for the caller to discard. Falls back to a checked rename on filesystems
    without hard link support.
    """
    try:
        os.link(src, dst)
    except FileExistsError:
        return False
    except NotImplementedError:
        return _publish_checked_rename(src, dst)
    except OSError as e:
        if e.errno not in _LINK_UNSUPPORTED:
            raise OSError(f"Cannot rename {src} to {dst}: {e}") from e
        logger.debug(f"Hard link unsupported for {dst} ({e}), falling back to rename")
        return _publish_checked_rename(src, dst)
    delete_quietly(src)
    return True


def _publish_checked_rename(src: Path, dst: Path) -> bool:
    if os.path.lexists(dst):
        return False
    publish_replace(src, dst)
    return True
