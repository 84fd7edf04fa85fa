"""
Metadata lookup and directory listing.

Blocking OS calls run in a worker thread so the event loop keeps going.
OSErrors are translated into vpath exceptions at this boundary.
"""

import asyncio
import errno as errno_codes
import logging
import os
import stat
from dataclasses import dataclass
from typing import List

from .exceptions import InvalidOperationError, PathAccessError, PathNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryStats:
    """Entry type flags for one filesystem location.

    Attributes:
        is_file: Regular file (after following symlinks)
        is_directory: Directory (after following symlinks)
        is_symlink: The path itself is a symbolic link
    """

    is_file: bool
    is_directory: bool
    is_symlink: bool


# Fixed flags for the synthetic root on multi-root platforms.
ROOT_STATS = EntryStats(is_file=False, is_directory=True, is_symlink=False)


def _translate_os_error(exc: OSError, path: str, action: str) -> PathAccessError:
    if isinstance(exc, FileNotFoundError) or exc.errno == errno_codes.ENOENT:
        return PathNotFoundError(
            f"Cannot {action} {path!r}: no such file or directory",
            path=path,
            errno=exc.errno,
        )
    return PathAccessError(
        f"Cannot {action} {path!r}: {exc.strerror or exc}",
        path=path,
        errno=exc.errno,
    )


def _lookup(path: str) -> EntryStats:
    link_info = os.lstat(path)
    is_symlink = stat.S_ISLNK(link_info.st_mode)
    # Type flags describe the link target, like a plain stat() would.
    info = os.stat(path) if is_symlink else link_info
    return EntryStats(
        is_file=stat.S_ISREG(info.st_mode),
        is_directory=stat.S_ISDIR(info.st_mode),
        is_symlink=is_symlink,
    )


async def read_stats(path: str) -> EntryStats:
    """
    Look up the entry type of a path.

    Args:
        path: Absolute host path

    Returns:
        EntryStats for the path

    Raises:
        PathNotFoundError: If the path (or a symlink target) does not exist
        PathAccessError: For any other OS failure
    """
    try:
        result = await asyncio.to_thread(_lookup, path)
    except OSError as exc:
        raise _translate_os_error(exc, path, "stat") from exc
    logger.debug(f"stat {path!r}: {result}")
    return result


async def list_directory(path: str) -> List[str]:
    """
    List entry names in a directory, in the order the OS returns them.

    Raises:
        InvalidOperationError: If path is not a directory
        PathNotFoundError: If the directory does not exist (or vanished)
        PathAccessError: For any other OS failure
    """
    try:
        names = await asyncio.to_thread(os.listdir, path)
    except NotADirectoryError as exc:
        raise InvalidOperationError(
            f"Cannot list children of {path!r}: not a directory",
            path=path,
            operation="get_children",
        ) from exc
    except OSError as exc:
        raise _translate_os_error(exc, path, "list") from exc
    logger.debug(f"listed {len(names)} entries in {path!r}")
    return names
