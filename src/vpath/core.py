"""VirtualPath: an immutable, asynchronously navigable filesystem location.

Every instance is backed by a metadata lookup done before the object exists,
except the synthetic platform root on multi-root systems, which carries fixed
directory-like flags.

Example:
    >>> home = await VirtualPath.get_home()
    >>> for node in await home.get_route():
    ...     print(node)
    [VirtualPath /]
    [VirtualPath /home]
    [VirtualPath /home/alice]
"""

from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .config import get_config
from .exceptions import InvalidOperationError
from .roots import RootStrategy, get_root_strategy
from .stats import ROOT_STATS, EntryStats, list_directory, read_stats

logger = logging.getLogger(__name__)


class PathKind(Enum):
    """Internal tag steering parent/children behavior."""

    NORMAL = "normal"
    PLATFORM_ROOT = "platform_root"
    FILESYSTEM_ROOT = "filesystem_root"


@dataclass(frozen=True)
class VirtualPath:
    """One filesystem location.

    Build instances with the async factories (`create`, `get_root`,
    `get_home`) or the navigation methods, never with the constructor.

    Attributes:
        path: Normalized absolute path ('' for the synthetic platform root)
        name: Final path segment
        extension: Extension of `name` including the dot, or ''
        is_root: True for filesystem roots and the synthetic platform root
        is_file: Regular file
        is_directory: Directory
        is_symlink: Symbolic link
        is_other_type: None of file, directory or symlink (devices, sockets, ...)
    """

    path: str
    name: str
    extension: str
    is_root: bool
    is_file: bool
    is_directory: bool
    is_symlink: bool
    is_other_type: bool
    _kind: PathKind = field(repr=False)
    _strategy: RootStrategy = field(repr=False, compare=False)

    @classmethod
    def _build(
        cls,
        path: str,
        kind: PathKind,
        stats: EntryStats,
        strategy: RootStrategy,
    ) -> "VirtualPath":
        if kind is not PathKind.PLATFORM_ROOT:
            path = strategy.pathmod.normpath(path)
        name = strategy.pathmod.basename(path)
        # splitext treats a leading dot as part of the name ('.bashrc' has no extension).
        extension = strategy.pathmod.splitext(name)[1]
        return cls(
            path=path,
            name=name,
            extension=extension,
            is_root=kind is not PathKind.NORMAL,
            is_file=stats.is_file,
            is_directory=stats.is_directory,
            is_symlink=stats.is_symlink,
            is_other_type=not (stats.is_file or stats.is_directory or stats.is_symlink),
            _kind=kind,
            _strategy=strategy,
        )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    async def create(
        cls, path: str, *, strategy: Optional[RootStrategy] = None
    ) -> "VirtualPath":
        """
        Create a VirtualPath for an existing location.

        Relative paths are resolved against the current working directory.

        Args:
            path: Path to look up
            strategy: Root strategy (default: the one for this platform)

        Returns:
            A new VirtualPath

        Raises:
            PathNotFoundError: If the path does not exist
            PathAccessError: If the lookup fails for another reason
        """
        strategy = strategy or get_root_strategy()
        resolved = strategy.normalize(path)
        kind = PathKind.FILESYSTEM_ROOT if strategy.is_root_path(resolved) else PathKind.NORMAL
        return cls._build(resolved, kind, await read_stats(resolved), strategy)

    @classmethod
    async def get_root(cls, *, strategy: Optional[RootStrategy] = None) -> "VirtualPath":
        """
        Create the VirtualPath at the top of the hierarchy.

        On single-root platforms this is '/', backed by a real lookup. On
        multi-root platforms it is a synthetic node with an empty path whose
        children are the drive roots.
        """
        strategy = strategy or get_root_strategy()
        if strategy.has_synthetic_root:
            return cls._build(strategy.root_path, PathKind.PLATFORM_ROOT, ROOT_STATS, strategy)
        root = strategy.root_path
        return cls._build(root, PathKind.FILESYSTEM_ROOT, await read_stats(root), strategy)

    @classmethod
    async def get_home(cls, *, strategy: Optional[RootStrategy] = None) -> "VirtualPath":
        """Create the VirtualPath of the current user's home directory."""
        return await cls.create(os.path.expanduser("~"), strategy=strategy)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def get_parent(self) -> "VirtualPath":
        """
        Create the VirtualPath of the parent directory.

        Roots are their own parent. Going up from a top-level entry (a drive
        root on Windows, a child of '/' elsewhere) returns the root node.
        """
        if self.is_root:
            return self
        if self._strategy.is_at_top_boundary(self.path):
            return await VirtualPath.get_root(strategy=self._strategy)
        parent = self._strategy.pathmod.dirname(self.path)
        if parent == self.path:
            # dirname is a fixed point only at a root spelling; stop climbing there.
            return await VirtualPath.get_root(strategy=self._strategy)
        return await VirtualPath.create(parent, strategy=self._strategy)

    async def get_children(self) -> List["VirtualPath"]:
        """
        Create VirtualPaths for the entries directly below this one.

        For the synthetic platform root these are the drive roots, sorted by
        letter. Otherwise they follow the directory listing order. All
        entries are looked up concurrently and any failure aborts the call.

        Raises:
            InvalidOperationError: If this entry is not a directory
            PathNotFoundError: If the directory or one of its entries vanished
            PathAccessError: If listing or a lookup fails for another reason
            ExternalCommandError: If drive enumeration fails
        """
        if self._kind is PathKind.PLATFORM_ROOT:
            child_paths = await self._strategy.enumerate_roots()
        else:
            if not self.is_directory:
                raise InvalidOperationError(
                    f"Cannot list children of {self.path!r}: not a directory",
                    path=self.path,
                    operation="get_children",
                )
            names = await list_directory(self.path)
            child_paths = [self._strategy.pathmod.join(self.path, name) for name in names]

        logger.debug(f"Creating {len(child_paths)} children of {self}")
        return await self._create_all(child_paths)

    async def get_route(self) -> List["VirtualPath"]:
        """
        List the nodes from the root down to this one, both included.

        Returns:
            [root, ..., parent, self]
        """
        route = [self]
        node = self
        while not node.is_root:
            node = await node.get_parent()
            route.append(node)
        route.reverse()
        logger.debug(f"Route of {self} has {len(route)} nodes")
        return route

    async def _create_all(self, paths: List[str]) -> List["VirtualPath"]:
        """Create one VirtualPath per path; the first failure cancels the rest."""
        limit = get_config().max_concurrency
        semaphore = asyncio.Semaphore(limit) if limit is not None else None

        async def create_one(path: str) -> "VirtualPath":
            if semaphore is None:
                return await VirtualPath.create(path, strategy=self._strategy)
            async with semaphore:
                return await VirtualPath.create(path, strategy=self._strategy)

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [group.create_task(create_one(path)) for path in paths]
        except BaseExceptionGroup as errors:
            # Surface the lookup error itself rather than the group wrapping it.
            raise errors.exceptions[0]
        return [task.result() for task in tasks]

    def __str__(self) -> str:
        return f"[VirtualPath {self.path}]"
