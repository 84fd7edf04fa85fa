"""Platform root handling.

POSIX-like systems have one filesystem root ('/'). Windows has one root per
drive, so a synthetic platform root with an empty path sits above them.
A RootStrategy captures that difference; one is selected per process from
the platform identifier.
"""

from __future__ import annotations

import ntpath
import os
import posixpath
import re
import sys
from abc import ABC, abstractmethod
from types import ModuleType
from typing import List, Optional

from .config import VpathConfig, get_config
from .drives import list_drive_letters

WIN_ROOT_PATTERN = re.compile(r"^[a-z]:\\?$", re.IGNORECASE)


class RootStrategy(ABC):
    """Platform-dependent root detection and enumeration."""

    #: Path module used to normalize and split paths on this platform.
    pathmod: ModuleType = posixpath

    #: True when the top of the hierarchy has no real filesystem entry.
    has_synthetic_root: bool = False

    @property
    @abstractmethod
    def root_path(self) -> str:
        """Path of the top node ('/' or '' for the synthetic root)."""

    @abstractmethod
    def is_at_top_boundary(self, path: str) -> bool:
        """Whether going up from `path` lands on the root node."""

    @abstractmethod
    async def enumerate_roots(self) -> List[str]:
        """Paths of the nodes directly below the root node."""

    def is_root_path(self, path: str) -> bool:
        """Whether `path` names the single real filesystem root."""
        return not self.has_synthetic_root and path == self.root_path

    def normalize(self, path: str) -> str:
        """Make `path` absolute against the working directory and normalize it."""
        if not self.pathmod.isabs(path):
            path = self.pathmod.join(os.getcwd(), path)
        return self.pathmod.normpath(path)


class PosixRootStrategy(RootStrategy):
    """Single root at '/'."""

    pathmod = posixpath
    has_synthetic_root = False

    @property
    def root_path(self) -> str:
        return "/"

    def normalize(self, path: str) -> str:
        # normpath keeps exactly two leading slashes; '//usr' is '/usr' here.
        normalized = super().normalize(path)
        if normalized.startswith("//"):
            normalized = "/" + normalized.lstrip("/")
        return normalized

    def is_at_top_boundary(self, path: str) -> bool:
        return self.pathmod.dirname(path) == "/"

    async def enumerate_roots(self) -> List[str]:
        return ["/"]

    def __repr__(self) -> str:
        return "PosixRootStrategy()"


class Win32RootStrategy(RootStrategy):
    """Synthetic root above the drive roots (C:\\, D:\\, ...)."""

    pathmod = ntpath
    has_synthetic_root = True

    def __init__(self, config: Optional[VpathConfig] = None) -> None:
        """
        Args:
            config: Drive enumeration settings (default: the process-wide config,
                read when roots are enumerated)
        """
        self._config = config

    @property
    def root_path(self) -> str:
        return ""

    def is_at_top_boundary(self, path: str) -> bool:
        # Drive roots (C:, C:\) and UNC share roots (\\server\share) sit just below the platform root.
        if WIN_ROOT_PATTERN.match(path) is not None:
            return True
        drive, rest = self.pathmod.splitdrive(path)
        return bool(drive) and rest in ("", "\\", "/")

    async def enumerate_roots(self) -> List[str]:
        letters = await list_drive_letters(self._config or get_config())
        return [f"{letter}:\\" for letter in letters]

    def __repr__(self) -> str:
        return f"Win32RootStrategy(config={self._config!r})"


def strategy_for_platform(platform: str, config: Optional[VpathConfig] = None) -> RootStrategy:
    """Build the root strategy for a platform identifier such as 'win32' or 'linux'."""
    if platform == "win32":
        return Win32RootStrategy(config)
    return PosixRootStrategy()


_strategy: Optional[RootStrategy] = None


def get_root_strategy() -> RootStrategy:
    """Return the process-wide strategy, selecting it on first use."""
    global _strategy
    if _strategy is None:
        config = get_config()
        _strategy = strategy_for_platform(config.platform or sys.platform)
    return _strategy


def reset_root_strategy() -> None:
    """Forget the cached strategy so the next lookup selects it again."""
    global _strategy
    _strategy = None
