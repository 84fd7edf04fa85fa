"""
vpath - Virtual paths for asyncio

Represents any filesystem location (file, directory, symbolic link or
platform root) as an immutable value object that can navigate to its
parent, its children and its route from the root.

Example:
    >>> from vpath import VirtualPath
    >>> home = await VirtualPath.get_home()
    >>> route = await home.get_route()
"""

__version__ = "0.1.0"

from .config import VpathConfig, get_config, set_config
from .core import PathKind, VirtualPath
from .exceptions import (
    ExternalCommandError,
    InvalidOperationError,
    PathAccessError,
    PathNotFoundError,
    VpathError,
)
from .roots import (
    PosixRootStrategy,
    RootStrategy,
    Win32RootStrategy,
    get_root_strategy,
    strategy_for_platform,
)
from .stats import ROOT_STATS, EntryStats

__all__ = [
    # Version
    "__version__",
    # Core
    "VirtualPath",
    "PathKind",
    "EntryStats",
    "ROOT_STATS",
    # Root strategies
    "RootStrategy",
    "PosixRootStrategy",
    "Win32RootStrategy",
    "get_root_strategy",
    "strategy_for_platform",
    # Configuration
    "VpathConfig",
    "get_config",
    "set_config",
    # Exceptions
    "VpathError",
    "PathAccessError",
    "PathNotFoundError",
    "InvalidOperationError",
    "ExternalCommandError",
]
