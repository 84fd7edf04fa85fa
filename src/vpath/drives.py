"""
Drive letter enumeration for multi-root platforms.

Drive letters come either from a shell command whose stdout lists drive
captions one per line (the default, `wmic logicaldisk get caption`), or
from psutil.disk_partitions on hosts where that command is unavailable.
"""

import asyncio
import logging
from typing import Iterable, List, Optional

import psutil

from .config import VpathConfig, get_config
from .exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


def parse_drive_letters(lines: Iterable[str]) -> List[str]:
    """
    Extract single drive letters from drive caption lines.

    Colons are removed and the token is stripped and uppercased. Anything
    that is not exactly one ASCII letter (headers, blank lines) is dropped.

    Returns:
        Sorted list of unique uppercase letters
    """
    letters = set()
    for line in lines:
        token = line.replace(":", "").strip().upper()
        if len(token) == 1 and token.isascii() and token.isalpha():
            letters.add(token)
    return sorted(letters)


async def run_drive_command(command: str, timeout: float, encoding: str = "utf-8") -> str:
    """
    Run the drive listing command and return its stdout.

    The process lives only for the duration of this call.

    Raises:
        ExternalCommandError: If the command cannot start, times out,
            exits non-zero or produces undecodable output
    """
    try:
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        logger.error(f"Drive command failed to start: {e}")
        raise ExternalCommandError(
            f"Could not start drive command: {e}", command=command
        ) from e

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(
            process.communicate(), timeout=timeout
        )
    except asyncio.TimeoutError as e:
        logger.error(f"Drive command timed out after {timeout} seconds")
        raise ExternalCommandError(
            f"Drive command timed out after {timeout} seconds", command=command
        ) from e
    finally:
        # Also reached on cancellation; the child never outlives this call.
        if process.returncode is None:
            process.kill()
            await process.wait()

    stderr = stderr_bytes.decode(encoding, errors="replace")
    if process.returncode != 0:
        logger.error(f"Drive command exited with {process.returncode}: {stderr.strip()}")
        raise ExternalCommandError(
            f"Drive command exited with status {process.returncode}",
            command=command,
            return_code=process.returncode,
            stderr=stderr,
        )

    try:
        return stdout_bytes.decode(encoding)
    except UnicodeDecodeError as e:
        logger.error(f"Drive command output is not valid {encoding}")
        raise ExternalCommandError(
            f"Could not decode drive command output as {encoding}",
            command=command,
            return_code=process.returncode,
        ) from e


def _partition_captions() -> List[str]:
    return [part.mountpoint for part in psutil.disk_partitions(all=True)]


async def list_drive_letters(config: Optional[VpathConfig] = None) -> List[str]:
    """
    Enumerate drive letters according to the configured source.

    Args:
        config: Settings to use (default: the process-wide config)

    Returns:
        Sorted uppercase drive letters. An empty list is a valid result.
    """
    config = config or get_config()

    if config.drive_source == "psutil":
        try:
            captions = await asyncio.to_thread(_partition_captions)
        except OSError as e:
            logger.error(f"psutil could not list partitions: {e}")
            raise ExternalCommandError(
                f"Could not list disk partitions: {e}", command="psutil.disk_partitions"
            ) from e
        # Mountpoints look like "C:\\"; only the drive part matters here.
        letters = parse_drive_letters(caption.rstrip("\\/") for caption in captions)
    else:
        stdout = await run_drive_command(
            config.drive_list_command,
            timeout=config.command_timeout,
            encoding=config.command_encoding,
        )
        letters = parse_drive_letters(stdout.splitlines())

    logger.debug(f"Found drives: {letters}")
    return letters
