"""
Tests for the vpath.drives module.

This module tests:
- Parsing drive captions from command output
- Running the drive listing command and its failure modes
- The psutil drive source
"""

import asyncio
import sys
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from vpath import ExternalCommandError, VpathConfig
from vpath.drives import list_drive_letters, parse_drive_letters, run_drive_command

posix_shell = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell commands")

WMIC_OUTPUT = "Caption  \r\r\nC:       \r\r\nD:       \r\r\nE:       \r\r\n\r\r\n"


# =============================================================================
# Parsing Tests
# =============================================================================

class TestParseDriveLetters:
    """Tests for parse_drive_letters."""

    def test_wmic_output(self):
        """Test parsing typical wmic output with header and blank lines."""
        assert parse_drive_letters(WMIC_OUTPUT.splitlines()) == ["C", "D", "E"]

    def test_sorted(self):
        """Test that letters are sorted regardless of input order."""
        assert parse_drive_letters(["Z:", "C:", "M:"]) == ["C", "M", "Z"]

    def test_lowercase_is_uppercased(self):
        """Test that lowercase captions are accepted."""
        assert parse_drive_letters(["d:", "c"]) == ["C", "D"]

    def test_non_letters_filtered(self):
        """Test that anything but a single letter is dropped."""
        lines = ["Caption", "", "   ", "1:", "AB:", "::", "C:"]

        assert parse_drive_letters(lines) == ["C"]

    def test_non_ascii_letters_filtered(self):
        """Test that only ASCII drive letters are accepted."""
        assert parse_drive_letters(["É:", "ß:", "Ж:", "C:"]) == ["C"]

    def test_empty(self):
        """Test that no drives is a valid result."""
        assert parse_drive_letters([]) == []


# =============================================================================
# Command Tests
# =============================================================================

@posix_shell
class TestRunDriveCommand:
    """Tests for running the drive listing command."""

    @pytest.mark.asyncio
    async def test_stdout_returned(self):
        """Test that stdout is decoded and returned."""
        output = await run_drive_command("printf 'Caption\\nC:\\n'", timeout=10)

        assert output.splitlines() == ["Caption", "C:"]

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        """Test that a failing command raises with its status and stderr."""
        with pytest.raises(ExternalCommandError) as exc_info:
            await run_drive_command("echo broken >&2; exit 3", timeout=10)

        error = exc_info.value
        assert error.return_code == 3
        assert "broken" in error.stderr
        assert error.error_code == "EXTERNAL_COMMAND_ERROR"

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test that a hanging command is killed and reported."""
        with pytest.raises(ExternalCommandError) as exc_info:
            await run_drive_command("sleep 5", timeout=0.2)

        assert "timed out" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_cancellation_kills_process(self):
        """Test that cancelling the call does not leave the command running."""
        spawned = []
        spawn = asyncio.create_subprocess_shell

        async def capture(*args, **kwargs):
            process = await spawn(*args, **kwargs)
            spawned.append(process)
            return process

        with patch("vpath.drives.asyncio.create_subprocess_shell", side_effect=capture):
            task = asyncio.create_task(run_drive_command("exec sleep 5", timeout=10))
            await asyncio.sleep(0.2)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert len(spawned) == 1
        assert spawned[0].returncode is not None

    @pytest.mark.asyncio
    async def test_undecodable_output(self):
        """Test that invalid bytes in stdout are reported."""
        with pytest.raises(ExternalCommandError) as exc_info:
            await run_drive_command("printf '\\377\\376'", timeout=10)

        assert "decode" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_list_from_command(self):
        """Test list_drive_letters with the command source."""
        config = VpathConfig(drive_list_command="printf 'Caption\\nE:\\nC:\\n\\n'")

        assert await list_drive_letters(config) == ["C", "E"]

    @pytest.mark.asyncio
    async def test_list_from_command_with_no_drives(self):
        """Test that an empty listing gives no drives."""
        config = VpathConfig(drive_list_command="printf 'Caption\\n'")

        assert await list_drive_letters(config) == []


# =============================================================================
# psutil Source Tests
# =============================================================================

class TestPsutilSource:
    """Tests for the psutil drive source."""

    @pytest.mark.asyncio
    async def test_partitions_to_letters(self):
        """Test that mountpoints are reduced to drive letters."""
        partitions = [
            SimpleNamespace(mountpoint="D:\\"),
            SimpleNamespace(mountpoint="C:\\"),
            SimpleNamespace(mountpoint="/"),
            SimpleNamespace(mountpoint="/mnt/data"),
        ]

        with patch("vpath.drives.psutil.disk_partitions", return_value=partitions) as mock:
            letters = await list_drive_letters(VpathConfig(drive_source="psutil"))

        assert letters == ["C", "D"]
        mock.assert_called_once_with(all=True)

    @pytest.mark.asyncio
    async def test_partition_error(self):
        """Test that psutil failures are reported as command errors."""
        with patch("vpath.drives.psutil.disk_partitions", side_effect=OSError("denied")):
            with pytest.raises(ExternalCommandError):
                await list_drive_letters(VpathConfig(drive_source="psutil"))
