"""
Tests for the vpath.exceptions module.

This module tests:
- VpathError base class
- Specialized exception classes and their context
"""

import pytest

from vpath.exceptions import (
    ExternalCommandError,
    InvalidOperationError,
    PathAccessError,
    PathNotFoundError,
    VpathError,
)


# =============================================================================
# VpathError Tests
# =============================================================================

class TestVpathError:
    """Tests for the base VpathError class."""

    def test_basic_creation(self):
        error = VpathError("Something went wrong")

        assert str(error) == "[VPATH_ERROR] Something went wrong"
        assert error.context == {}

    def test_to_dict(self):
        """Test conversion to dictionary."""
        error = VpathError("Test error", error_code="ERR001", context={"key": "value"}, suggestion="Retry")

        data = error.to_dict()

        assert data["error_type"] == "VpathError"
        assert data["error_code"] == "ERR001"
        assert data["message"] == "Test error"
        assert data["context"] == {"key": "value"}
        assert data["suggestion"] == "Retry"
        assert "timestamp" in data

    def test_can_be_raised(self):
        with pytest.raises(VpathError):
            raise VpathError("Test")


# =============================================================================
# Specialized Error Tests
# =============================================================================

class TestPathErrors:
    """Tests for lookup and listing errors."""

    def test_access_error(self):
        error = PathAccessError("denied", path="/root/secret", errno=13)

        assert error.error_code == "PATH_ACCESS_ERROR"
        assert error.path == "/root/secret"
        assert error.errno == 13
        assert error.context == {"path": "/root/secret", "errno": 13}

    def test_not_found_is_access_error(self):
        error = PathNotFoundError("missing", path="/nope", errno=2)

        assert isinstance(error, PathAccessError)
        assert isinstance(error, VpathError)
        assert error.error_code == "PATH_NOT_FOUND"
        assert error.suggestion is not None
        assert error.context["errno"] == 2

    def test_invalid_operation(self):
        error = InvalidOperationError("not a dir", path="/etc/hosts", operation="get_children")

        assert error.error_code == "INVALID_OPERATION"
        assert error.context == {"path": "/etc/hosts", "operation": "get_children"}


class TestExternalCommandError:
    """Tests for ExternalCommandError."""

    def test_attributes(self):
        error = ExternalCommandError("failed", command="wmic", return_code=1, stderr="oops")

        assert error.command == "wmic"
        assert error.return_code == 1
        assert error.context == {"command": "wmic", "return_code": 1, "stderr": "oops"}

    def test_long_stderr_truncated_in_context(self):
        error = ExternalCommandError("failed", stderr="x" * 500)

        assert len(error.context["stderr"]) == 203
        assert len(error.stderr) == 500
