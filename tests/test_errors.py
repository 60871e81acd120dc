"""Tests for user-facing error message mapping."""

from pauconnect.core.errors import error_message, format_auth_error, format_profile_save_error


class BackendError(Exception):
    def __init__(self, message):
        super().__init__({"message": message, "code": "42501"})
        self.message = message


def test_error_message_prefers_message_attribute():
    assert error_message(BackendError("permission denied")) == "permission denied"
    assert error_message(ValueError("plain")) == "plain"


def test_auth_error_mapping():
    assert format_auth_error("Invalid login credentials") == "Invalid email or password."
    assert format_auth_error(Exception("Email not confirmed")).startswith("Email not confirmed.")
    assert "Google login is not enabled" in format_auth_error("Unsupported provider: provider is not enabled")
    assert format_auth_error("Rate limit exceeded") == "Rate limit exceeded"


def test_profile_save_error_mapping():
    assert "Row Level Security" in format_profile_save_error(BackendError("permission denied for table profiles"))
    assert "bucket `avatars`" in format_profile_save_error("Bucket not found")
    assert format_profile_save_error("JWT expired") == "Your session expired. Please sign in again and try saving."
    assert format_profile_save_error("duplicate key") == "duplicate key"
