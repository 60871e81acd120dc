from __future__ import annotations


class PauConnectError(Exception):
    """Base error for the application."""


class ConfigurationError(PauConnectError):
    pass


class StoreError(PauConnectError):
    """A backend read or write failed."""


class AuthError(PauConnectError):
    pass


class ProfileValidationError(PauConnectError):
    pass


class ProfileSaveError(PauConnectError):
    pass


def error_message(err: BaseException) -> str:
    """Best-effort human readable message from a backend exception."""
    message = getattr(err, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(err)


def format_auth_error(err: BaseException | str) -> str:
    msg = err if isinstance(err, str) else error_message(err)
    lower = msg.lower()
    if "provider is not enabled" in lower:
        return (
            "Google login is not enabled in Supabase. "
            "Enable Google provider in Authentication → Providers."
        )
    if "invalid login credentials" in lower:
        return "Invalid email or password."
    if "email not confirmed" in lower:
        return (
            "Email not confirmed. Check your inbox, or disable email "
            "confirmation in Supabase for testing."
        )
    return msg


def format_profile_save_error(err: BaseException | str) -> str:
    msg = err if isinstance(err, str) else error_message(err)
    lower = msg.lower()

    if "row-level security" in lower or "rls" in lower or "permission denied" in lower:
        return (
            "Profile save is blocked by Supabase Row Level Security (RLS). "
            "Add an INSERT/UPDATE policy for `profiles` where `id = auth.uid()`."
        )

    if "bucket" in lower and "not found" in lower:
        return (
            "Supabase Storage bucket `avatars` was not found. "
            "Create a public bucket named `avatars` (or disable avatar upload)."
        )

    if "jwt expired" in lower or "invalid jwt" in lower:
        return "Your session expired. Please sign in again and try saving."

    return msg
