from __future__ import annotations

from dataclasses import dataclass, replace
import logging

from supabase import Client

from pauconnect.core.config import Settings
from pauconnect.core.errors import AuthError, StoreError, format_auth_error
from pauconnect.directory.models import MemberProfile
from pauconnect.storage.profile_store import ProfileStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthSession:
    """Signed-in state handed explicitly to the handlers that need it."""

    access_token: str | None = None
    user_id: str | None = None
    email: str | None = None
    profile: MemberProfile | None = None
    profile_loaded: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)

    @property
    def needs_profile(self) -> bool:
        return self.is_authenticated and self.profile_loaded and self.profile is None


ANONYMOUS = AuthSession(profile_loaded=True)


def refresh_profile(session: AuthSession, store: ProfileStore) -> AuthSession:
    """Reload the session's own profile row; a failed read counts as no profile."""
    if not session.is_authenticated:
        return replace(session, profile=None, profile_loaded=True)
    try:
        profile = store.get_private_profile(session.user_id)
    except StoreError as e:
        logger.warning(f"Could not load profile for {session.user_id}: {e}")
        profile = None
    return replace(session, profile=profile, profile_loaded=True)


def _require_credentials(email: str, password: str | None = None) -> str:
    email = email.strip()
    if not email or (password is not None and not password):
        raise AuthError("Email and password are required.")
    return email


class AuthService:
    def __init__(self, client: Client, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    def _session_from(self, response) -> AuthSession | None:
        session = getattr(response, "session", None)
        user = getattr(response, "user", None) or getattr(session, "user", None)
        if session is None or user is None:
            return None
        return AuthSession(access_token=session.access_token, user_id=user.id, email=user.email)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        email = _require_credentials(email, password)
        try:
            response = self.client.auth.sign_in_with_password({"email": email, "password": password})
        except Exception as e:
            logger.info(f"Password sign-in failed for {email}: {e}")
            raise AuthError(format_auth_error(e)) from e
        session = self._session_from(response)
        if session is None:
            raise AuthError("Sign-in did not return a session.")
        logger.info(f"User signed in: {session.user_id}")
        return session

    def sign_up_with_password(self, email: str, password: str) -> AuthSession | None:
        """Create an account; returns None while email confirmation is pending."""
        email = _require_credentials(email, password)
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"email_redirect_to": self.settings.site_url},
                }
            )
        except Exception as e:
            logger.info(f"Sign-up failed for {email}: {e}")
            raise AuthError(format_auth_error(e)) from e
        logger.info(f"User signed up: {email}")
        return self._session_from(response)

    def sign_in_with_email_otp(self, email: str) -> None:
        email = _require_credentials(email)
        try:
            self.client.auth.sign_in_with_otp(
                {"email": email, "options": {"email_redirect_to": self.settings.site_url}}
            )
        except Exception as e:
            raise AuthError(format_auth_error(e)) from e
        logger.info(f"Sign-in link sent to {email}")

    def sign_in_with_google(self) -> str:
        try:
            response = self.client.auth.sign_in_with_oauth(
                {"provider": "google", "options": {"redirect_to": self.settings.site_url}}
            )
        except Exception as e:
            raise AuthError(format_auth_error(e)) from e
        return response.url

    def resolve_session(self, access_token: str) -> AuthSession:
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            raise AuthError(format_auth_error(e)) from e
        user = getattr(response, "user", None)
        if user is None:
            raise AuthError("Invalid or expired token")
        return AuthSession(access_token=access_token, user_id=user.id, email=user.email)

    def sign_out(self) -> None:
        try:
            self.client.auth.sign_out()
        except Exception as e:
            # The caller drops its token either way.
            logger.warning(f"Sign-out failed: {e}")
