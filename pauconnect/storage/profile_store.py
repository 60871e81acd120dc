from __future__ import annotations

import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client, create_client

from pauconnect.core.config import Settings
from pauconnect.core.errors import ConfigurationError, StoreError, error_message
from pauconnect.directory.catalog import PUBLIC_COLUMNS
from pauconnect.directory.models import MemberProfile, MemberSummary, has_display_name

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"


def build_client(settings: Settings, access_token: str | None = None) -> Client:
    """Create a Supabase client, scoped to a signed-in user when a token is given."""
    if not settings.backend_configured:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_ANON_KEY must be configured")
    client = create_client(settings.supabase_url, settings.supabase_anon_key)
    if access_token:
        # Storage is built lazily from these headers on first access.
        client.options.headers["Authorization"] = f"Bearer {access_token}"
        client.postgrest.auth(access_token)
    return client


def is_absolute_url(path: str) -> bool:
    return path.startswith("http://") or path.startswith("https://")


class ProfileStore:
    """Reads and writes profile rows and profile files through Supabase."""

    def __init__(self, client: Client, settings: Settings) -> None:
        self.client = client
        self.settings = settings

    def _profiles(self):
        return self.client.table(PROFILES_TABLE)

    def list_public_members(self) -> list[MemberSummary]:
        """Public rows, newest first, without rows lacking a display name."""
        try:
            response = (
                self._profiles()
                .select(",".join(PUBLIC_COLUMNS))
                .order("created_at", desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Failed to list profiles: {error_message(e)}")
            raise StoreError(error_message(e)) from e
        rows = response.data or []
        members = [MemberSummary.from_row(row) for row in rows if has_display_name(row)]
        logger.info(f"Loaded {len(members)} public profiles")
        return members

    def _fetch_one(self, member_id: str, columns: str) -> dict[str, Any] | None:
        try:
            response = (
                self._profiles()
                .select(columns)
                .eq("id", member_id)
                .maybe_single()
                .execute()
            )
        except APIError as e:
            logger.error(f"Failed to fetch profile {member_id}: {error_message(e)}")
            raise StoreError(error_message(e)) from e
        # Newer clients return None instead of an empty response for no rows.
        if response is None:
            return None
        return response.data or None

    def get_public_member(self, member_id: str) -> MemberSummary | None:
        row = self._fetch_one(member_id, ",".join(PUBLIC_COLUMNS))
        return MemberSummary.from_row(row) if row else None

    def get_private_profile(self, member_id: str) -> MemberProfile | None:
        row = self._fetch_one(member_id, "*")
        return MemberProfile.from_row(row) if row else None

    def profile_exists(self, member_id: str) -> bool:
        return self._fetch_one(member_id, "id") is not None

    def upsert_profile(self, payload: dict[str, Any]) -> None:
        try:
            self._profiles().upsert(payload, on_conflict="id").execute()
        except APIError as e:
            logger.error(f"Failed to save profile {payload.get('id')}: {error_message(e)}")
            raise StoreError(error_message(e)) from e
        logger.info(f"Saved profile {payload.get('id')}")

    def avatar_url(self, path: str | None) -> str | None:
        if not path:
            return None
        url = self.client.storage.from_(self.settings.avatars_bucket).get_public_url(path)
        return url or None

    def resume_url(self, path: str | None) -> str | None:
        """Direct links pass through; stored files get a short-lived signed URL."""
        if not path:
            return None
        if is_absolute_url(path):
            return path
        try:
            signed = self.client.storage.from_(self.settings.resumes_bucket).create_signed_url(
                path, self.settings.resume_url_ttl_seconds
            )
        except Exception as e:
            logger.warning(f"Could not sign resume path {path}: {e}")
            return None
        if isinstance(signed, dict):
            return signed.get("signedURL") or signed.get("signedUrl")
        return getattr(signed, "signed_url", None)

    def upload_avatar(self, path: str, content: bytes, content_type: str | None) -> str:
        options = {"upsert": "true"}
        if content_type:
            options["content-type"] = content_type
        try:
            response = self.client.storage.from_(self.settings.avatars_bucket).upload(
                path, content, file_options=options
            )
        except Exception as e:
            logger.error(f"Avatar upload failed for {path}: {e}")
            raise StoreError(error_message(e)) from e
        logger.info(f"Uploaded avatar {path}")
        return getattr(response, "path", None) or path
