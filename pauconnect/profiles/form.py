"""
Profile create/edit form: validation, normalization and the save flow.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
import re
import time
from typing import Any, Callable

from pauconnect.core.errors import (
    ProfileSaveError,
    ProfileValidationError,
    StoreError,
    error_message,
    format_profile_save_error,
)
from pauconnect.directory.catalog import (
    ADMISSION_MODES,
    BATCHES,
    COLLEGES,
    DEFAULT_ADMISSION_MODE,
    DEFAULT_BATCH,
    DEFAULT_CATEGORY,
    DEFAULT_COLLEGE,
    OTHER,
    UNIVERSITY,
    USER_CATEGORIES,
)
from pauconnect.directory.models import MemberProfile
from pauconnect.storage.profile_store import ProfileStore, is_absolute_url

logger = logging.getLogger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill all required fields."
AVATAR_SIZE_MESSAGE = "Profile photo must be between 50KB and 200KB."
NOT_SAVED_MESSAGE = "Profile was not saved. Please try again."

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_email(value: str) -> bool:
    s = value.strip()
    return bool(s) and bool(_EMAIL_RE.match(s))


def normalize_url(value: str | None) -> str | None:
    s = (value or "").strip()
    if not s:
        return None
    if is_absolute_url(s):
        return s
    return f"https://{s}"


def normalize_email_link(value: str | None) -> str | None:
    s = (value or "").strip()
    if not s:
        return None
    if s.lower().startswith("mailto:"):
        return s
    if is_email(s):
        return f"mailto:{s}"
    return None


def initial_email_value(value: str | None) -> str:
    s = (value or "").strip()
    if not s:
        return ""
    if s.lower().startswith("mailto:"):
        return s[7:]
    if is_email(s):
        return s
    return ""


def check_avatar_size(size: int, min_bytes: int, max_bytes: int) -> None:
    if size < min_bytes or size > max_bytes:
        raise ProfileValidationError(AVATAR_SIZE_MESSAGE)


def avatar_path(user_id: str, filename: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{user_id}/{now_ms}-{filename}"


@dataclass(frozen=True)
class ProfileForm:
    full_name: str = ""
    college: str = DEFAULT_COLLEGE
    other_college_name: str = ""
    user_category: str = DEFAULT_CATEGORY
    batch: str = DEFAULT_BATCH
    designation: str = ""
    bio: str = ""
    phone_no: str = ""
    contact_email: str = ""
    linkedin_url: str = ""
    instagram_url: str = ""
    guidance_needed: bool = False
    guidance_topic: str = ""
    resume_link: str = ""
    admission_mode: str = DEFAULT_ADMISSION_MODE
    profile_photo_path: str | None = None

    @classmethod
    def from_profile(cls, profile: MemberProfile | None) -> "ProfileForm":
        """Prefill the edit form from a stored row, or defaults for a new one."""
        if profile is None:
            return cls()
        return cls(
            full_name=profile.full_name or "",
            college=profile.college or DEFAULT_COLLEGE,
            other_college_name=profile.other_college_name or "",
            user_category=profile.user_category or DEFAULT_CATEGORY,
            batch=profile.batch or DEFAULT_BATCH,
            designation=profile.designation or "",
            bio=profile.bio or "",
            phone_no=profile.phone_no or "",
            contact_email=initial_email_value(profile.whatsapp_link),
            linkedin_url=profile.linkedin_url or "",
            instagram_url=profile.instagram_url or "",
            guidance_needed=profile.guidance_needed,
            guidance_topic=profile.guidance_topic or "",
            resume_link=profile.resume_path or "",
            admission_mode=profile.admission_mode or DEFAULT_ADMISSION_MODE,
            profile_photo_path=profile.profile_photo_path,
        )

    def can_submit(self, user_id: str | None) -> bool:
        if not user_id:
            return False
        if not self.full_name.strip():
            return False
        if not self.phone_no.strip():
            return False
        if self.college == OTHER and not self.other_college_name.strip():
            return False
        if self.guidance_needed and not self.guidance_topic.strip():
            return False
        return True

    def validate(self, user_id: str | None) -> None:
        if self.college not in COLLEGES:
            raise ProfileValidationError(f"Unknown college: {self.college}")
        if self.user_category not in USER_CATEGORIES:
            raise ProfileValidationError(f"Unknown user category: {self.user_category}")
        if self.batch not in BATCHES:
            raise ProfileValidationError(f"Unknown batch: {self.batch}")
        if self.admission_mode not in ADMISSION_MODES:
            raise ProfileValidationError(f"Unknown admission mode: {self.admission_mode}")
        if not self.can_submit(user_id):
            raise ProfileValidationError(REQUIRED_FIELDS_MESSAGE)

    def to_payload(self, user_id: str) -> dict[str, Any]:
        return {
            "id": user_id,
            "full_name": self.full_name.strip(),
            "university": UNIVERSITY,
            "college": self.college,
            "other_college_name": self.other_college_name.strip() if self.college == OTHER else None,
            "user_category": self.user_category,
            "batch": self.batch,
            "designation": self.designation.strip() or None,
            "bio": self.bio.strip() or None,
            "phone_no": self.phone_no.strip(),
            "whatsapp_link": normalize_email_link(self.contact_email),
            "linkedin_url": normalize_url(self.linkedin_url),
            "instagram_url": normalize_url(self.instagram_url),
            "resume_path": normalize_url(self.resume_link),
            "guidance_needed": self.guidance_needed,
            "guidance_topic": self.guidance_topic.strip() if self.guidance_needed else None,
            "profile_photo_path": self.profile_photo_path,
            "admission_mode": self.admission_mode,
        }


def _upsert_with_fallback(store: ProfileStore, payload: dict[str, Any]) -> None:
    try:
        store.upsert_profile(payload)
    except StoreError as e:
        # Older schemas lack the admission_mode column; retry once without it.
        if "admission_mode" not in error_message(e).lower():
            raise
        logger.warning("Backend rejected admission_mode, retrying without it")
        retry_payload = dict(payload)
        retry_payload.pop("admission_mode", None)
        store.upsert_profile(retry_payload)


def save_profile(
    store: ProfileStore,
    user_id: str | None,
    form: ProfileForm,
    *,
    avatar: tuple[str, bytes, str | None] | None = None,
    avatar_limits: tuple[int, int] = (50 * 1024, 200 * 1024),
    on_saved: Callable[[], Any] | None = None,
) -> MemberProfile | None:
    """
    Validate and persist the signed-in user's profile.

    Args:
        store: Profile store scoped to the signed-in user
        user_id: Id of the signed-in user
        form: Submitted form values
        avatar: Optional (filename, content, content_type) to upload first
        avatar_limits: Inclusive (min, max) avatar size in bytes
        on_saved: Callback run after the row is verified, e.g. a session refresh

    Returns:
        The stored profile row as read back after saving

    Raises:
        ProfileValidationError: Form is incomplete or the avatar has a bad size
        ProfileSaveError: Backend rejected the write, with a user-facing message
    """
    form.validate(user_id)

    try:
        if avatar is not None:
            filename, content, content_type = avatar
            check_avatar_size(len(content), *avatar_limits)
            uploaded = store.upload_avatar(avatar_path(user_id, filename), content, content_type)
            form = replace(form, profile_photo_path=uploaded)

        _upsert_with_fallback(store, form.to_payload(user_id))

        if not store.profile_exists(user_id):
            raise ProfileSaveError(NOT_SAVED_MESSAGE)
    except StoreError as e:
        raise ProfileSaveError(format_profile_save_error(e)) from e

    if on_saved is not None:
        on_saved()
    return store.get_private_profile(user_id)
