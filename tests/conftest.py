"""Pytest configuration and fixtures."""

from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from pauconnect.api.deps import get_auth_service, get_profile_store, get_settings
from pauconnect.auth.session import AuthSession
from pauconnect.core.config import load_settings
from pauconnect.core.errors import AuthError, StoreError
from pauconnect.directory.models import MemberProfile


def make_profile(**overrides) -> MemberProfile:
    values = {
        "id": "u-1",
        "full_name": "Asha Rao",
        "college": "College of Agriculture",
        "user_category": "Alumni",
        "batch": "18th Batch (2018)",
        "designation": "Agronomist",
        "guidance_needed": True,
        "phone_no": "+91 98765 43210",
        "bio": "Soil health researcher.",
        "whatsapp_link": "mailto:asha@example.com",
        "linkedin_url": "https://linkedin.com/in/asha",
        "guidance_topic": "Higher studies abroad",
        "admission_mode": "ICAR",
        "created_at": "2024-01-02T00:00:00Z",
    }
    values.update(overrides)
    return MemberProfile(**values)


class FakeProfileStore:
    """In-memory stand-in for the Supabase-backed store."""

    def __init__(self, profiles=(), *, fail_list=None, reject_admission_mode=False):
        self.profiles = {p.id: p for p in profiles}
        self.fail_list = fail_list
        self.reject_admission_mode = reject_admission_mode
        self.upserts = []
        self.uploads = []

    def list_public_members(self):
        if self.fail_list:
            raise StoreError(self.fail_list)
        return [p.summary() for p in self.profiles.values() if p.full_name.strip()]

    def get_public_member(self, member_id):
        profile = self.profiles.get(member_id)
        return profile.summary() if profile else None

    def get_private_profile(self, member_id):
        return self.profiles.get(member_id)

    def profile_exists(self, member_id):
        return member_id in self.profiles

    def upsert_profile(self, payload):
        self.upserts.append(dict(payload))
        if self.reject_admission_mode and "admission_mode" in payload:
            raise StoreError("Could not find the 'admission_mode' column of 'profiles'")
        row = {k: v for k, v in payload.items() if k != "university"}
        self.profiles[payload["id"]] = MemberProfile.from_row(row)

    def avatar_url(self, path):
        return f"https://cdn.test/avatars/{path}" if path else None

    def resume_url(self, path):
        if not path:
            return None
        if path.startswith("http"):
            return path
        return f"https://cdn.test/signed/{path}"

    def upload_avatar(self, path, content, content_type):
        self.uploads.append((path, len(content), content_type))
        return path


class FakeAuthService:
    def __init__(self, users=None):
        # token -> (user_id, email)
        self.users = users or {}
        self.signed_out = False

    def resolve_session(self, token):
        if token not in self.users:
            raise AuthError("Invalid or expired token")
        user_id, email = self.users[token]
        return AuthSession(access_token=token, user_id=user_id, email=email)

    def sign_in_with_password(self, email, password):
        if password != "secret":
            raise AuthError("Invalid email or password.")
        return AuthSession(access_token="tok-1", user_id="u-1", email=email)

    def sign_up_with_password(self, email, password):
        return None

    def sign_in_with_email_otp(self, email):
        if not email.strip():
            raise AuthError("Email and password are required.")

    def sign_in_with_google(self):
        return "https://auth.test/authorize?provider=google"

    def sign_out(self):
        self.signed_out = True


@pytest.fixture
def bala():
    return make_profile(
        id="u-2",
        full_name="Bala Singh",
        college="Other",
        other_college_name="IIT Ropar",
        user_category="2nd Year",
        batch="24th Batch (2024)",
        designation=None,
        guidance_needed=False,
        guidance_topic=None,
        admission_mode="CET",
        resume_path="u-2/resume.pdf",
    )


@pytest.fixture
def store(bala):
    return FakeProfileStore([make_profile(), bala])


@pytest.fixture
def auth_service():
    return FakeAuthService({"tok-1": ("u-1", "asha@example.com"), "tok-new": ("u-9", "new@example.com")})


@pytest.fixture
def client(store, auth_service):
    from pauconnect.main import app

    settings = replace(load_settings(), avatar_min_bytes=10, avatar_max_bytes=100)
    app.dependency_overrides[get_profile_store] = lambda: store
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_settings] = lambda: settings
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
