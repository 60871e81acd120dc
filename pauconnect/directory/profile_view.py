"""
Card and full-profile projections for rendering, with sign-in gating.
"""
from __future__ import annotations

from typing import Any

from pauconnect.directory.catalog import ADMISSION_MODES, PLACEHOLDER, UNIVERSITY
from pauconnect.directory.member_directory import college_label
from pauconnect.directory.models import MemberProfile, MemberSummary

UNLOCK_TITLE = "Join PAU.CONNECT to unlock"
UNLOCK_MESSAGE = (
    "Bio, guidance topic, WhatsApp, LinkedIn and resume links are visible only after sign-in."
)
DEFAULT_GUIDANCE_TOPIC = "Guidance needed"


def initials(name: str) -> str:
    parts = name.split()[:2]
    return "".join(part[0].upper() for part in parts if part)


def admission_label(value: str | None) -> str:
    return ADMISSION_MODES.get(value or "", PLACEHOLDER)


def build_card(member: MemberSummary, avatar_url: str | None = None) -> dict[str, Any]:
    """Summary shown on the wall for one member."""
    return {
        "id": member.id,
        "full_name": member.full_name,
        "initials": initials(member.full_name),
        "designation": member.designation or PLACEHOLDER,
        "college": college_label(member),
        "batch": member.batch or PLACEHOLDER,
        "university": UNIVERSITY,
        "guidance_needed": member.guidance_needed,
        "alumni": member.is_alumni,
        "avatar_url": avatar_url,
    }


def _link(label: str, href: str | None) -> dict[str, Any]:
    return {"label": label, "href": href or None, "enabled": bool(href)}


def build_contact_links(profile: MemberProfile, resume_url: str | None) -> list[dict[str, Any]]:
    return [
        _link("WhatsApp", profile.whatsapp_link),
        _link("Resume", resume_url),
        _link("LinkedIn", profile.linkedin_url),
        _link("Instagram", profile.instagram_url),
    ]


def build_profile_view(
    member: MemberSummary,
    *,
    authenticated: bool,
    private: MemberProfile | None = None,
    resume_url: str | None = None,
    avatar_url: str | None = None,
) -> dict[str, Any]:
    """
    Full profile page for one member.

    Signed-out visitors get the gated body with a public preview. Signed-in
    members get the private fields; if the private row could not be read
    the body says so instead of failing.
    """
    view: dict[str, Any] = {
        "title": member.full_name.strip() or "Profile",
        "card": build_card(member, avatar_url),
        "user_category": member.user_category,
        "gated": not authenticated,
    }

    if not authenticated:
        view["locked"] = {
            "title": UNLOCK_TITLE,
            "message": UNLOCK_MESSAGE,
            "preview": {"college": college_label(member), "batch": member.batch or PLACEHOLDER},
        }
        return view

    if private is None:
        view["details"] = None
        view["details_message"] = "Private details are not available."
        return view

    view["details"] = {
        "bio": private.bio or PLACEHOLDER,
        "guidance_topic": (private.guidance_topic or DEFAULT_GUIDANCE_TOPIC)
        if private.guidance_needed
        else None,
        "admission_mode": admission_label(private.admission_mode),
        "links": build_contact_links(private, resume_url),
    }
    return view
