from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from pauconnect.directory.catalog import ALUMNI


def _text(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class MemberSummary:
    """Public projection of a profile row, as listed on the wall."""

    id: str
    full_name: str
    college: str | None = None
    other_college_name: str | None = None
    user_category: str | None = None
    batch: str | None = None
    designation: str | None = None
    guidance_needed: bool = False
    profile_photo_path: str | None = None
    admission_mode: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "MemberSummary":
        return cls(**_row_kwargs(cls, row))

    @property
    def is_alumni(self) -> bool:
        return self.user_category == ALUMNI


@dataclass(frozen=True)
class MemberProfile(MemberSummary):
    """Full profile row, only readable by signed-in members."""

    bio: str | None = None
    phone_no: str | None = None
    whatsapp_link: str | None = None
    linkedin_url: str | None = None
    instagram_url: str | None = None
    resume_path: str | None = None
    guidance_topic: str | None = None

    def summary(self) -> MemberSummary:
        names = {f.name for f in fields(MemberSummary)}
        return MemberSummary(**{k: v for k, v in self.__dict__.items() if k in names})


def _row_kwargs(cls: type, row: Mapping[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in row:
            continue
        value = row[f.name]
        if f.name == "guidance_needed":
            kwargs[f.name] = bool(value)
        elif f.name in ("id", "full_name"):
            kwargs[f.name] = "" if value is None else str(value)
        else:
            kwargs[f.name] = _text(value)
    kwargs.setdefault("id", "")
    kwargs.setdefault("full_name", "")
    return kwargs


def has_display_name(row: Mapping[str, Any]) -> bool:
    name = row.get("full_name")
    return isinstance(name, str) and bool(name.strip())
