from __future__ import annotations

from pydantic import BaseModel, Field

from pauconnect.directory.catalog import (
    DEFAULT_ADMISSION_MODE,
    DEFAULT_BATCH,
    DEFAULT_CATEGORY,
    DEFAULT_COLLEGE,
)


class MemberCard(BaseModel):
    id: str
    full_name: str
    initials: str
    designation: str
    college: str
    batch: str
    university: str
    guidance_needed: bool = False
    alumni: bool = False
    avatar_url: str | None = None


class DirectoryOptions(BaseModel):
    college_options: list[str]
    batch_options: list[str]


class DirectoryResponse(DirectoryOptions):
    count: int
    members: list[MemberCard]


class ContactLink(BaseModel):
    label: str
    href: str | None = None
    enabled: bool = False


class LockedPreview(BaseModel):
    college: str
    batch: str


class LockedBody(BaseModel):
    title: str
    message: str
    preview: LockedPreview


class ProfileDetails(BaseModel):
    bio: str
    guidance_topic: str | None = None
    admission_mode: str
    links: list[ContactLink] = Field(default_factory=list)


class ProfileViewResponse(BaseModel):
    title: str
    card: MemberCard
    user_category: str | None = None
    gated: bool
    locked: LockedBody | None = None
    details: ProfileDetails | None = None
    details_message: str | None = None


class ProfileFormIn(BaseModel):
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


class OwnProfile(ProfileFormIn):
    id: str
    profile_photo_path: str | None = None
    avatar_url: str | None = None


class MeResponse(BaseModel):
    authenticated: bool
    user_id: str | None = None
    email: str | None = None
    needs_profile: bool = False
    profile: OwnProfile | None = None


class CredentialsRequest(BaseModel):
    email: str
    password: str


class EmailRequest(BaseModel):
    email: str


class SessionResponse(BaseModel):
    access_token: str | None = None
    user_id: str | None = None
    email: str | None = None
    confirmation_required: bool = False


class RedirectResponse(BaseModel):
    url: str


class MessageResponse(BaseModel):
    message: str
