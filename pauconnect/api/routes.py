from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from pauconnect.api.deps import (
    get_auth_service,
    get_auth_session,
    get_current_session,
    get_profile_store,
    get_settings,
    require_session,
)
from pauconnect.api.schemas import (
    CredentialsRequest,
    DirectoryOptions,
    DirectoryResponse,
    EmailRequest,
    MeResponse,
    MemberCard,
    MessageResponse,
    OwnProfile,
    ProfileFormIn,
    ProfileViewResponse,
    RedirectResponse,
    SessionResponse,
)
from pauconnect.auth.session import AuthService, AuthSession, refresh_profile
from pauconnect.core.config import Settings
from pauconnect.core.errors import AuthError, ProfileSaveError, ProfileValidationError, StoreError
from pauconnect.directory.catalog import ALL
from pauconnect.directory.feed import DirectoryFeed
from pauconnect.directory.member_directory import FilterState
from pauconnect.directory.profile_view import build_card, build_profile_view
from pauconnect.profiles.form import ProfileForm, check_avatar_size, save_profile
from pauconnect.storage.profile_store import ProfileStore

router = APIRouter()


async def _load_feed(store: ProfileStore) -> DirectoryFeed:
    feed = DirectoryFeed()
    await feed.load(store.list_public_members)
    if feed.load_error:
        raise HTTPException(status_code=502, detail=feed.load_error)
    return feed


def _own_profile(session: AuthSession, store: ProfileStore) -> OwnProfile | None:
    profile = session.profile
    if profile is None:
        return None
    form = ProfileForm.from_profile(profile)
    return OwnProfile(
        id=profile.id,
        avatar_url=store.avatar_url(profile.profile_photo_path),
        **asdict(form),
    )


def _me(session: AuthSession, store: ProfileStore) -> MeResponse:
    return MeResponse(
        authenticated=session.is_authenticated,
        user_id=session.user_id,
        email=session.email,
        needs_profile=session.needs_profile,
        profile=_own_profile(session, store),
    )


@router.get("/directory", response_model=DirectoryResponse)
async def directory(
    search: str = "",
    college: str = ALL,
    batch: str = ALL,
    guidance_only: bool = False,
    alumni_only: bool = False,
    store: ProfileStore = Depends(get_profile_store),
) -> DirectoryResponse:
    feed = await _load_feed(store)
    filters = FilterState(
        search=search,
        college=college,
        batch=batch,
        guidance_only=guidance_only,
        alumni_only=alumni_only,
    )
    visible = feed.visible(filters)
    cards = [
        MemberCard(**build_card(member, store.avatar_url(member.profile_photo_path)))
        for member in visible
    ]
    return DirectoryResponse(
        count=len(cards),
        members=cards,
        college_options=feed.directory.college_options(),
        batch_options=feed.directory.batch_options(),
    )


@router.get("/directory/options", response_model=DirectoryOptions)
async def directory_options(store: ProfileStore = Depends(get_profile_store)) -> DirectoryOptions:
    feed = await _load_feed(store)
    return DirectoryOptions(
        college_options=feed.directory.college_options(),
        batch_options=feed.directory.batch_options(),
    )


@router.get("/profiles/{member_id}", response_model=ProfileViewResponse)
def profile(
    member_id: str,
    session: AuthSession = Depends(get_auth_session),
    store: ProfileStore = Depends(get_profile_store),
) -> ProfileViewResponse:
    try:
        if session.is_authenticated:
            private = store.get_private_profile(member_id)
            member = private
            resume_url = store.resume_url(private.resume_path) if private else None
        else:
            private = None
            member = store.get_public_member(member_id)
            resume_url = None
    except StoreError as e:
        raise HTTPException(status_code=502, detail=str(e))

    if member is None:
        raise HTTPException(status_code=404, detail="Profile not found.")

    view = build_profile_view(
        member,
        authenticated=session.is_authenticated,
        private=private,
        resume_url=resume_url,
        avatar_url=store.avatar_url(member.profile_photo_path),
    )
    return ProfileViewResponse(**view)


@router.get("/me", response_model=MeResponse)
def me(
    session: AuthSession = Depends(get_current_session),
    store: ProfileStore = Depends(get_profile_store),
) -> MeResponse:
    return _me(session, store)


@router.put("/me/profile", response_model=MeResponse)
def update_profile(
    payload: ProfileFormIn,
    session: AuthSession = Depends(require_session),
    store: ProfileStore = Depends(get_profile_store),
    settings: Settings = Depends(get_settings),
) -> MeResponse:
    existing_photo = session.profile.profile_photo_path if session.profile else None
    form = ProfileForm(**payload.model_dump(), profile_photo_path=existing_photo)
    try:
        save_profile(
            store,
            session.user_id,
            form,
            avatar_limits=(settings.avatar_min_bytes, settings.avatar_max_bytes),
        )
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProfileSaveError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _me(refresh_profile(session, store), store)


@router.post("/me/avatar", response_model=MeResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    session: AuthSession = Depends(require_session),
    store: ProfileStore = Depends(get_profile_store),
    settings: Settings = Depends(get_settings),
) -> MeResponse:
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(status_code=400, detail="File must be an image")
    if session.profile is None:
        raise HTTPException(status_code=404, detail="Create your profile first.")

    content = await file.read()
    limits = (settings.avatar_min_bytes, settings.avatar_max_bytes)
    try:
        check_avatar_size(len(content), *limits)
        save_profile(
            store,
            session.user_id,
            ProfileForm.from_profile(session.profile),
            avatar=(file.filename or "avatar.jpg", content, file.content_type),
            avatar_limits=limits,
        )
    except ProfileValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProfileSaveError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _me(refresh_profile(session, store), store)


@router.post("/auth/sign-in", response_model=SessionResponse)
def sign_in(payload: CredentialsRequest, auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    try:
        session = auth.sign_in_with_password(payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return SessionResponse(
        access_token=session.access_token,
        user_id=session.user_id,
        email=session.email,
    )


@router.post("/auth/sign-up", response_model=SessionResponse)
def sign_up(payload: CredentialsRequest, auth: AuthService = Depends(get_auth_service)) -> SessionResponse:
    try:
        session = auth.sign_up_with_password(payload.email, payload.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if session is None:
        return SessionResponse(email=payload.email.strip(), confirmation_required=True)
    return SessionResponse(
        access_token=session.access_token,
        user_id=session.user_id,
        email=session.email,
    )


@router.post("/auth/otp", response_model=MessageResponse)
def email_otp(payload: EmailRequest, auth: AuthService = Depends(get_auth_service)) -> MessageResponse:
    try:
        auth.sign_in_with_email_otp(payload.email)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MessageResponse(message="Check your inbox for a sign-in link.")


@router.post("/auth/google", response_model=RedirectResponse)
def google(auth: AuthService = Depends(get_auth_service)) -> RedirectResponse:
    try:
        url = auth.sign_in_with_google()
    except AuthError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RedirectResponse(url=url)


@router.post("/auth/sign-out", response_model=MessageResponse)
def sign_out(auth: AuthService = Depends(get_auth_service)) -> MessageResponse:
    auth.sign_out()
    return MessageResponse(message="Signed out.")
