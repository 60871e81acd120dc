from __future__ import annotations

from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from pauconnect.auth.session import ANONYMOUS, AuthService, AuthSession, refresh_profile
from pauconnect.core.config import Settings, load_settings
from pauconnect.core.errors import AuthError, ConfigurationError
from pauconnect.storage.profile_store import ProfileStore, build_client

bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def _unavailable(e: ConfigurationError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def get_auth_service(settings: Settings = Depends(get_settings)) -> AuthService:
    try:
        return AuthService(build_client(settings), settings)
    except ConfigurationError as e:
        raise _unavailable(e)


def get_auth_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    auth: AuthService = Depends(get_auth_service),
) -> AuthSession:
    """Anonymous unless a valid bearer token is presented."""
    if credentials is None:
        return ANONYMOUS
    try:
        return auth.resolve_session(credentials.credentials)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_profile_store(
    session: AuthSession = Depends(get_auth_session),
    settings: Settings = Depends(get_settings),
) -> ProfileStore:
    try:
        client = build_client(settings, session.access_token)
    except ConfigurationError as e:
        raise _unavailable(e)
    return ProfileStore(client, settings)


def get_current_session(
    session: AuthSession = Depends(get_auth_session),
    store: ProfileStore = Depends(get_profile_store),
) -> AuthSession:
    return refresh_profile(session, store)


def require_session(session: AuthSession = Depends(get_current_session)) -> AuthSession:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in first.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session
