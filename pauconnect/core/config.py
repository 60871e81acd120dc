from __future__ import annotations

from dataclasses import dataclass
import os

from dotenv import load_dotenv

try:
    load_dotenv()
except PermissionError:
    # Fall back to existing environment variables if .env is unreadable.
    pass


@dataclass(frozen=True)
class Settings:
    supabase_url: str | None
    supabase_anon_key: str | None
    site_url: str

    app_env: str
    app_host: str
    app_port: int
    cors_origins: list[str]
    log_level: str

    avatars_bucket: str
    resumes_bucket: str
    resume_url_ttl_seconds: int
    avatar_min_bytes: int
    avatar_max_bytes: int

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)


def load_settings() -> Settings:
    cors = os.getenv("CORS_ORIGINS", "")
    cors_list = [item.strip() for item in cors.split(",") if item.strip()]

    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_anon_key=os.getenv("SUPABASE_ANON_KEY") or None,
        site_url=os.getenv("SITE_URL", "http://localhost:8000").rstrip("/"),
        app_env=os.getenv("APP_ENV", "dev"),
        app_host=os.getenv("APP_HOST", "0.0.0.0"),
        app_port=int(os.getenv("APP_PORT", "8000")),
        cors_origins=cors_list,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        avatars_bucket=os.getenv("AVATARS_BUCKET", "avatars"),
        resumes_bucket=os.getenv("RESUMES_BUCKET", "resumes"),
        resume_url_ttl_seconds=int(os.getenv("RESUME_URL_TTL_SECONDS", "600")),
        avatar_min_bytes=int(os.getenv("AVATAR_MIN_BYTES", str(50 * 1024))),
        avatar_max_bytes=int(os.getenv("AVATAR_MAX_BYTES", str(200 * 1024))),
    )
