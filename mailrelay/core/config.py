"""Configuration for the mail relay service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _to_bool(value: str, *, default: bool = False) -> bool:
    lowered = value.strip().lower()
    if not lowered:
        return default
    return lowered in {"true", "1", "yes", "y", "on"}


class Settings:
    PROJECT_NAME: str = os.getenv("MAILRELAY_PROJECT_NAME", "Mail Relay Service")
    API_PREFIX: str = os.getenv("MAILRELAY_API_PREFIX", "/api")
    LOG_LEVEL: str = os.getenv("MAILRELAY_LOG_LEVEL", "INFO").upper()

    # Connection target only. Credentials always come from the sender of each
    # request; there is no fallback account.
    SMTP_HOST: str = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "465"))
    SMTP_USE_SSL: bool = _to_bool(os.getenv("SMTP_USE_SSL", "true"), default=True)
    SMTP_USE_TLS: bool = _to_bool(os.getenv("SMTP_USE_TLS", "false"), default=False)
    SMTP_TIMEOUT: float = float(os.getenv("SMTP_TIMEOUT", "30"))

    # Per-file ceiling, enforced by the compose client and by the endpoint.
    MAX_ATTACHMENT_SIZE: int = int(os.getenv("MAX_ATTACHMENT_SIZE", str(10 * 1024 * 1024)))

    MAILER_API_URL: str = os.getenv("MAILER_API_URL", "http://localhost:8000")
    MAILER_API_TIMEOUT: float = float(os.getenv("MAILER_API_TIMEOUT", "60"))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

__all__ = ["settings", "get_settings", "Settings"]
