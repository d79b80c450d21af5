"""Provider/runtime configuration for the relay.

Architectural role:
    Centralizes provider selection, endpoint resolution and credential lookup for
    `askrelay.llm.service`, `askrelay.llm.diagnostics` and the API adapter.

Resolution flow:
    process environment (+ `.env`) -> `load_settings()` -> `Settings`
    -> `resolve_provider_config(settings)` -> `ProviderConfig`.

Determinism:
    Deterministic for a fixed process environment. `Settings` is read once at
    startup and both the answer path and diagnostics derive their
    `ProviderConfig` from the same snapshot.

Failure behavior:
    Missing credentials raise `CredentialMissingError`; a generic provider
    without an explicit endpoint raises `ConfigMissingError`. Both are checked
    before any network call.
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from urllib.parse import quote

from dotenv import load_dotenv

from askrelay.llm.errors import ConfigMissingError, CredentialMissingError

load_dotenv()

logger = logging.getLogger(__name__)

GOOGLE_HOST = "generativelanguage.googleapis.com"

GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

DEFAULT_PROVIDER = "google"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT_SECONDS = 30.0

BASE_DIR = Path(__file__).resolve().parents[2]
DEFAULT_PUBLIC_DIR = BASE_DIR / "public"

MISSING_KEY_MESSAGE = "Server not configured: missing GEMINI_API_KEY in .env"
MISSING_URL_MESSAGE = "Server not configured: provide GEMINI_API_URL in .env"


class ProviderFamily(str, Enum):
    """Request/response dialect spoken by the configured backend."""

    GOOGLE = "google"
    GENERIC = "generic"


@dataclass(frozen=True)
class Settings:
    """Process configuration snapshot.

    Relevant environment variables:
        - `GEMINI_PROVIDER`
        - `GEMINI_API_URL`
        - `GEMINI_MODEL`
        - `GEMINI_API_KEY`
        - `MOCK_RESPONSE`
        - `PORT`
        - `ASK_TIMEOUT_SECONDS`
        - `DIAGNOSTICS_TIMEOUT_SECONDS`
        - `PUBLIC_DIR`
        - `LOG_LEVEL`
    """

    provider_name: str = DEFAULT_PROVIDER
    model: str = DEFAULT_MODEL
    api_url: str | None = None
    api_key: str | None = None
    mock_response: bool = False
    port: int = DEFAULT_PORT
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    diagnostics_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    public_dir: Path = DEFAULT_PUBLIC_DIR
    log_level: str = "INFO"


@dataclass(frozen=True)
class ProviderConfig:
    family: ProviderFamily
    endpoint_url: str
    auth_header_name: str
    auth_header_value: str
    model: str

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            self.auth_header_name: self.auth_header_value,
        }


def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %r", name, raw, default)
        return default


def load_settings() -> Settings:
    """Build `Settings` from the current process environment.

    Empty strings are treated as unset, matching how `.env` files usually leave
    optional values blank.
    """
    return Settings(
        provider_name=(os.getenv("GEMINI_PROVIDER") or DEFAULT_PROVIDER).lower(),
        model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        api_url=os.getenv("GEMINI_API_URL") or None,
        api_key=os.getenv("GEMINI_API_KEY") or None,
        mock_response=os.getenv("MOCK_RESPONSE") == "true",
        port=_env_number("PORT", DEFAULT_PORT, int),
        request_timeout_seconds=_env_number(
            "ASK_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float
        ),
        diagnostics_timeout_seconds=_env_number(
            "DIAGNOSTICS_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS, float
        ),
        public_dir=Path(os.getenv("PUBLIC_DIR") or DEFAULT_PUBLIC_DIR),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


def detect_family(settings: Settings) -> ProviderFamily:
    """Return GOOGLE for `google` providers or Google-hosted URLs."""
    if settings.provider_name.lower() == DEFAULT_PROVIDER:
        return ProviderFamily.GOOGLE
    if GOOGLE_HOST in (settings.api_url or ""):
        return ProviderFamily.GOOGLE
    return ProviderFamily.GENERIC


def resolve_endpoint_url(settings: Settings, family: ProviderFamily) -> str:
    """Return the endpoint URL, or an empty string when none can be derived.

    Google endpoints fall back to `GEMINI_URL_TEMPLATE` with the model encoded as
    a single path segment. Generic providers have no fallback.
    """
    if settings.api_url:
        return settings.api_url
    if family is ProviderFamily.GOOGLE:
        return GEMINI_URL_TEMPLATE.format(model=quote(settings.model, safe="!~*'()"))
    return ""


def resolve_provider_config(settings: Settings) -> ProviderConfig:
    """Resolve the request target for the configured provider.

    Raises:
        CredentialMissingError: No `GEMINI_API_KEY` configured.
        ConfigMissingError: Generic provider without `GEMINI_API_URL`.
    """
    if not settings.api_key:
        raise CredentialMissingError(MISSING_KEY_MESSAGE)

    family = detect_family(settings)
    endpoint_url = resolve_endpoint_url(settings, family)
    if not endpoint_url:
        raise ConfigMissingError(MISSING_URL_MESSAGE)

    if family is ProviderFamily.GOOGLE:
        header_name, header_value = "X-goog-api-key", settings.api_key
    else:
        header_name, header_value = "Authorization", f"Bearer {settings.api_key}"

    return ProviderConfig(
        family=family,
        endpoint_url=endpoint_url,
        auth_header_name=header_name,
        auth_header_value=header_value,
        model=settings.model,
    )
