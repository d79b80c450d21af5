"""Provider reachability and configuration report.

Architectural role:
    Backs `GET /diagnostics/{provider}`. Reuses provider resolution and transport
    from the answer path but never runs answer extraction: provider error bodies
    are reported raw.

Report flow:
    1. Describe configuration (credential reduced to length + 4-char preview).
    2. Mock mode: stop with `using-mock`.
    3. Missing credential or endpoint: stop with `error`.
    4. Send a `ping` probe and report `ok` or `error` with provider details.

Security considerations:
    The resolved URL and key preview go through `askrelay.safety.redaction`.
    The credential value itself never enters the report.
"""

import logging
from typing import Literal, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field

from askrelay.llm.client import parse_body, post_json
from askrelay.llm.errors import ConfigMissingError, RelayError
from askrelay.llm.payloads import build_probe_payload, build_request
from askrelay.llm.provider_config import (
    Settings,
    detect_family,
    resolve_endpoint_url,
    resolve_provider_config,
)
from askrelay.safety.redaction import preview_secret, redact_secret

logger = logging.getLogger(__name__)

MISSING_KEY_ERROR = "Missing GEMINI_API_KEY in .env"
NON_JSON_ERROR = "Non-JSON error from provider"


class DiagnosticsReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    provider: str
    model: str
    api_url_configured: bool = Field(alias="apiUrlConfigured")
    api_url_resolved: str = Field(alias="apiUrlResolved")
    mock_response: bool = Field(alias="mockResponse")
    have_api_key: bool = Field(alias="haveApiKey")
    key_length: int = Field(alias="keyLength")
    key_preview: str = Field(alias="keyPreview")
    status: Optional[Literal["using-mock", "ok", "error"]] = None
    http_status: Optional[int] = Field(default=None, alias="httpStatus")
    message: Optional[str] = None
    provider_body: Optional[str] = Field(default=None, alias="providerBody")
    error: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.status == "error"

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def describe_configuration(settings: Settings) -> DiagnosticsReport:
    """Build the static part of the report without touching the network."""
    family = detect_family(settings)
    key = settings.api_key or ""
    return DiagnosticsReport(
        provider=settings.provider_name,
        model=settings.model,
        api_url_configured=bool(settings.api_url),
        api_url_resolved=redact_secret(resolve_endpoint_url(settings, family), key),
        mock_response=settings.mock_response,
        have_api_key=bool(key),
        key_length=len(key),
        key_preview=preview_secret(key),
    )


def provider_error_message(raw_body: str, reason: str) -> str:
    """Pick a human-readable message out of a provider error body."""
    parsed = parse_body(raw_body)
    if parsed is None:
        return reason or NON_JSON_ERROR
    error = parsed.get("error") if isinstance(parsed, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return reason


async def run_diagnostics(
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> DiagnosticsReport:
    """Describe configuration and, when possible, probe the provider.

    Args:
        settings: Startup configuration snapshot.
        transport: Optional httpx transport override.

    Returns:
        A report whose `status` is `using-mock`, `ok` or `error`. Failures are
        captured in the report rather than raised.
    """
    report = describe_configuration(settings)

    if settings.mock_response:
        report.status = "using-mock"
        return report

    if not settings.api_key:
        report.status = "error"
        report.error = MISSING_KEY_ERROR
        return report

    try:
        config = resolve_provider_config(settings)
    except ConfigMissingError as exc:
        report.status = "error"
        report.error = exc.message
        return report

    request = build_request(config, build_probe_payload(config))
    try:
        response = await post_json(
            request, settings.diagnostics_timeout_seconds, transport=transport
        )
    except RelayError as exc:
        logger.warning("Diagnostics probe failed: %s", exc.message)
        report.status = "error"
        report.message = exc.message
        return report

    report.http_status = response.http_status
    if not response.ok:
        report.status = "error"
        report.provider_body = response.raw_body
        report.message = provider_error_message(response.raw_body, response.reason)
        logger.warning(
            "Diagnostics probe returned status=%s message=%s",
            response.http_status,
            report.message,
        )
        return report

    report.status = "ok"
    return report
