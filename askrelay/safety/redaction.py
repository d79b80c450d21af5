"""Credential redaction helpers.

Purpose:
    Single place where provider credentials are turned into text that may be
    shown to clients or written to logs. Both the URL rendering and the key
    preview of the diagnostics report go through this module.

Redaction model:
    - `key=<value>` query parameters are rewritten to `key=REDACTED`.
    - Any literal occurrence of the credential is replaced by `REDACTED`.
    - Key previews expose only the last four characters behind a fixed prefix.

Determinism:
    Pure string functions without I/O.
"""

import re

REDACTED = "REDACTED"
PREVIEW_PREFIX = "***"
PREVIEW_CHARS = 4

_KEY_PARAM_PATTERN = re.compile(r"key=[^&]+")


def redact_secret(text: str | None, secret: str | None) -> str:
    """Return `text` with every trace of `secret` removed.

    Args:
        text: Value that may embed the credential (usually a URL).
        secret: Credential value, or `None` when none is configured.

    Returns:
        Redacted text. `None` input yields an empty string.
    """
    if not text:
        return ""

    redacted = _KEY_PARAM_PATTERN.sub(f"key={REDACTED}", text)
    # Very short keys would match unrelated URL text.
    if secret and len(secret) > PREVIEW_CHARS:
        redacted = redacted.replace(secret, REDACTED)
    return redacted


def preview_secret(secret: str | None) -> str:
    """Return a short, non-reversible preview of `secret` (last 4 chars)."""
    if not secret:
        return ""
    if len(secret) <= PREVIEW_CHARS:
        return PREVIEW_PREFIX
    return f"{PREVIEW_PREFIX}{secret[-PREVIEW_CHARS:]}"
