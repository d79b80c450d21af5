"""Error kinds raised along the answer and diagnostics paths.

Every error carries the HTTP status the API adapter should answer with, so
`askrelay.api.http_api` can map failures without inspecting their origin.
"""


class RelayError(RuntimeError):
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidQuestionError(RelayError):
    """Raised when the inbound body carries no usable `question` string."""

    status_code = 400


class ConfigMissingError(RelayError):
    """Raised when a generic provider has no endpoint URL configured."""


class CredentialMissingError(RelayError):
    """Raised when no provider credential is configured."""


class ProviderHTTPError(RelayError):
    """Raised when the provider answers with a non-2xx status."""

    status_code = 502

    def __init__(self, http_status: int, body: str) -> None:
        super().__init__(f"Provider returned HTTP {http_status}")
        self.http_status = http_status
        self.body = body


class ProviderTimeoutError(RelayError):
    status_code = 504


class ProviderNetworkError(RelayError):
    pass
