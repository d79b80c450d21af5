"""Provider HTTP transport.

Architectural role:
    Executes one outbound POST against the resolved provider endpoint and hands
    back the raw status/body pair. Callers (`service`, `diagnostics`) decide what
    a non-2xx status means for them.

Timeout behavior:
    The whole call runs under a wall-clock deadline (`asyncio.wait_for`). When the
    deadline fires the in-flight request is cancelled and `ProviderTimeoutError`
    is raised. The deadline ends with the call, so nothing fires after response
    handling. httpx-level timeouts map to the same error.

Retry behavior:
    None. Each call is attempted once.

Failure handling model:
    - Non-2xx responses are returned, not raised.
    - Timeouts raise `ProviderTimeoutError`.
    - Other request failures raise `ProviderNetworkError`.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from askrelay.llm.errors import ProviderNetworkError, ProviderTimeoutError
from askrelay.llm.payloads import ProviderRequest

logger = logging.getLogger(__name__)


@dataclass
class ProviderResponse:
    http_status: int
    raw_body: str
    parsed_body: Any = None
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.http_status < 300


def parse_body(raw_body: str) -> Any:
    """Parse `raw_body` as JSON, returning `None` when it is not JSON."""
    try:
        return json.loads(raw_body)
    except ValueError:
        return None


async def post_json(
    request: ProviderRequest,
    timeout_seconds: float,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderResponse:
    """POST `request.body` as JSON and return the provider's raw answer.

    Args:
        request: Resolved URL, headers and body.
        timeout_seconds: Wall-clock deadline for the whole exchange.
        transport: Optional httpx transport override (tests, proxies).

    Returns:
        `ProviderResponse` for any HTTP status.

    Raises:
        ProviderTimeoutError: Deadline exceeded.
        ProviderNetworkError: Connection-level failure.
    """
    async with httpx.AsyncClient(timeout=timeout_seconds, transport=transport) as client:
        try:
            response = await asyncio.wait_for(
                client.post(request.url, headers=request.headers, json=request.body),
                timeout=timeout_seconds,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("Provider request timed out after %.1fs", timeout_seconds)
            raise ProviderTimeoutError("Provider request timed out.") from exc
        except httpx.RequestError as exc:
            raise ProviderNetworkError(str(exc) or exc.__class__.__name__) from exc

    raw_body = response.text
    return ProviderResponse(
        http_status=response.status_code,
        raw_body=raw_body,
        parsed_body=parse_body(raw_body),
        reason=response.reason_phrase,
    )
