"""Question-to-answer pipeline.

Architectural role:
    Canonical entrypoint used by the HTTP adapter for `/ask`. Bridges provider
    configuration, payload construction, transport and answer extraction.

Model call flow:
    question -> (mock short-circuit) -> `resolve_provider_config`
    -> `build_payload` -> `client.post_json` -> `extract_answer`.

Mock mode:
    With `MOCK_RESPONSE=true` no provider is contacted. The pipeline waits 300ms
    to simulate latency and returns a templated answer embedding the question.

Failure scenarios:
    Errors are raised as `RelayError` subclasses and mapped to HTTP statuses by
    the adapter. Nothing is retried.
"""

import asyncio
import logging

import httpx

from askrelay.llm.client import post_json
from askrelay.llm.errors import InvalidQuestionError, ProviderHTTPError
from askrelay.llm.extraction import extract_answer
from askrelay.llm.payloads import build_payload, build_request
from askrelay.llm.provider_config import Settings, resolve_provider_config

logger = logging.getLogger(__name__)

MOCK_DELAY_SECONDS = 0.3
MOCK_ANSWER_TEMPLATE = (
    'Mocked Gemini reply: "{question}" → (Demo answer — set MOCK_RESPONSE=false '
    "and configure API to call the real service)."
)
INVALID_QUESTION_MESSAGE = "Missing question string in body"
LOG_BODY_LIMIT = 500


def validate_question(question) -> str:
    """Return `question` if it is a non-empty string, else raise."""
    if not isinstance(question, str) or not question:
        raise InvalidQuestionError(INVALID_QUESTION_MESSAGE)
    try:
        question.encode("utf-8")
    except UnicodeEncodeError as exc:
        # Lone surrogates cannot be forwarded as JSON text.
        raise InvalidQuestionError(INVALID_QUESTION_MESSAGE) from exc
    return question


async def mock_answer(question: str) -> str:
    logger.warning("Using mock response for /ask (MOCK_RESPONSE=true)")
    await asyncio.sleep(MOCK_DELAY_SECONDS)
    return MOCK_ANSWER_TEMPLATE.format(question=question)


async def generate_answer(
    question,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Answer one question through the configured provider.

    Args:
        question: Raw `question` value from the request body.
        settings: Startup configuration snapshot.
        transport: Optional httpx transport override.

    Returns:
        Extracted answer text.

    Raises:
        InvalidQuestionError: `question` missing, empty or not a string.
        CredentialMissingError / ConfigMissingError: misconfiguration.
        ProviderHTTPError: provider answered with a non-2xx status.
        ProviderTimeoutError / ProviderNetworkError: transport failures.
    """
    question = validate_question(question)

    if settings.mock_response:
        return await mock_answer(question)

    config = resolve_provider_config(settings)
    request = build_request(config, build_payload(config, question))

    response = await post_json(request, settings.request_timeout_seconds, transport=transport)

    if not response.ok:
        logger.error(
            "Provider API error status=%s body=%s",
            response.http_status,
            response.raw_body[:LOG_BODY_LIMIT],
        )
        raise ProviderHTTPError(response.http_status, response.raw_body)

    return extract_answer(response.parsed_body)
