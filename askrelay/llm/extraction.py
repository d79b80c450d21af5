"""Answer extraction from heterogeneous provider responses.

Architectural role:
    Normalizes the parsed provider body into one answer string for `/ask`.

Extraction strategy:
    Shape rules are tried in fixed order; each is a pure function returning the
    answer text or `None` when its shape does not match.
    1. Chat-completion (`choices[0].text` / `choices[0].message.content`).
    2. Generative-content (`candidates[0].content`).
    3. Generic output (`output[0]`).
    4. Fallback: raw string body, JSON serialization, or a fixed apology.

Validation model:
    No schema validation. A field of unexpected type counts as absent and the
    next rule is tried. A matched shape may legitimately yield an empty string.

Determinism:
    Pure and deterministic for a given parsed body.
"""

import json
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

PARSE_FAILURE_ANSWER = "Sorry — could not parse Gemini response."

ShapeRule = Callable[[Any], Optional[str]]


def _first(body: Any, field: str) -> Any:
    """Return element 0 of `body[field]` when it is a non-empty list."""
    if not isinstance(body, dict):
        return None
    items = body.get(field)
    if isinstance(items, list) and items:
        return items[0]
    return None


def _render(element: Any) -> str:
    if isinstance(element, str):
        return element
    return json.dumps(element, ensure_ascii=False, separators=(",", ":"))


def _text_or_self(element: Any) -> str:
    if isinstance(element, dict):
        text = element.get("text")
        if isinstance(text, str) and text:
            return text
    return _render(element)


def _join_text_or_self(elements: list) -> str:
    return "\n".join(_text_or_self(element) for element in elements)


def _part_text(part: Any) -> str:
    # Parts without usable text contribute an empty line.
    if isinstance(part, dict) and isinstance(part.get("text"), str):
        return part["text"]
    return ""


def chat_completion_answer(body: Any) -> str | None:
    choice = _first(body, "choices")
    if not isinstance(choice, dict):
        return None

    if isinstance(choice.get("text"), str):
        return choice["text"]

    message = choice.get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return _join_text_or_self(content)
    return None


def generative_content_answer(body: Any) -> str | None:
    candidate = _first(body, "candidates")
    if not isinstance(candidate, dict):
        return None

    content = candidate.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, dict) and isinstance(content.get("parts"), list):
        return "\n".join(_part_text(part) for part in content["parts"])
    if isinstance(content, list):
        return _join_text_or_self(content)
    return None


def generic_output_answer(body: Any) -> str | None:
    output = _first(body, "output")
    if isinstance(output, str):
        return output
    if isinstance(output, dict) and isinstance(output.get("content"), list):
        return _join_text_or_self(output["content"])
    return None


SHAPE_RULES: tuple[ShapeRule, ...] = (
    chat_completion_answer,
    generative_content_answer,
    generic_output_answer,
)


def fallback_answer(body: Any) -> str:
    """Last-resort rendering when no shape rule matched."""
    if isinstance(body, str):
        return body
    if isinstance(body, (dict, list)):
        if isinstance(body, dict) and "error" in body:
            logger.warning("Provider 2xx body carries an error member; returning it serialized")
        return json.dumps(body, ensure_ascii=False, separators=(",", ":"))
    return PARSE_FAILURE_ANSWER


def extract_answer(body: Any) -> str:
    """Return the answer text for a parsed provider body.

    Args:
        body: Parsed JSON body, or `None` when the provider body was not JSON.

    Returns:
        Answer string. Never `None`.
    """
    for rule in SHAPE_RULES:
        answer = rule(body)
        if answer is not None:
            return answer
    return fallback_answer(body)
