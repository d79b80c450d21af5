"""Provider-specific request body construction.

The question text is forwarded verbatim: no trimming, no length capping.
"""

from dataclasses import dataclass
from typing import Any

from askrelay.llm.provider_config import ProviderConfig, ProviderFamily

GENERIC_MAX_OUTPUT_TOKENS = 512
PROBE_TEXT = "ping"


@dataclass
class ProviderRequest:
    url: str
    headers: dict[str, str]
    body: Any


def build_payload(config: ProviderConfig, question: str) -> dict[str, Any]:
    """Return the JSON body the configured provider expects for `question`."""
    if config.family is ProviderFamily.GOOGLE:
        return {"contents": [{"parts": [{"text": question}]}]}
    return {"prompt": question, "max_output_tokens": GENERIC_MAX_OUTPUT_TOKENS}


def build_probe_payload(config: ProviderConfig) -> dict[str, Any]:
    if config.family is ProviderFamily.GOOGLE:
        return {"contents": [{"parts": [{"text": PROBE_TEXT}]}]}
    return {"prompt": PROBE_TEXT}


def build_request(config: ProviderConfig, body: dict[str, Any]) -> ProviderRequest:
    return ProviderRequest(url=config.endpoint_url, headers=config.headers, body=body)
