import json
from dataclasses import replace
from pathlib import Path

import httpx
import pytest

from askrelay.llm.provider_config import Settings

PUBLIC_DIR = Path(__file__).resolve().parents[1] / "public"


@pytest.fixture
def settings():
    return Settings(
        provider_name="google",
        model="gemini-2.0-flash",
        api_key="test-secret-key-1234",
        public_dir=PUBLIC_DIR,
    )


@pytest.fixture
def generic_settings(settings):
    return replace(
        settings,
        provider_name="openai-compatible",
        api_url="https://llm.example.com/v1/generate",
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def recording_handler(request):
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    def last_json(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def json_transport():
    def factory(payload, status_code=200):
        return RecordingTransport(lambda request: httpx.Response(status_code, json=payload))

    return factory
