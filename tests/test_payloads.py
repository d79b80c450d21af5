from askrelay.llm.payloads import build_payload, build_probe_payload, build_request
from askrelay.llm.provider_config import resolve_provider_config


def test_google_payload_wraps_question_in_contents(settings):
    config = resolve_provider_config(settings)
    assert build_payload(config, "What is 2+2?") == {
        "contents": [{"parts": [{"text": "What is 2+2?"}]}]
    }


def test_generic_payload_uses_prompt_and_token_cap(generic_settings):
    config = resolve_provider_config(generic_settings)
    assert build_payload(config, "hi") == {"prompt": "hi", "max_output_tokens": 512}


def test_question_is_forwarded_verbatim(generic_settings):
    config = resolve_provider_config(generic_settings)
    question = "  padded question\n" + "x" * 10000
    assert build_payload(config, question)["prompt"] == question


def test_probe_payloads(settings, generic_settings):
    google = resolve_provider_config(settings)
    generic = resolve_provider_config(generic_settings)
    assert build_probe_payload(google) == {"contents": [{"parts": [{"text": "ping"}]}]}
    assert build_probe_payload(generic) == {"prompt": "ping"}


def test_request_carries_resolved_url_and_headers(generic_settings):
    config = resolve_provider_config(generic_settings)
    request = build_request(config, {"prompt": "hi"})
    assert request.url == config.endpoint_url
    assert request.headers["Authorization"].startswith("Bearer ")
    assert request.body == {"prompt": "hi"}
