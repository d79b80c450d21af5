from askrelay.safety.redaction import preview_secret, redact_secret


def test_key_query_parameter_is_redacted():
    url = "https://example.com/v1/models/m:generateContent?key=abcd1234&alt=json"
    assert redact_secret(url, None) == (
        "https://example.com/v1/models/m:generateContent?key=REDACTED&alt=json"
    )


def test_literal_secret_is_redacted_anywhere():
    url = "https://example.com/token/supersecret/path?api_token=supersecret"
    redacted = redact_secret(url, "supersecret")
    assert "supersecret" not in redacted
    assert redacted.count("REDACTED") == 2


def test_empty_text_yields_empty_string():
    assert redact_secret(None, "x") == ""
    assert redact_secret("", "x") == ""


def test_preview_exposes_only_last_four_characters():
    assert preview_secret("abcdefgh1234") == "***1234"
    assert preview_secret("abcde") == "***bcde"
    assert preview_secret("") == ""
    assert preview_secret(None) == ""


def test_short_secret_is_never_previewed():
    assert preview_secret("abcd") == "***"
    assert preview_secret("ab") == "***"


def test_short_secret_does_not_mangle_url():
    url = "https://example.com/v1/models/a:generateContent"
    assert redact_secret(url, "a") == url
    assert redact_secret(f"{url}?key=abcd", "abcd") == f"{url}?key=REDACTED"
