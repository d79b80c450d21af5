import types

import pytest
import requests

from askrelay.api import cli


def _fake_response(status_code, payload=None, text=""):
    def json():
        if payload is None:
            raise ValueError("no json")
        return payload

    return types.SimpleNamespace(status_code=status_code, json=json, text=text, reason="")


def test_ask_prints_answer(monkeypatch):
    calls = []

    def fake_post(url, json, timeout):
        calls.append((url, json))
        return _fake_response(200, {"answer": "42"})

    monkeypatch.setattr(cli.requests, "post", fake_post)

    assert cli.ask("http://localhost:3000/", "meaning of life?") == "42"
    assert calls == [("http://localhost:3000/ask", {"question": "meaning of life?"})]


def test_ask_formats_error_payload(monkeypatch):
    monkeypatch.setattr(
        cli.requests,
        "post",
        lambda url, json, timeout: _fake_response(500, {"error": "Server error", "details": "boom"}),
    )
    assert cli.ask("http://relay", "q") == "HTTP 500: Server error (boom)"


def test_ask_handles_non_json_error(monkeypatch):
    monkeypatch.setattr(
        cli.requests, "post", lambda url, json, timeout: _fake_response(502, text="bad gateway")
    )
    assert cli.ask("http://relay", "q") == "HTTP 502: bad gateway"


def test_main_one_shot(monkeypatch, capsys):
    monkeypatch.setattr(cli, "ask", lambda url, question: f"{url}|{question}")

    assert cli.main(["--url", "http://relay", "what", "is", "this"]) == 0
    assert capsys.readouterr().out.strip() == "http://relay|what is this"


def test_main_reports_unreachable_relay(monkeypatch, capsys):
    def unreachable(url, question):
        raise requests.exceptions.ConnectionError("refused")

    monkeypatch.setattr(cli, "ask", unreachable)

    assert cli.main(["--url", "http://relay", "hi"]) == 1
    assert "Relay unreachable" in capsys.readouterr().err


def test_interactive_loop_stops_on_exit(monkeypatch, capsys):
    answers = iter(["", "first question", "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt: next(answers))
    asked = []
    monkeypatch.setattr(cli, "ask", lambda url, question: asked.append(question) or "answer")

    assert cli.main(["--url", "http://relay"]) == 0
    assert asked == ["first question"]
    assert "answer" in capsys.readouterr().out


@pytest.mark.parametrize("error", [EOFError, KeyboardInterrupt])
def test_interactive_loop_exits_on_eof_and_interrupt(monkeypatch, error):
    def raise_error(prompt):
        raise error

    monkeypatch.setattr("builtins.input", raise_error)
    assert cli.main(["--url", "http://relay"]) == 0
