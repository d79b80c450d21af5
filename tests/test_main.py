import logging

from askrelay.api import main as main_module


def test_resolve_log_level_accepts_names_and_aliases():
    assert main_module.resolve_log_level("debug") == logging.DEBUG
    assert main_module.resolve_log_level("WARN") == logging.WARNING
    assert main_module.resolve_log_level("ERROR") == logging.ERROR


def test_resolve_log_level_falls_back_to_info(caplog):
    with caplog.at_level(logging.WARNING, logger="askrelay.api.main"):
        assert main_module.resolve_log_level("verbose") == logging.INFO
        assert main_module.resolve_log_level("") == logging.INFO
    assert "Ignoring invalid LOG_LEVEL" in caplog.text


def test_main_passes_numeric_level_to_uvicorn(monkeypatch):
    calls = {}
    monkeypatch.setenv("LOG_LEVEL", "WARN")
    monkeypatch.setenv("PORT", "4010")
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    monkeypatch.setattr(main_module.uvicorn, "run", lambda app, **kwargs: calls.update(kwargs, app=app))

    main_module.main()

    assert calls["app"] == "askrelay.api.http_api:app"
    assert calls["port"] == 4010
    assert calls["log_level"] == logging.WARNING
