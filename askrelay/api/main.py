"""
Server entrypoint for askrelay.

Startup lifecycle:
1. Load settings from the environment (`.env` included).
2. Configure root logging from `LOG_LEVEL`.
3. Serve `askrelay.api.http_api:app` with uvicorn on `0.0.0.0:$PORT`.
"""

import logging

import uvicorn

from askrelay.llm.provider_config import load_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def resolve_log_level(name: str) -> int:
    """Map a `LOG_LEVEL` name (including aliases like `WARN`) to a level number.

    Unknown names fall back to INFO with a warning.
    """
    level = logging.getLevelName((name or "").upper())
    if isinstance(level, int):
        return level
    logger.warning("Ignoring invalid LOG_LEVEL=%r, using 'INFO'", name)
    return logging.INFO


def configure_logging(level: int) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main():
    settings = load_settings()
    log_level = resolve_log_level(settings.log_level)
    configure_logging(log_level)

    logger.info("askrelay listening on http://localhost:%d", settings.port)
    if settings.mock_response:
        logger.info("MOCK_RESPONSE=true: provider calls are disabled")

    uvicorn.run(
        "askrelay.api.http_api:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=log_level,
    )


if __name__ == "__main__":
    main()
