"""
HTTP API adapter for the askrelay service.

Architectural role:
- Expose the relay over HTTP.
- Parse and validate inbound JSON at the transport boundary.
- Delegate answering to `askrelay.llm.service.generate_answer` and probing to
  `askrelay.llm.diagnostics.run_diagnostics`.
- Map relay error kinds to HTTP status codes and JSON error bodies.

Endpoint responsibilities:
- `GET /health`: liveness, always `{"status": "ok"}`.
- `GET /diagnostics/{provider_name}`: configuration + reachability report.
- `POST /ask`: `{"question": str}` -> `{"answer": str}`.
- `GET /`, `GET /app` and any other GET path: static landing pages.

Error handling strategy:
- 400 for a missing/invalid question, 500 for misconfiguration, 502 for
  provider HTTP errors, 504 for timeouts, 500 with `details` for the rest.
- Every failure is logged and isolated to its request.

Side effects:
- Outbound HTTPS calls to the configured provider.
- Reads static files from the configured public directory.
"""

import logging

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from askrelay.llm.diagnostics import run_diagnostics
from askrelay.llm.errors import (
    ConfigMissingError,
    CredentialMissingError,
    InvalidQuestionError,
    ProviderHTTPError,
    ProviderTimeoutError,
)
from askrelay.llm.provider_config import Settings, load_settings
from askrelay.llm.service import generate_answer

logger = logging.getLogger(__name__)

DIAGNOSTICS_ALIAS = "gemini"


# ============================================================
# Response Schemas
# ============================================================

class HealthResponse(BaseModel):
    status: str


class AskResponse(BaseModel):
    answer: str


# ============================================================
# Request Helpers
# ============================================================

async def read_question(request: Request):
    """Return the raw `question` value, or `None` for unusable bodies."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("question")


def error_response(status_code: int, content: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content)


# ============================================================
# Application Factory
# ============================================================

def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration snapshot; read from the environment when omitted.
        transport: Optional httpx transport used for every provider call.

    Returns:
        Configured `FastAPI` instance. Settings are kept on `app.state`.
    """
    settings = settings or load_settings()

    app = FastAPI(title="askrelay")
    app.state.settings = settings
    app.state.transport = transport

    public_dir = settings.public_dir
    if public_dir.is_dir():
        app.mount("/static", StaticFiles(directory=public_dir), name="static")
    else:
        logger.warning("Public directory %s not found; landing pages disabled", public_dir)

    def landing_page(name: str) -> FileResponse:
        path = public_dir / name
        if not path.is_file():
            raise HTTPException(status_code=404, detail="Not Found")
        return FileResponse(path)

    @app.get("/health", response_model=HealthResponse)
    def health():
        return {"status": "ok"}

    @app.get("/diagnostics/{provider_name}")
    async def diagnostics(provider_name: str):
        """
        Report resolved configuration and provider reachability.

        Accepts the historical `gemini` route name and the configured provider
        name. Returns 500 when the report status is `error`.
        """
        if provider_name.lower() not in (DIAGNOSTICS_ALIAS, settings.provider_name):
            raise HTTPException(status_code=404, detail=f"Unknown provider: {provider_name}")

        try:
            report = await run_diagnostics(settings, transport=transport)
        except Exception as exc:
            logger.exception("Diagnostics failed")
            return error_response(500, {"status": "error", "message": str(exc) or repr(exc)})

        return JSONResponse(
            status_code=500 if report.failed else 200,
            content=report.to_payload(),
        )

    @app.post("/ask", response_model=AskResponse)
    async def ask(request: Request):
        """
        Answer one question through the configured provider.

        Request lifecycle:
        1. Parse body and validate `question`.
        2. Delegate to `generate_answer` (mock short-circuit happens there).
        3. Map relay errors to HTTP responses.
        """
        question = await read_question(request)

        try:
            answer = await generate_answer(question, settings, transport=transport)
        except InvalidQuestionError as exc:
            return error_response(400, {"error": exc.message})
        except (CredentialMissingError, ConfigMissingError) as exc:
            logger.error("Relay misconfigured: %s", exc.message)
            return error_response(500, {"error": exc.message})
        except ProviderHTTPError as exc:
            return error_response(
                502,
                {
                    "error": "Gemini API returned an error",
                    "status": exc.http_status,
                    "body": exc.body,
                },
            )
        except ProviderTimeoutError:
            logger.error("Error in /ask: provider request timed out")
            return error_response(504, {"error": "Gemini request timed out."})
        except Exception as exc:
            logger.exception("Error in /ask")
            return error_response(
                500, {"error": "Server error", "details": str(exc) or repr(exc)}
            )

        return {"answer": answer}

    @app.get("/")
    def index():
        return landing_page("index.html")

    @app.get("/app")
    def app_page():
        return landing_page("app.html")

    # Catch-all must stay last so API routes keep precedence.
    @app.get("/{full_path:path}")
    def fallback(full_path: str):
        return landing_page("index.html")

    return app


app = create_app()
