"""
Server entry point: FastAPI app setup and route configuration.
Sets up the FastAPI server with CORS, the consent check API and the
static check form.
"""

from __future__ import annotations

import contextlib
import os
import pathlib
from collections.abc import AsyncGenerator
from typing import Any

import dotenv
import fastapi
import pydantic
import uvicorn
from fastapi import exceptions
from fastapi.middleware import cors
from starlette import responses

from consent_check.pipeline import check
from consent_check.utils import errors, logger

dotenv.load_dotenv()

log = logger.create_logger("Server")

HOST = os.environ.get("UVICORN_HOST", "0.0.0.0")
PORT = int(os.environ.get("UVICORN_PORT", "3001"))
IS_PRODUCTION = os.environ.get("ENVIRONMENT", "development") == "production"

STATIC_DIR = pathlib.Path(__file__).resolve().parent / "static"


class CheckRequest(pydantic.BaseModel):
    """Body of ``POST /api/check-consent``."""

    url: str | None = None


@contextlib.asynccontextmanager
async def lifespan(_app: fastapi.FastAPI) -> AsyncGenerator[None]:
    """Log server start on startup."""
    log.section("Consent Mode Check Server Started")
    log.info("Environment", {"env": "production" if IS_PRODUCTION else "development"})
    yield


app = fastapi.FastAPI(title="Consent Mode Check", lifespan=lifespan)

# ============================================================================
# Middleware
# ============================================================================

app.add_middleware(
    cors.CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# ============================================================================
# Error Handling
# ============================================================================


def _error_response(message: str, status_code: int) -> responses.JSONResponse:
    return responses.JSONResponse({"error": message}, status_code=status_code)


@app.exception_handler(exceptions.RequestValidationError)
async def validation_error_handler(
    _request: fastapi.Request, exc: exceptions.RequestValidationError
) -> responses.JSONResponse:
    """Reject unreadable request bodies as client errors."""
    log.warn("Rejected request body", {"errors": len(exc.errors())})
    return _error_response("Request body must be JSON with a 'url' field", 400)


# ============================================================================
# API Routes
# ============================================================================


@app.post("/api/check-consent", response_model=None)
async def check_consent_endpoint(body: CheckRequest) -> dict[str, Any] | responses.JSONResponse:
    """
    Load the URL in a headless browser and report its default consent state.
    """
    log.info("Incoming check request", {"url": body.url})
    try:
        result = await check.check_consent(body.url)
    except errors.InvalidUrlError as exc:
        log.warn("Invalid URL", {"url": body.url, "error": str(exc)})
        return _error_response(str(exc), 400)
    except errors.ProbeError as exc:
        log.error("Probe failed", {"kind": exc.kind, "error": exc.detail})
        return _error_response(str(exc), 500)
    except Exception as exc:
        log.error("Check failed", {"url": body.url, "error": errors.get_error_message(exc)})
        return _error_response(f"Internal server error: {errors.get_error_message(exc)}", 500)
    return result.to_response()


@app.get("/api/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/")
async def index() -> responses.FileResponse:
    """Serve the check form."""
    return responses.FileResponse(str(STATIC_DIR / "index.html"))


# ============================================================================
# Start Server
# ============================================================================


def main() -> None:
    """Entry point for running the server."""
    log.success(f"Server listening on {HOST}:{PORT}")
    log.info("Open your browser", {"url": f"http://localhost:{PORT}"})

    uvicorn.run(
        "consent_check.main:app",
        host=HOST,
        port=PORT,
        reload=not IS_PRODUCTION,
    )


if __name__ == "__main__":
    main()
