"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn roombook.main:app --reload
      or: roombook  (console script, listens on settings.PORT)
"""

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse, Response

from roombook.core.config import settings
from roombook.core.logger import setup_logging
from roombook.environments.base import (
    EnvironmentError,
    NetworkError,
    OAuthStateError,
    UpstreamError,
)
from roombook.routers import auth, booking


setup_logging()
logger = logging.getLogger("roombook.main")


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url=None,
)


# ---------------------------------------------------------------------------
# ERROR HANDLERS
# ---------------------------------------------------------------------------
# Outbound failures become a 500 whose body is the upstream's own error,
# tagged so the two kinds can be told apart:
#   X-Error-Kind: upstream  (+ X-Upstream-Status) → provider answered with an error
#   X-Error-Kind: network                         → provider unreachable


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> Response:
    logger.error(
        f"{request.method} {request.url.path} failed upstream: {exc}",
        extra={"upstream_status": exc.status_code},
    )
    return Response(
        content=exc.body or str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        media_type=exc.content_type or "text/plain",
        headers={
            "X-Error-Kind": "upstream",
            "X-Upstream-Status": str(exc.status_code),
        },
    )


@app.exception_handler(NetworkError)
async def network_error_handler(request: Request, exc: NetworkError) -> Response:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return PlainTextResponse(
        content=str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers={"X-Error-Kind": "network"},
    )


@app.exception_handler(OAuthStateError)
async def oauth_state_error_handler(request: Request, exc: OAuthStateError) -> Response:
    return PlainTextResponse(content=str(exc), status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(EnvironmentError)
async def environment_error_handler(request: Request, exc: EnvironmentError) -> Response:
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return PlainTextResponse(
        content=str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# booking.router: GET / and POST /
# auth.router: /callback, /logout
app.include_router(booking.router)
app.include_router(auth.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT check that Microsoft is reachable.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}


def run() -> None:
    """Serve the app on settings.PORT."""
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
