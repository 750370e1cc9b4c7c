"""FastAPI application for the Balancer SDK.

The service is stateless: every request carries the pool or route it
operates on, so there is no cache or background work to manage.
"""

import logging
import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from balancer_sdk import __version__
from balancer_sdk.api.endpoints import router
from balancer_sdk.errors import BalancerError

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("BALANCER_API_HOST", "0.0.0.0")
PORT = int(os.environ.get("BALANCER_API_PORT", "8000"))
DEBUG = os.environ.get("BALANCER_API_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Balancer SDK (Python)",
    description="Balancer V2 pool math, join/exit and swap calldata",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(BalancerError)
async def balancer_error_handler(request: Request, exc: BalancerError) -> JSONResponse:
    """Domain errors are client errors: the pool or request cannot be served."""
    logger.info("request_rejected", path=request.url.path, error=exc.code, detail=str(exc))
    return JSONResponse(status_code=400, content={"error": exc.code, "detail": str(exc)})


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, error="INVALID_REQUEST", detail=str(exc))
    return JSONResponse(status_code=400, content={"error": "INVALID_REQUEST", "detail": str(exc)})


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the API server.

    Configuration via environment variables:
    - BALANCER_API_HOST: Host to bind to (default: 0.0.0.0)
    - BALANCER_API_PORT: Port to bind to (default: 8000)
    - BALANCER_API_DEBUG: Enable debug/reload mode (default: false)
    - BALANCER_NETWORK: Default network for Vault addresses (default: mainnet)
    """
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if DEBUG else logging.INFO
        ),
    )
    uvicorn.run(
        "balancer_sdk.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
