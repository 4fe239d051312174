"""FastAPI application for the router quoting service.

Rate limiting is left to the reverse proxy in front of the service.
"""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from amm_router import __version__
from amm_router.api.endpoints import router
from amm_router.config import ApiSettings
from amm_router.errors import InvariantViolation, RouterError

logger = structlog.get_logger()

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="AMM Router",
    description="Constant-product quoting over caller-supplied pool snapshots",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(RouterError)
async def router_error_handler(request: Request, exc: RouterError) -> JSONResponse:
    """Rejected quotes are the caller's problem: 400 with a stable code."""
    logger.warning("quote_rejected", path=request.url.path, error=exc.code, detail=str(exc))
    return JSONResponse(status_code=400, content={"error": exc.code, "detail": str(exc)})


@app.exception_handler(InvariantViolation)
async def invariant_error_handler(request: Request, exc: InvariantViolation) -> JSONResponse:
    logger.exception("quote_invariant_violation", path=request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INVARIANT_VIOLATION", "detail": str(exc)},
    )


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the quoting service.

    Configuration via environment variables:
    - ROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - ROUTER_PORT: Port to bind to (default: 8000)
    - ROUTER_DEBUG: Enable reload mode (default: false)
    - ROUTER_MAX_HOPS: Longest path the path endpoints accept (default: 4)
    """
    settings = ApiSettings.from_env()
    uvicorn.run(
        "amm_router.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
