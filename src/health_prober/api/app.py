"""HTTP surface for the prober.

Two routes, both POST with a JSON body:

- ``{prefix}/health-check``        ``{"url": "..."}``
- ``{prefix}/health-check/batch``  ``{"urls": ["...", ...]}``

Reachability problems are reported inside a 200 envelope. Only a missing
URL, a missing array, or a body that is not a JSON object produces a 400.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError as BodyValidationError
from fastapi.responses import JSONResponse

from health_prober import __version__
from health_prober.core.config import Settings
from health_prober.core.exceptions import RequestValidationError
from health_prober.core.logging import get_logger
from health_prober.core.models import (
    BatchProbeRequest,
    Envelope,
    ErrorEnvelope,
    ProbeRequest,
    as_url_text,
)
from health_prober.prober import BatchCoordinator, ProberEngine

logger = get_logger(__name__)


def _reject(request: Request, message: str) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, error=message)
    return JSONResponse(
        status_code=400,
        content=ErrorEnvelope(error=message).model_dump(),
    )


def create_app(
    settings: Optional[Settings] = None,
    prober: Optional[ProberEngine] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Configuration; defaults are used when omitted
        prober: Prober instance to use (tests inject one with a mock transport)

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings()
    prober = prober or ProberEngine(settings)
    coordinator = BatchCoordinator(prober)

    app = FastAPI(title="Health Prober", version=__version__)
    router = APIRouter(prefix=settings.server.route_prefix)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        return _reject(request, str(exc))

    @app.exception_handler(BodyValidationError)
    async def handle_body_error(request: Request, exc: BodyValidationError):
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return _reject(request, "Malformed JSON body")
        return _reject(request, "Request body must be a JSON object")

    @router.post("/health-check")
    async def check_health(body: Optional[ProbeRequest] = None):
        """Check health status of a single URL."""
        if body is None or not body.url:
            raise RequestValidationError("URL is required")

        result = await prober.probe(as_url_text(body.url))
        return Envelope(data=result.to_payload()).model_dump()

    @router.post("/health-check/batch")
    async def check_health_batch(body: Optional[BatchProbeRequest] = None):
        """Check health status of multiple URLs."""
        if body is None or not isinstance(body.urls, list):
            raise RequestValidationError("URLs array is required")

        results = await coordinator.probe_batch(body.urls)
        return Envelope(data=[r.to_payload() for r in results]).model_dump()

    app.include_router(router)
    return app


def serve(settings: Optional[Settings] = None) -> None:
    """Run the API with uvicorn until interrupted."""
    import uvicorn

    settings = settings or Settings()
    app = create_app(settings)

    logger.info(
        "server_starting",
        host=settings.server.host,
        port=settings.server.port,
        prefix=settings.server.route_prefix or "/",
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_level=settings.logging.level.lower(),
    )
