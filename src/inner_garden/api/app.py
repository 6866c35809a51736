"""FastAPI application factory."""

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from inner_garden.api.admin import router as admin_router
from inner_garden.api.limiter import TOO_MANY_ORDERS, create_limiter, handle_rate_limit
from inner_garden.api.models import (
    CheckoutRequest,
    ConsultationRequest,
    OrderRequest,
    VisualizeRequest,
)
from inner_garden.app_logging import configure_logging
from inner_garden.config import parse_allowed_origins
from inner_garden.containers import AppContainer
from inner_garden.domain.errors import InnerGardenError
from inner_garden.domain.timestamps import format_timestamp, utc_now


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    started_at = time.monotonic()
    allowed_origins = parse_allowed_origins(container.settings.allowed_origins)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    limiter = create_limiter(container.settings)
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit)
    app.add_middleware(SlowAPIMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allowed_origins != ["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(InnerGardenError)
    async def handle_app_error(request: Request, exc: InnerGardenError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                extra={"path": request.url.path, "status": exc.status_code},
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(400, "Invalid request body")

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return _error_response(500, "Internal server error")

    app.include_router(admin_router)

    @app.get("/api/health")
    async def health() -> dict[str, object]:
        """Simple health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": format_timestamp(utc_now()),
            "uptime": round(time.monotonic() - started_at, 3),
        }

    @app.get("/api/artworks")
    async def public_artworks(request: Request) -> dict[str, object]:
        """Return the public artwork catalogue."""
        state_container: AppContainer = request.app.state.container
        collection = state_container.artwork_service.list_artworks()
        return {
            "success": True,
            "artworks": [artwork.to_dict() for artwork in collection.artworks],
            "updated_at": collection.updated_at,
        }

    @app.post("/api/order")
    @limiter.limit(
        container.settings.rate_limit_order, error_message=TOO_MANY_ORDERS
    )
    async def submit_order(body: OrderRequest, request: Request) -> dict[str, object]:
        """Notify the studio and the customer about an artwork order."""
        state_container: AppContainer = request.app.state.container
        await state_container.notification_service.submit_order(body.to_details())
        return {"success": True, "message": "Order received successfully"}

    @app.post("/api/consultation")
    async def submit_consultation(
        body: ConsultationRequest, request: Request
    ) -> dict[str, object]:
        """Forward a consultation request to the studio."""
        state_container: AppContainer = request.app.state.container
        await state_container.notification_service.submit_consultation(
            body.to_details()
        )
        return {"success": True, "message": "Consultation request received"}

    @app.post("/api/checkout")
    async def create_checkout(
        body: CheckoutRequest, request: Request
    ) -> dict[str, object]:
        """Start a hosted checkout for an available artwork."""
        state_container: AppContainer = request.app.state.container
        session = await state_container.checkout_service.create_session(
            body.artwork_id, body.frame
        )
        return {"success": True, "id": session.id, "url": session.url}

    @app.post("/api/visualize")
    async def visualize(body: VisualizeRequest, request: Request) -> dict[str, object]:
        """Suggest where an artwork would hang in a room photo."""
        state_container: AppContainer = request.app.state.container
        artwork = state_container.artwork_service.get(body.artwork_id)
        suggestion = await state_container.visualization_service.suggest_placement(
            body.image, artwork
        )
        return {"success": True, "suggestion": suggestion.model_dump()}

    return app


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"success": False, "error": message}
    )
