"""Application configuration and router setup."""

import logging

import fastapi
from fastapi import Request
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from components.core import init_db
from components.core.config import get_settings
from components.core.exceptions import (
    FeatureNotAvailable,
    InvalidStatusTransition,
    PaymentGatewayError,
    ProServError,
    QuotaExceeded,
    RecordNotFound,
    ValidationFailed,
)
from restapi.endpoints import (
    admin,
    appointments,
    auth,
    clients,
    health_check,
    plans,
    reports,
    services,
    transactions,
)

settings = get_settings()
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationFailed: 400,
    QuotaExceeded: 402,
    FeatureNotAvailable: 403,
    RecordNotFound: 404,
    InvalidStatusTransition: 409,
    PaymentGatewayError: 502,
}

PAYMENT_HINT = "Error processing payment. Verify the backend payment configuration."


def configure_logging() -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduce verbosity of third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


async def domain_error_handler(request: Request, exc: ProServError) -> JSONResponse:
    """Translate domain errors into JSON error responses."""
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        400,
    )
    detail = exc.message
    if isinstance(exc, PaymentGatewayError):
        logger.error(f"Payment gateway error on {request.url.path}: {exc.message}")
        detail = f"{PAYMENT_HINT} ({exc.message})"
    else:
        logger.info(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": detail})


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()

    app = fastapi.FastAPI(
        title="ProServ",
        description="Scheduling and billing for independent service professionals",
        version="1.0.0",
        lifespan=init_db.lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ProServError, domain_error_handler)

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(clients.router)
    app.include_router(services.router)
    app.include_router(appointments.router)
    app.include_router(transactions.router)
    app.include_router(reports.router)
    app.include_router(plans.router)
    app.include_router(admin.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title="ProServ",
            version="1.0.0",
            description="Scheduling and billing for independent service professionals",
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
