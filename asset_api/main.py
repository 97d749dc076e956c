"""
Hyperledger Fabric Asset Transfer API - Main Application Entry Point.

REST façade over the asset-transfer contract: each request authenticates
to the ledger as a role, invokes one contract function and maps the
outcome to an HTTP response.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from asset_api import __version__
from asset_api.api.router import api_router
from asset_api.config import Settings, get_settings
from asset_api.core.exceptions import AssetAPIException, EndpointNotFoundException
from asset_api.ledger.session import GatewayFactory, SessionProvisioner, rest_gateway_factory
from asset_api.services.metrics import MetricsMiddleware

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    app_settings: Settings = app.state.settings
    provisioner: SessionProvisioner = app.state.session_provisioner

    # Startup
    logger.info(f"Starting {app_settings.PROJECT_NAME}")
    logger.info(f"Channel: {app_settings.CHANNEL_NAME}, contract: {app_settings.CONTRACT_NAME}")
    logger.info(f"Ledger gateway: {app_settings.GATEWAY_URL}")
    logger.info(f"Connection profile: {app_settings.CONNECTION_PROFILE_PATH}")

    labels = await provisioner.wallet.labels()
    if labels:
        logger.info(f"Wallet identities: {', '.join(labels)}")
    else:
        logger.warning(f"No identities found in wallet {app_settings.WALLET_PATH}")

    yield

    # Shutdown
    logger.info(f"Shutting down {app_settings.PROJECT_NAME}")


async def asset_api_exception_handler(request: Request, exc: AssetAPIException) -> JSONResponse:
    """Render API exceptions as `{"error": ..., "details"?: ...}`."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Unmatched paths and unsupported methods both answer 404.
    """
    if exc.status_code in (404, 405):
        return await asset_api_exception_handler(request, EndpointNotFoundException())
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are client errors."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": jsonable_encoder(exc.errors()),
        },
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Catch-all exception handler for unexpected errors.
    Logs the full error and echoes its message.
    """
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": "Something went wrong!",
            "details": str(exc),
        },
    )


def create_app(
    app_settings: Settings | None = None,
    gateway_factory: GatewayFactory = rest_gateway_factory,
) -> FastAPI:
    """
    Build the application.

    Args:
        app_settings: Settings to run with, defaults to the environment
        gateway_factory: Builds one ledger gateway per request

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or get_settings()

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description="""
## Hyperledger Fabric Asset Transfer API

REST access to the asset-transfer contract on a Fabric channel.

### Roles
- **admin**: create, update and delete assets, list every asset
- **auditor**: read any asset, list every asset
- **user**: read and list own assets

Access control itself is enforced by the contract; the role only selects
which wallet identity signs the request.
        """,
        version=__version__,
        debug=app_settings.DEBUG,
        openapi_tags=[
            {"name": "assets", "description": "Asset operations on the ledger"},
            {"name": "users", "description": "Role permissions"},
            {"name": "health", "description": "Service health and metrics"},
        ],
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.session_provisioner = SessionProvisioner(app_settings, gateway_factory)

    # CORS middleware for cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Metrics middleware for request tracking
    app.add_middleware(MetricsMiddleware)

    app.add_exception_handler(AssetAPIException, asset_api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(api_router)

    return app


app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "asset_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
