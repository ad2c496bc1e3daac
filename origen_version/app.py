# ============================================================
# SPDX-License-Identifier: GPL-3.0-or-later
# This program is part of the Origen version service project.
# Copyright (C) 2026  The Origen version service authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# ============================================================
"""FastAPI ASGI application factory for the Origen version service.

This module provides the FastAPI application with:
- Request ID middleware for correlation
- Health check endpoint reporting the running version
- Version endpoint exposing the full version descriptor
- Lifespan logging
- Uvicorn entrypoint
"""

import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.responses import JSONResponse

from origen_version import __service_name__
from origen_version.config import ConfigurationError, Settings, get_settings
from origen_version.logging import (
    configure_logging,
    get_logger,
    log_version_banner,
    request_id_ctx,
)
from origen_version.version import VERSION_DESCRIPTOR, VersionDescriptor

REQUEST_ID_HEADER = b"x-request-id"


class RequestIDMiddleware:
    """Middleware that attaches a request ID to every HTTP request.

    This middleware:
    1. Reuses the incoming X-Request-ID header, or generates a UUID4
    2. Sets the request ID in the logging context for downstream logging
    3. Adds the request ID to the response headers

    Implemented as a pure ASGI middleware so the context variable stays set
    until the whole response has been sent.
    """

    def __init__(self, app: Any) -> None:
        """Initialize the middleware.

        Args:
            app: The ASGI application to wrap.
        """
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Process the request and attach request ID.

        Args:
            scope: The ASGI connection scope.
            receive: The receive callable.
            send: The send callable.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = None
        for name, value in scope.get("headers", []):
            if name == REQUEST_ID_HEADER:
                request_id = value.decode("latin-1")
                break
        if not request_id:
            request_id = str(uuid.uuid4())

        request_id_token = request_id_ctx.set(request_id)

        async def send_with_request_id(message: dict[str, Any]) -> None:
            """Wrapper to add request ID to response headers."""
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((REQUEST_ID_HEADER, request_id.encode("latin-1")))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_with_request_id)
        finally:
            request_id_ctx.reset(request_id_token)


def create_health_router(settings: Settings, descriptor: VersionDescriptor) -> APIRouter:
    """Create a router with the health check endpoint.

    Args:
        settings: The service settings.
        descriptor: The version descriptor to report.

    Returns:
        A FastAPI APIRouter with the health endpoint.
    """
    router = APIRouter()
    logger = get_logger(__name__)
    version = descriptor.render()

    @router.get("/healthz", tags=["Health"])
    async def health_check() -> JSONResponse:
        """Health check endpoint.

        Response body:
        {
            "status": "healthy",
            "service": "origen-version",
            "version": "0.7.47",
            "environment": "dev" | "prod"
        }
        """
        logger.debug("Health check passed")
        return JSONResponse(
            status_code=200,
            content={
                "status": "healthy",
                "service": __service_name__,
                "version": version,
                "environment": settings.origen_environment,
            },
        )

    return router


def create_version_router(descriptor: VersionDescriptor) -> APIRouter:
    """Create a router exposing the version descriptor.

    Args:
        descriptor: The version descriptor to expose.

    Returns:
        A FastAPI APIRouter with the version endpoint.
    """
    router = APIRouter()

    @router.get("/version", tags=["Version"])
    async def get_version() -> dict[str, Any]:
        """Return the version descriptor fields and the rendered string."""
        return descriptor.to_dict()

    return router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for the FastAPI application.

    Args:
        app: The FastAPI application instance.

    Yields:
        None
    """
    logger = get_logger(__name__)
    logger.info("Application lifespan started")
    yield
    logger.info("Application shutdown complete")


def create_app(
    settings: Settings | None = None,
    descriptor: VersionDescriptor | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    This is the ASGI application factory. It:
    1. Loads configuration (fails fast if invalid)
    2. Configures structured logging and logs the version banner
    3. Sets up middleware and lifespan management
    4. Mounts the health and version routers

    Args:
        settings: Optional settings instance. If not provided,
                  will be loaded from environment variables.
        descriptor: Optional version descriptor. Defaults to the
                    package's own version.

    Returns:
        The configured FastAPI application.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    if settings is None:
        settings = get_settings()
    if descriptor is None:
        descriptor = VERSION_DESCRIPTOR

    configure_logging(settings, descriptor)
    logger = get_logger(__name__)

    log_version_banner(descriptor, logger)
    logger.info(
        "Starting Origen version service",
        environment=settings.origen_environment,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
    logger.debug(
        "Configuration loaded",
        config=settings.get_redacted_config_dict(),
    )

    app = FastAPI(
        title="Origen Version Service",
        description="Reports the running Origen version",
        version=descriptor.render(),
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.version_descriptor = descriptor

    app.add_middleware(RequestIDMiddleware)

    app.include_router(create_health_router(settings, descriptor))
    app.include_router(create_version_router(descriptor))

    logger.info("Origen version service started successfully")

    return app


def main() -> None:
    """Uvicorn entrypoint for running the service.

    This function is called by ``origen-version serve`` or
    ``python -m origen_version.app``.
    """
    import uvicorn

    try:
        # Load settings to validate configuration before starting uvicorn
        settings = get_settings()

        uvicorn.run(
            "origen_version.app:create_app",
            factory=True,
            host=settings.service_host,
            port=settings.service_port,
            log_level=settings.log_level.lower(),
            reload=False,
        )
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
