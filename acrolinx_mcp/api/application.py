"""FastAPI application factory for the HTTP tool surface."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from acrolinx_mcp.config import AppSettings
from acrolinx_mcp.gateway import ToolGateway

from .routers import api_create_health_router, api_create_tools_router


def create_api_application(settings: AppSettings, gateway: ToolGateway) -> FastAPI:
    """Create the FastAPI application instance for the service.

    The application lifespan drains the gateway on shutdown so in-flight
    invocations get the configured grace period.

    Args:
        settings: Validated application settings.
        gateway: Tool gateway shared by all routes.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when gateway is missing.
    """

    if gateway is None:
        raise ValueError("gateway must not be None")

    @asynccontextmanager
    async def api_lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        await gateway.gateway_shutdown(grace_seconds=settings.shutdown_grace_seconds)

    application = FastAPI(title="Acrolinx MCP Server", lifespan=api_lifespan)

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service descriptor."""

        return {
            "service": "acrolinx-mcp",
            "status": "ready",
            "base_url": settings.acrolinx_base_url,
        }

    application.include_router(api_create_health_router(gateway=gateway))
    application.include_router(api_create_tools_router(gateway=gateway))

    return application
