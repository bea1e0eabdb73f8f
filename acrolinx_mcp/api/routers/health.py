"""Health endpoint router reporting gateway lifecycle state."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from acrolinx_mcp.gateway import GatewayLifecycleState, ToolGateway


def api_create_health_router(gateway: ToolGateway) -> APIRouter:
    """Create health-check router with gateway lifecycle status.

    Args:
        gateway: Tool gateway whose lifecycle is reported.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when gateway is invalid.
    """

    if gateway is None:
        raise ValueError("gateway must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and gateway lifecycle state.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        lifecycle_state = gateway.gateway_lifecycle_state
        payload = {
            "status": "ok" if lifecycle_state is GatewayLifecycleState.RUNNING else "unavailable",
            "app": "up",
            "gateway": lifecycle_state.value,
            "in_flight": gateway.gateway_in_flight_count(),
        }
        if lifecycle_state is GatewayLifecycleState.RUNNING:
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
