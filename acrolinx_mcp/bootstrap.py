"""Application bootstrap wiring for dependency assembly."""

from fastapi import FastAPI

from acrolinx_mcp.adapters import AcrolinxStyleAdapter, BackoffRetrier
from acrolinx_mcp.api import create_api_application
from acrolinx_mcp.config import AppSettings
from acrolinx_mcp.gateway import ToolGateway
from acrolinx_mcp.jobs import WorkflowCoordinator, WorkflowCoordinatorConfig


def bootstrap_create_tool_gateway(settings: AppSettings) -> ToolGateway:
    """Assemble adapter, coordinator and gateway from validated settings.

    Args:
        settings: Validated application settings.

    Returns:
        ToolGateway: Fully wired gateway instance.

    Raises:
        ValueError: Raised when a settings value is rejected by a component.
    """

    retrier = BackoffRetrier(
        max_attempts=settings.max_retries,
        base_delay_seconds=settings.retry_base_delay_ms / 1000,
    )
    style_adapter = AcrolinxStyleAdapter(
        api_key=settings.acrolinx_api_key,
        base_url=settings.acrolinx_base_url,
        max_text_length=settings.max_text_length,
        retrier=retrier,
        request_timeout_seconds=settings.request_timeout_seconds,
    )
    coordinator = WorkflowCoordinator(
        submitter=style_adapter,
        status_reader=style_adapter,
        config=WorkflowCoordinatorConfig(
            timeout_ms=settings.workflow_timeout,
            poll_interval_ms=settings.poll_interval,
            continue_on_poll_error=settings.continue_on_poll_error,
        ),
    )
    return ToolGateway(
        workflow_runner=coordinator,
        workflow_adapter=style_adapter,
        include_raw_payload=settings.debug,
    )


def bootstrap_create_application(settings: AppSettings) -> FastAPI:
    """Assemble the HTTP application around a freshly wired gateway.

    Args:
        settings: Validated application settings.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        ValueError: Raised when a settings value is rejected by a component.
    """

    return create_api_application(settings=settings, gateway=bootstrap_create_tool_gateway(settings))
