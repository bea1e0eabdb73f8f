"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches either the stdio MCP
server or the HTTP tool surface.
"""

import argparse
import asyncio
import signal

import structlog
import uvicorn

from acrolinx_mcp.bootstrap import bootstrap_create_application, bootstrap_create_tool_gateway
from acrolinx_mcp.config import AppSettings, SettingsLoadError, config_configure_logging, config_load_settings
from acrolinx_mcp.gateway import gateway_create_mcp_server

logger = structlog.get_logger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SystemExit: Raised with status 1 when configuration validation fails.
    """

    argument_parser = argparse.ArgumentParser(description="Acrolinx MCP server entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="stdio",
        choices=("stdio", "api"),
        help="Runtime command: `stdio` serves MCP over stdin/stdout, `api` starts the HTTP server",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        config_configure_logging()
        logger.error("failed to start server", error=str(error))
        raise SystemExit(1) from error

    config_configure_logging(debug=settings.debug)

    if parsed_arguments.command == "api":
        uvicorn.run(
            bootstrap_create_application(settings),
            host=settings.application_host,
            port=settings.application_port,
        )
        return

    asyncio.run(main_run_stdio_server(settings))


async def main_run_stdio_server(settings: AppSettings) -> None:
    """Serve MCP over stdio until the stream closes or a termination signal arrives.

    Args:
        settings: Validated application settings.

    Returns:
        None: Returns after the gateway has been drained.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    gateway = bootstrap_create_tool_gateway(settings)
    server = gateway_create_mcp_server(gateway)
    stop_requested = asyncio.Event()

    loop = asyncio.get_running_loop()
    for signal_number in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(signal_number, stop_requested.set)

    logger.info("acrolinx mcp server running on stdio", base_url=settings.acrolinx_base_url)
    server_task = asyncio.create_task(server.run_async(transport="stdio"))
    stop_task = asyncio.create_task(stop_requested.wait())
    await asyncio.wait({server_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)

    logger.info("shutting down")
    await gateway.gateway_shutdown(grace_seconds=settings.shutdown_grace_seconds)

    for task in (server_task, stop_task):
        if not task.done():
            task.cancel()
    await asyncio.gather(server_task, stop_task, return_exceptions=True)


if __name__ == "__main__":
    main()
