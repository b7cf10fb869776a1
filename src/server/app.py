"""MCP stdio server exposing the notification tools."""
import asyncio
import logging
from typing import Any, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from src.notify import NotificationDispatcher, NotifyConfig, build_dispatcher, load_config
from src.server.tools import TOOL_DEFINITIONS, NotifyTools

logger = logging.getLogger(__name__)

SERVER_NAME = "macos-notify-mcp"


def create_server(
    config: Optional[NotifyConfig] = None,
    dispatcher: Optional[NotificationDispatcher] = None,
) -> Server:
    """Create the MCP server with tool handlers bound to one dispatcher."""
    if dispatcher is None:
        dispatcher = build_dispatcher(config or load_config())
    tools = NotifyTools(dispatcher)
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [Tool(**definition) for definition in TOOL_DEFINITIONS]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
        text = await tools.call(name, arguments)
        return [TextContent(type="text", text=text)]

    return server


async def serve(config: Optional[NotifyConfig] = None) -> None:
    config = config or load_config()
    dispatcher = build_dispatcher(config)
    if config.resolve_title:
        # Runs alongside the session; early sends use the literal title.
        dispatcher.schedule_default_title()
    server = create_server(config, dispatcher)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("macOS Notify MCP server started")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Entry point."""
    config = load_config()
    # stdout carries the protocol; logs go to stderr.
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    asyncio.run(serve(config))


if __name__ == "__main__":
    main()
