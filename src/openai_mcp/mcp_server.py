"""MCP stdio server exposing OpenAI tools.

Run as: python -m openai_mcp.mcp_server
"""

import asyncio
import logging
import sys

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from pydantic import ValidationError as PydanticValidationError

from openai_mcp import __version__
from openai_mcp.config import Settings, get_settings
from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.tools import build_registry
from openai_mcp.tools.registry import ToolDescriptor, ToolRegistry
from openai_mcp.upstream import OpenAIClient

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def configure_logging(settings: Settings) -> None:
    """Log to stderr; stdout is reserved for the MCP stream."""
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr, force=True)

    log_file = settings.resolved_log_file()
    if not log_file:
        return
    try:
        handler = logging.FileHandler(log_file)
    except OSError as e:
        logger.warning("Error opening log file %s: %s", log_file, e)
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)


# ---------------------------------------------------------------------------
# Conversion to MCP types
# ---------------------------------------------------------------------------
def to_mcp_tool(descriptor: ToolDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.input_schema,
    )


def to_call_tool_result(envelope: ResponseEnvelope) -> types.CallToolResult:
    # ``metadata`` is not part of CallToolResult; Result models accept extra fields
    return types.CallToolResult(
        content=[types.TextContent(type="text", text=item.text) for item in envelope.content],
        isError=envelope.is_error,
        metadata=envelope.metadata,
    )


# ---------------------------------------------------------------------------
# MCP server setup
# ---------------------------------------------------------------------------
def create_server(registry: ToolRegistry) -> Server:
    server = Server("openai", version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        logger.debug("Received list tools request")
        return [to_mcp_tool(d) for d in registry.list_tools()]

    # Handlers do their own argument checks
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict) -> types.CallToolResult:
        envelope = await registry.dispatch(name, arguments)
        return to_call_tool_result(envelope)

    return server


async def serve(settings: Settings) -> None:
    client = OpenAIClient.from_settings(settings)
    server = create_server(build_registry(settings, client))
    logger.info("Server instance created")

    async with stdio_server() as (read_stream, write_stream):
        logger.info("Server connected and running")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        logging.basicConfig(level=logging.ERROR, format=LOG_FORMAT, stream=sys.stderr)
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    configure_logging(settings)
    logger.info("Starting OpenAI MCP server...")
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)


if __name__ == "__main__":
    main()
