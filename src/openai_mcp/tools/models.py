"""listModels tool handler."""

import logging
from datetime import datetime, timezone

import httpx

from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.errors import MalformedUpstreamResponseError, OpenAIMCPError
from openai_mcp.tools.registry import ToolName, ToolRegistry
from openai_mcp.upstream import ModelInfo, OpenAIClient

logger = logging.getLogger(__name__)

LIST_MODELS_SCHEMA = {
    "type": "object",
    "properties": {},
    "required": [],
}


def format_created(created: float) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 1970-01-01T00:00:00.000Z."""
    try:
        dt = datetime.fromtimestamp(created, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as e:
        raise MalformedUpstreamResponseError(f"Invalid created timestamp {created}: {e}") from e
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_model(model: ModelInfo) -> str:
    return f"- {model.id} (created: {format_created(model.created)})"


def register_models_tool(registry: ToolRegistry, client: OpenAIClient) -> None:
    async def handle_list_models(input: dict) -> ResponseEnvelope:
        logger.debug("Executing listModels")
        try:
            models = await client.list_models()
            formatted = "\n".join(format_model(m) for m in models.data)
        except (OpenAIMCPError, httpx.HTTPError) as e:
            logger.warning("Error listing models: %s", e)
            return ResponseEnvelope.failure(f"Error listing models: {e}")

        return ResponseEnvelope.success(
            f"Available OpenAI Models:\n\n{formatted}",
            {"count": len(models.data)},
        )

    registry.register(
        ToolName.LIST_MODELS,
        "List available OpenAI models",
        LIST_MODELS_SCHEMA,
        handle_list_models,
    )
