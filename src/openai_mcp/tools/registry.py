"""Tool definition and dispatch registry."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum

from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.errors import UnknownToolError

logger = logging.getLogger(__name__)

Handler = Callable[[dict], Awaitable[ResponseEnvelope]]


class ToolName(str, Enum):
    LIST_MODELS = "listModels"
    CHAT_COMPLETION = "chatCompletion"
    CREATE_EMBEDDING = "createEmbedding"


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: dict

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class ToolEntry:
    descriptor: ToolDescriptor
    handler: Handler


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[ToolName, ToolEntry] = {}

    def register(
        self,
        name: ToolName,
        description: str,
        input_schema: dict,
        handler: Handler,
    ) -> None:
        name = ToolName(name)
        self._tools[name] = ToolEntry(
            descriptor=ToolDescriptor(
                name=name.value,
                description=description,
                input_schema=input_schema,
            ),
            handler=handler,
        )

    def list_tools(self) -> list[ToolDescriptor]:
        """Return tool descriptors in registration order."""
        return [entry.descriptor for entry in self._tools.values()]

    def _resolve(self, name: str) -> ToolEntry:
        try:
            entry = self._tools.get(ToolName(name))
        except ValueError:
            entry = None
        if entry is None:
            raise UnknownToolError(name)
        return entry

    async def dispatch(self, name: str, arguments: dict | None) -> ResponseEnvelope:
        """Execute a tool by name; always returns an envelope, never raises."""
        try:
            entry = self._resolve(name)
        except UnknownToolError as e:
            logger.error(str(e))
            return ResponseEnvelope.failure(str(e))

        logger.debug("Received tool call: %s", name)
        try:
            result = await entry.handler(arguments or {})
        except Exception as e:
            logger.exception("Tool %s failed", name)
            return ResponseEnvelope.failure(f"Error: {e}")

        if not isinstance(result, ResponseEnvelope):
            logger.error("Tool %s returned %s instead of an envelope", name, type(result).__name__)
            return ResponseEnvelope.failure(f"Error: tool {name} returned an invalid result")
        return result
