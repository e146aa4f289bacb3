"""createEmbedding tool handler."""

import logging
from dataclasses import dataclass

import httpx

from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.errors import OpenAIMCPError, ValidationError
from openai_mcp.tools.registry import ToolName, ToolRegistry
from openai_mcp.upstream import OpenAIClient

logger = logging.getLogger(__name__)

CREATE_EMBEDDING_SCHEMA = {
    "type": "object",
    "properties": {
        "model": {
            "type": "string",
            "description": "The model to use (e.g., text-embedding-ada-002)",
        },
        "input": {
            "type": ["string", "array"],
            "items": {"type": "string"},
            "description": "The text to embed, can be a string or array of strings",
        },
    },
    "required": ["input"],
}


@dataclass(frozen=True)
class EmbeddingArgs:
    input: str | list[str]
    model: str | None = None

    @classmethod
    def parse(cls, arguments: dict) -> "EmbeddingArgs":
        value = arguments.get("input")
        if value is None:
            raise ValidationError("Input is required")
        return cls(input=value, model=arguments.get("model"))

    def to_request(self, default_model: str) -> dict:
        return {"model": self.model or default_model, "input": self.input}


def register_embedding_tool(
    registry: ToolRegistry,
    client: OpenAIClient,
    default_model: str = "text-embedding-ada-002",
) -> None:
    async def handle_create_embedding(input: dict) -> ResponseEnvelope:
        logger.debug("Executing createEmbedding with model: %s", input.get("model"))
        try:
            args = EmbeddingArgs.parse(input)
            result = await client.create_embedding(args.to_request(default_model))
        except (OpenAIMCPError, httpx.HTTPError) as e:
            logger.warning("Error in createEmbedding: %s", e)
            return ResponseEnvelope.failure(f"Error: {e}")

        # Only the dimension is reported; the vector itself is not surfaced
        dimension = len(result.data[0].embedding)
        metadata = {"model": result.model, "usage": result.usage}
        return ResponseEnvelope.success(
            f"Embedding generated successfully. Vector dimension: {dimension}",
            {k: v for k, v in metadata.items() if v is not None},
        )

    registry.register(
        ToolName.CREATE_EMBEDDING,
        "Generate embeddings for text using OpenAI's embedding API",
        CREATE_EMBEDDING_SCHEMA,
        handle_create_embedding,
    )
