"""chatCompletion tool handler."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.errors import OpenAIMCPError, ValidationError
from openai_mcp.tools.registry import ToolName, ToolRegistry
from openai_mcp.upstream import OpenAIClient

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150

CHAT_COMPLETION_SCHEMA = {
    "type": "object",
    "properties": {
        "model": {
            "type": "string",
            "description": "The model to use (e.g., gpt-3.5-turbo, gpt-4)",
        },
        "messages": {
            "type": "array",
            "description": "The conversation messages",
            "items": {
                "type": "object",
                "properties": {
                    "role": {
                        "type": "string",
                        "enum": ["system", "user", "assistant"],
                        "description": "The role of the message sender (system, user, assistant)",
                    },
                    "content": {
                        "type": "string",
                        "description": "The content of the message",
                    },
                },
                "required": ["role", "content"],
            },
        },
        "temperature": {
            "type": "number",
            "description": "Controls randomness (0-1)",
        },
        "max_tokens": {
            "type": "number",
            "description": "Maximum number of tokens to generate",
        },
    },
    "required": ["messages"],
}


@dataclass(frozen=True)
class ChatCompletionArgs:
    messages: list[Any]
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None

    @classmethod
    def parse(cls, arguments: dict) -> "ChatCompletionArgs":
        messages = arguments.get("messages")
        if not isinstance(messages, (list, tuple)) or len(messages) == 0:
            raise ValidationError("Messages array is required and must not be empty")
        # Streaming responses are never requested upstream
        if arguments.get("stream") is True:
            raise ValidationError("Streaming is not supported")
        return cls(
            messages=list(messages),
            model=arguments.get("model"),
            temperature=arguments.get("temperature"),
            max_tokens=arguments.get("max_tokens"),
        )

    def to_request(self, default_model: str) -> dict:
        return {
            "model": self.model or default_model,
            "messages": self.messages,
            "temperature": self.temperature if self.temperature is not None else DEFAULT_TEMPERATURE,
            "max_tokens": self.max_tokens if self.max_tokens is not None else DEFAULT_MAX_TOKENS,
            "stream": False,
        }


def register_chat_tool(
    registry: ToolRegistry,
    client: OpenAIClient,
    default_model: str = "gpt-3.5-turbo",
) -> None:
    async def handle_chat_completion(input: dict) -> ResponseEnvelope:
        logger.debug("Executing chatCompletion with model: %s", input.get("model"))
        try:
            args = ChatCompletionArgs.parse(input)
            request = args.to_request(default_model)
            logger.debug("OpenAI request: %s", request)

            completion = await client.create_chat_completion(request)
        except (OpenAIMCPError, httpx.HTTPError) as e:
            logger.warning("Error in chatCompletion: %s", e)
            return ResponseEnvelope.failure(f"Error: {e}")

        choice = completion.choices[0]
        metadata = {
            "model": completion.model,
            "usage": completion.usage,
            "finish_reason": choice.finish_reason,
        }
        # Fields missing upstream are left out rather than sent as null
        return ResponseEnvelope.success(
            choice.message.content,
            {k: v for k, v in metadata.items() if v is not None},
        )

    registry.register(
        ToolName.CHAT_COMPLETION,
        "Generate a response using OpenAI's chat completion API",
        CHAT_COMPLETION_SCHEMA,
        handle_chat_completion,
    )
