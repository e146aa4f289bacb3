"""HTTP client for the OpenAI REST API and typed views of its responses."""

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from openai_mcp.config import Settings
from openai_mcp.errors import MalformedUpstreamResponseError, UpstreamApiError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------
class _UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ModelInfo(_UpstreamModel):
    id: str
    created: float


class ModelList(_UpstreamModel):
    data: list[ModelInfo]


class ChatMessage(_UpstreamModel):
    role: str | None = None
    content: str


class ChatChoice(_UpstreamModel):
    message: ChatMessage
    finish_reason: str | None = None


class ChatCompletion(_UpstreamModel):
    model: str | None = None
    choices: list[ChatChoice] = Field(min_length=1)
    usage: dict[str, Any] | None = None


class Embedding(_UpstreamModel):
    embedding: list[float]


class EmbeddingResponse(_UpstreamModel):
    model: str | None = None
    data: list[Embedding] = Field(min_length=1)
    usage: dict[str, Any] | None = None


def _describe(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err["loc"]) or "body"
    return f"{loc}: {err['msg']}"


def decode(model: type[ModelT], data: Any, path: str) -> ModelT:
    """Validate an upstream JSON body against ``model``."""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise MalformedUpstreamResponseError(
            f"Unexpected response from {path}: {_describe(e)}"
        ) from e


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------
class OpenAIClient:
    """Issues one request per call; nothing is pooled or shared between calls."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "OpenAIClient":
        return cls(
            settings.openai_api_key,
            base_url=settings.openai_api_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def _request(self, method: str, path: str, payload: dict | None = None) -> Any:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            resp = await client.request(
                method,
                path,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
                json=payload,
            )

        if not resp.is_success:
            logger.warning("OpenAI API %s %s returned %d", method, path, resp.status_code)
            raise UpstreamApiError(resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError as e:
            raise MalformedUpstreamResponseError(
                f"Invalid JSON from {path}: {e}"
            ) from e

    async def list_models(self) -> ModelList:
        data = await self._request("GET", "/v1/models")
        return decode(ModelList, data, "/v1/models")

    async def create_chat_completion(self, payload: dict) -> ChatCompletion:
        data = await self._request("POST", "/v1/chat/completions", payload)
        logger.debug("OpenAI API response: %s", data)
        return decode(ChatCompletion, data, "/v1/chat/completions")

    async def create_embedding(self, payload: dict) -> EmbeddingResponse:
        data = await self._request("POST", "/v1/embeddings", payload)
        return decode(EmbeddingResponse, data, "/v1/embeddings")
