from openai_mcp.config import Settings
from openai_mcp.tools.chat import register_chat_tool
from openai_mcp.tools.embeddings import register_embedding_tool
from openai_mcp.tools.models import register_models_tool
from openai_mcp.tools.registry import ToolRegistry
from openai_mcp.upstream import OpenAIClient


def build_registry(settings: Settings, client: OpenAIClient) -> ToolRegistry:
    """Register every tool in discovery order."""
    registry = ToolRegistry()
    register_models_tool(registry, client)
    register_chat_tool(registry, client, settings.default_chat_model)
    register_embedding_tool(registry, client, settings.default_embedding_model)
    return registry
