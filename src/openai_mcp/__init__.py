"""MCP server exposing OpenAI model listing, chat completion and embeddings as tools."""

__version__ = "1.0.0"
