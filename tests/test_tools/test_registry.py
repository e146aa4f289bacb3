"""Tests for openai_mcp.tools.registry module."""

import pytest

from openai_mcp.envelope import ResponseEnvelope
from openai_mcp.errors import OpenAIMCPError, UnknownToolError
from openai_mcp.tools import build_registry
from openai_mcp.tools.registry import ToolName, ToolRegistry


async def _echo_handler(input):
    return ResponseEnvelope.success(input.get("msg", ""), {"echo": input})


async def _failing_handler(input):
    raise RuntimeError("boom")


async def _bare_string_handler(input):
    return "plain string result"


@pytest.fixture
def registry():
    r = ToolRegistry()
    r.register(
        name=ToolName.LIST_MODELS,
        description="Echoes input",
        input_schema={"type": "object", "properties": {"msg": {"type": "string"}}},
        handler=_echo_handler,
    )
    return r


async def test_register_and_list_tools(registry):
    tools = registry.list_tools()
    assert len(tools) == 1
    assert tools[0].name == "listModels"
    assert tools[0].description == "Echoes input"
    assert tools[0].to_dict()["inputSchema"]["properties"] == {"msg": {"type": "string"}}


async def test_register_accepts_plain_name():
    r = ToolRegistry()
    r.register("chatCompletion", "Chat", {"type": "object"}, _echo_handler)
    assert r.list_tools()[0].name == "chatCompletion"


async def test_register_rejects_unknown_name():
    with pytest.raises(ValueError):
        ToolRegistry().register("deleteEverything", "Nope", {"type": "object"}, _echo_handler)


async def test_dispatch_calls_handler(registry):
    result = await registry.dispatch("listModels", {"msg": "hello"})
    assert result.text == "hello"
    assert result.metadata == {"echo": {"msg": "hello"}}


async def test_dispatch_none_arguments(registry):
    result = await registry.dispatch("listModels", None)
    assert result.is_error is False
    assert result.metadata == {"echo": {}}


async def test_dispatch_unknown_tool(registry):
    result = await registry.dispatch("nonexistent", {})
    assert result.to_dict() == {
        "content": [{"type": "text", "text": "Unknown tool: nonexistent"}],
        "metadata": {},
        "isError": True,
    }


async def test_dispatch_known_but_unregistered_tool(registry):
    result = await registry.dispatch("createEmbedding", {"input": "x"})
    assert result.is_error is True
    assert result.text == "Unknown tool: createEmbedding"


async def test_dispatch_handler_exception():
    registry = ToolRegistry()
    registry.register(ToolName.CHAT_COMPLETION, "Fails", {"type": "object"}, _failing_handler)
    result = await registry.dispatch("chatCompletion", {})
    assert result.is_error is True
    assert result.text == "Error: boom"


async def test_dispatch_rejects_non_envelope_result():
    registry = ToolRegistry()
    registry.register(ToolName.CHAT_COMPLETION, "Bad", {"type": "object"}, _bare_string_handler)
    result = await registry.dispatch("chatCompletion", {})
    assert result.is_error is True
    assert result.text.startswith("Error")


async def test_build_registry_declaration_order(settings, client, upstream):
    registry = build_registry(settings, client)
    names = [t.name for t in registry.list_tools()]
    assert names == ["listModels", "chatCompletion", "createEmbedding"]


async def test_list_tools_is_stable_and_offline(settings, client, upstream):
    registry = build_registry(settings, client)
    first = [t.to_dict() for t in registry.list_tools()]
    second = [t.to_dict() for t in registry.list_tools()]
    assert first == second
    assert upstream.requests == []


async def test_tool_schemas(settings, client):
    tools = {t.name: t.to_dict() for t in build_registry(settings, client).list_tools()}

    assert tools["listModels"]["inputSchema"]["properties"] == {}
    assert tools["listModels"]["inputSchema"]["required"] == []

    chat = tools["chatCompletion"]["inputSchema"]
    assert chat["required"] == ["messages"]
    assert set(chat["properties"]) == {"model", "messages", "temperature", "max_tokens"}
    assert chat["properties"]["messages"]["items"]["properties"]["role"]["enum"] == [
        "system", "user", "assistant",
    ]

    embedding = tools["createEmbedding"]["inputSchema"]
    assert embedding["required"] == ["input"]
    assert embedding["properties"]["input"]["type"] == ["string", "array"]


def test_unknown_tool_error():
    err = UnknownToolError("deleteEverything")
    assert isinstance(err, OpenAIMCPError)
    assert err.name == "deleteEverything"
    assert str(err) == "Unknown tool: deleteEverything"
    assert UnknownToolError.__doc__
