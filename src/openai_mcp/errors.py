"""Exceptions raised while serving a tool call."""


class OpenAIMCPError(Exception):
    """Base class for errors reported back to the caller as an error envelope."""


class ValidationError(OpenAIMCPError):
    """Tool arguments are missing or malformed."""


class UnknownToolError(OpenAIMCPError):
    """No handler is registered under the requested tool name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class UpstreamApiError(OpenAIMCPError):
    """The upstream API answered with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"OpenAI API error: {body}")


class MalformedUpstreamResponseError(OpenAIMCPError):
    """The upstream API answered successfully but with an unexpected body."""
