"""Uniform result shape returned by every tool invocation."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ContentItem:
    text: str
    type: str = "text"

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ResponseEnvelope:
    content: list[ContentItem]
    metadata: dict[str, Any] = field(default_factory=dict)
    is_error: bool = False

    @classmethod
    def success(cls, text: str, metadata: dict[str, Any] | None = None) -> "ResponseEnvelope":
        return cls(content=[ContentItem(text=text)], metadata=metadata or {})

    @classmethod
    def failure(cls, text: str) -> "ResponseEnvelope":
        return cls(content=[ContentItem(text=text)], metadata={}, is_error=True)

    @property
    def text(self) -> str:
        """Text of the first content item."""
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict:
        """Wire form: ``isError`` is only present on failures."""
        result: dict[str, Any] = {
            "content": [item.to_dict() for item in self.content],
            "metadata": self.metadata,
        }
        if self.is_error:
            result["isError"] = True
        return result
