# Copyright (c) 2024 Fernando Libedinsky
# Product: SearchToolkit
#
# SearchToolkit is open source software.

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional


TEXT_PLAIN = "text/plain"


@dataclass(frozen=True)
class ToolInvocation:
    name: str
    arguments: Optional[Mapping[str, Any]] = None


@dataclass
class OutboundRequest:
    """
    A request ready for the call service.

    `query` holds (name, value) pairs whose values are already percent-encoded,
    in the order the provider declares them.
    """
    method: str
    base_url: str
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    json_body: Optional[dict[str, Any]] = None

    @property
    def query_string(self) -> str:
        return "&".join(f"{name}={value}" for name, value in self.query)

    @property
    def url(self) -> str:
        if not self.query:
            return self.base_url
        return f"{self.base_url}?{self.query_string}"


@dataclass(frozen=True)
class InboundResponse:
    status_code: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class Content:
    text: Optional[str] = None
    mime_type: Optional[str] = None
    type: str = "text"

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"type": self.type}
        if self.text is not None:
            payload["text"] = self.text
        if self.mime_type is not None:
            payload["mimeType"] = self.mime_type
        return payload


@dataclass
class ToolResult:
    content: list[Content] = field(default_factory=list)
    is_error: Optional[bool] = None

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(content=[Content(text=text, mime_type=TEXT_PLAIN)])

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(content=[Content(text=message)], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content if part.text is not None)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {}
        if self.is_error is not None:
            payload["isError"] = self.is_error
        payload["content"] = [part.to_dict() for part in self.content]
        return payload
