"""Normalized message types produced by the transcript parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MessageType(Enum):
    TEXT_RESPONSE = "text_response"
    TOOL_SUMMARY = "tool_summary"
    PERMISSION_REQUEST = "permission_request"
    INPUT_REQUEST = "input_request"
    USER_MESSAGE = "user_message"


@dataclass(frozen=True)
class ParsedMessage:
    """One entry in the operator feed."""

    type: MessageType
    content: str  # never empty
    timestamp: str  # ISO 8601
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "content": self.content,
            "metadata": self.metadata,
            "timestamp": self.timestamp,
        }


@dataclass
class ParseResult:
    """Messages from one parse call plus the offset to resume from."""

    messages: list[ParsedMessage] = field(default_factory=list)
    bytes_read: int = 0

    def to_dict(self) -> dict:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "bytesRead": self.bytes_read,
        }
