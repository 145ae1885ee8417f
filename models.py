"""Shared typed models for the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

ROLES: frozenset[str] = frozenset({"system", "user", "assistant"})


@dataclass(frozen=True, slots=True)
class Paper:
    """Normalized arXiv record used across translation and publishing."""

    paper_id: str
    title: str
    summary: str
    published_at: datetime
    pdf_url: str
    url: str


@dataclass(frozen=True, slots=True)
class Message:
    role: str
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unsupported chat role: {self.role!r}")

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Any) -> Message:
        if not isinstance(data, dict):
            raise TypeError("message must be a JSON object")
        role = data["role"]
        content = data["content"]
        if not isinstance(role, str) or not isinstance(content, str):
            raise TypeError("message role and content must be strings")
        return cls(role=role, content=content)


@dataclass(frozen=True, slots=True)
class ChatRequest:
    """Body of a chat-completion call: a model id plus ordered messages."""

    model: str
    messages: tuple[Message, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [message.to_dict() for message in self.messages],
        }


@dataclass(frozen=True, slots=True)
class Usage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> Usage:
        if not isinstance(data, dict):
            raise TypeError("usage must be a JSON object")
        counters = {
            key: data.get(key, 0)
            for key in ("prompt_tokens", "completion_tokens", "total_tokens")
        }
        for key, value in counters.items():
            # bool is an int subclass; reject it explicitly
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"usage.{key} must be a non-negative integer, got {value!r}")
        return cls(**counters)


@dataclass(frozen=True, slots=True)
class Choice:
    message: Message
    finish_reason: str
    index: int

    @classmethod
    def from_dict(cls, data: Any) -> Choice:
        if not isinstance(data, dict):
            raise TypeError("choice must be a JSON object")
        index = data.get("index", 0)
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError("choice.index must be an integer")
        return cls(
            message=Message.from_dict(data["message"]),
            finish_reason=data.get("finish_reason") or "",
            index=index,
        )


@dataclass(frozen=True, slots=True)
class ChatResponse:
    """Parsed chat-completion response. Unknown keys are ignored."""

    id: str
    object: str
    created: int
    model: str
    usage: Usage
    choices: tuple[Choice, ...]

    @classmethod
    def from_dict(cls, data: Any) -> ChatResponse:
        """Build a response from decoded JSON.

        Raises KeyError, TypeError or ValueError when the payload does not have
        the expected shape. An empty ``choices`` list is accepted here; callers
        that need a completion must check for it.
        """
        if not isinstance(data, dict):
            raise TypeError("chat response must be a JSON object")
        choices = data["choices"]
        if not isinstance(choices, list):
            raise TypeError("choices must be a list")
        created = data["created"]
        if isinstance(created, bool) or not isinstance(created, int):
            raise TypeError("created must be an integer timestamp")
        return cls(
            id=str(data["id"]),
            object=str(data.get("object", "chat.completion")),
            created=created,
            model=str(data["model"]),
            usage=Usage.from_dict(data.get("usage") or {}),
            choices=tuple(Choice.from_dict(choice) for choice in choices),
        )


@dataclass(frozen=True, slots=True)
class SlackMessage:
    """chat.postMessage payload."""

    channel: str
    text: str

    def __post_init__(self) -> None:
        if not self.channel.strip():
            raise ValueError("Slack channel must not be empty")

    def to_dict(self) -> dict[str, str]:
        return {"channel": self.channel, "text": self.text}
