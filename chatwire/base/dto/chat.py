"""
Pydantic DTOs for OpenAI-compatible chat-completion request bodies.

Purpose
-------
Validate a request body before it is serialized and posted, catching empty
messages, unknown roles and out-of-range sampling parameters early. The
orchestrator accepts either one of these models or a plain mapping.

External dependencies: Pydantic only (no network calls).

Invalid bodies raise ``pydantic.ValidationError``.

Design
------
- Field names follow the chat-completions wire format, so ``to_payload`` is a
  plain ``model_dump``.
- Unknown top-level fields (``top_p``, ``tools``, provider extensions) are
  accepted and forwarded untouched.
"""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


Role = Literal["system", "user", "assistant", "tool"]


class ContentPartDTO(BaseModel):
    """One part of a multi-part message (text or image reference)."""

    type: Literal["text", "image_url", "input_audio"]
    text: Optional[str] = None
    image_url: Optional[Dict[str, Any]] = None
    input_audio: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _validate_payload(self) -> "ContentPartDTO":
        if getattr(self, self.type) is None:
            raise ValueError(f"content part of type '{self.type}' requires the '{self.type}' field")
        return self


class MessageDTO(BaseModel):
    """A chat message with either a text string or structured parts.

    Rules:
        - ``role`` must be one of Role.
        - ``content`` must be a non-empty string or a non-empty list of parts.
          Assistant messages carrying only ``tool_calls`` may omit it.
    """

    model_config = ConfigDict(extra="allow")

    role: Role
    content: Union[str, List[ContentPartDTO], None] = None

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageDTO":
        content = self.content
        if content is None:
            if self.role == "assistant" and (self.model_extra or {}).get("tool_calls"):
                return self
            raise ValueError("content is required")
        if isinstance(content, str):
            if content.strip() == "":
                raise ValueError("content string must be non-empty")
            return self
        if not content:
            raise ValueError("content parts must be a non-empty list")
        return self


class ChatCompletionBody(BaseModel):
    """Request body for ``POST {base_url}/chat/completions``.

    Parameters:
        model: Target model identifier (non-empty).
        messages: Ordered, non-empty list of messages.
        stream: Ask the server for an event stream (default ``True``).
        max_tokens: If provided, must be positive.
        temperature: If provided, must be within [0.0, 2.0].

    Raises:
        ValidationError: On invalid roles, empty content, or out-of-range params.
    """

    model_config = ConfigDict(extra="allow")

    model: str = Field(..., min_length=1)
    messages: List[MessageDTO] = Field(..., min_length=1)
    stream: bool = True
    max_tokens: Optional[int] = Field(default=None, gt=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)

    def to_payload(self) -> Dict[str, Any]:
        """Return the JSON-ready wire payload (``None`` fields dropped)."""
        return self.model_dump(exclude_none=True)


__all__ = [
    "Role",
    "ContentPartDTO",
    "MessageDTO",
    "ChatCompletionBody",
]
