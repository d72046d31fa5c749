"""DTO validation package for request bodies."""

from .chat import Role, ContentPartDTO, MessageDTO, ChatCompletionBody

__all__ = [
    "Role",
    "ContentPartDTO",
    "MessageDTO",
    "ChatCompletionBody",
]
