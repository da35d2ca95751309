"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for domain concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and clean JSON serialization on the wire without custom encoders.
"""

from enum import StrEnum


class Provider(StrEnum):
    """Upstream LLM Providers.

    ANTHROPIC is the Messages API (A-provider), OPENAI is the Responses API
    (O-provider). GEMINI has a credential slot but no client yet.

    Note:
        Catalog entries carry a free-form provider string, so this enum is
        only used where the backend itself talks to a provider.
    """

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GEMINI = "gemini"


class MessageRole(StrEnum):
    """Conversation Turn Roles shared by both wire formats."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ThinkingType(StrEnum):
    """Extended thinking switch for the Anthropic Messages API."""

    ENABLED = "enabled"
    DISABLED = "disabled"


class ErrorStage(StrEnum):
    """Where in a command a failure originated.

    The value is the prefix of every error string returned to the UI
    (``"<stage>: <detail>"``), so the UI can branch on it without parsing
    provider-specific bodies.
    """

    CREDENTIAL = "credential"
    VALIDATION = "validation"
    HTTP = "http"
    PARSE = "parse"
    UPSTREAM = "upstream"
    CATALOG = "catalog"

    @classmethod
    def from_ui_string(cls, message: str) -> "ErrorStage | None":
        """Recover the stage from a rendered ``"<stage>: <detail>"`` string."""
        prefix, sep, _ = message.partition(":")
        if not sep:
            return None
        try:
            return cls(prefix.strip())
        except ValueError:
            return None


__all__ = [
    "ErrorStage",
    "MessageRole",
    "Provider",
    "ThinkingType",
]
