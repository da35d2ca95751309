"""Anthropic Messages API - Wire Request and Response Shapes.

Request and response records for ``POST /v1/messages``. The request is
validated at construction, so a request object that exists is one the
backend is willing to send.

Wire Rules:
    - ``system`` is a list of ``{"type": "text", "text": ...}`` blocks
    - ``thinking`` is optional; when enabled, 1024 <= budget_tokens < max_tokens
    - Absent optionals are omitted from the payload, never sent as null

Response Content:
    ``content`` is a list of blocks tagged by ``type``. Text and thinking
    blocks are typed; any other tag is kept as an OpaqueBlock with its raw
    fields so a new block kind from the provider does not break parsing.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, model_validator

from .domain_type import MessageRole, ThinkingType
from .domain_value import NeutralMessage

MIN_THINKING_BUDGET = 1024
_U32_MAX = 2**32 - 1

# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class AnthropicThinking(BaseModel):
    """Extended thinking directive.

    A missing ``type`` means disabled. ``budget_tokens`` is only meaningful
    (and then required) when thinking is enabled.
    """

    type: ThinkingType = ThinkingType.DISABLED
    budget_tokens: int | None = Field(default=None, ge=0, le=_U32_MAX)

    model_config = ConfigDict(frozen=True)

    @property
    def enabled(self) -> bool:
        return self.type == ThinkingType.ENABLED

    @model_validator(mode="after")
    def check_budget(self) -> AnthropicThinking:
        if self.enabled:
            if self.budget_tokens is None:
                raise ValueError("thinking.budget_tokens is required when thinking is enabled")
            if self.budget_tokens < MIN_THINKING_BUDGET:
                raise ValueError(f"thinking.budget_tokens must be >= {MIN_THINKING_BUDGET}, got {self.budget_tokens}")
        return self


class AnthropicSystemBlock(BaseModel):
    """System prompt wrapped as a text block."""

    type: Literal["text"] = "text"
    text: str

    model_config = ConfigDict(frozen=True)


class AnthropicRequest(BaseModel):
    """Body of ``POST /v1/messages``.

    Attributes:
        model: Provider model id
        messages: Conversation, oldest first, ending with a user turn
        system: Optional system prompt blocks
        max_tokens: Output limit (>= 1)
        temperature: Sampling temperature in [0, 1]
        top_p: Nucleus sampling mass in [0, 1]
        thinking: Optional extended thinking directive
    """

    model: str = Field(min_length=1)
    messages: tuple[NeutralMessage, ...] = Field(min_length=1)
    system: tuple[AnthropicSystemBlock, ...] | None = None
    max_tokens: int = Field(ge=1, le=_U32_MAX)
    temperature: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    top_p: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    thinking: AnthropicThinking | None = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_conversation_and_budget(self) -> AnthropicRequest:
        if self.messages[-1].role != MessageRole.USER:
            raise ValueError("last message must have role 'user'")
        if self.thinking is not None and self.thinking.enabled:
            budget = self.thinking.budget_tokens
            if budget is not None and budget >= self.max_tokens:
                raise ValueError(
                    f"thinking.budget_tokens ({budget}) must be less than max_tokens ({self.max_tokens})"
                )
        return self

    @classmethod
    def system_blocks(cls, system: str | None) -> tuple[AnthropicSystemBlock, ...] | None:
        return None if system is None else (AnthropicSystemBlock(text=system),)

    def to_payload(self) -> dict[str, Any]:
        """JSON body with absent optionals elided."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ThinkingBlock(BaseModel):
    type: Literal["thinking"] = "thinking"
    thinking: str
    signature: str


class RedactedThinkingBlock(BaseModel):
    type: Literal["redacted_thinking"] = "redacted_thinking"
    data: str


class OpaqueBlock(BaseModel):
    """Content block of a kind this backend does not model; raw fields kept."""

    type: str

    model_config = ConfigDict(extra="allow")


_TYPED_BLOCKS = frozenset({"text", "thinking", "redacted_thinking"})


def _block_tag(value: Any) -> str:
    kind = value.get("type") if isinstance(value, dict) else getattr(value, "type", None)
    return kind if kind in _TYPED_BLOCKS else "opaque"


ContentBlock = Annotated[
    Union[
        Annotated[TextBlock, Tag("text")],
        Annotated[ThinkingBlock, Tag("thinking")],
        Annotated[RedactedThinkingBlock, Tag("redacted_thinking")],
        Annotated[OpaqueBlock, Tag("opaque")],
    ],
    Discriminator(_block_tag),
]


class AnthropicUsage(BaseModel):
    input_tokens: int
    output_tokens: int


class AnthropicResponse(BaseModel):
    """Body of a successful ``POST /v1/messages`` answer.

    Unknown top-level fields are ignored. Thinking blocks are kept on
    ``content`` for the UI to inspect but do not contribute to ``text``.
    """

    id: str
    model: str
    role: str
    type: str
    stop_reason: str | None = None
    stop_sequence: str | None = None
    content: list[ContentBlock]
    usage: AnthropicUsage

    @property
    def text(self) -> str:
        """Concatenated text blocks, in order."""
        return "".join(block.text for block in self.content if isinstance(block, TextBlock))

    @property
    def thinking_blocks(self) -> list[ThinkingBlock]:
        return [block for block in self.content if isinstance(block, ThinkingBlock)]

    def to_message(self) -> NeutralMessage:
        """Assistant turn to append to the UI's history."""
        return NeutralMessage(role=MessageRole(self.role), content=self.text)


__all__ = [
    "MIN_THINKING_BUDGET",
    "AnthropicRequest",
    "AnthropicResponse",
    "AnthropicSystemBlock",
    "AnthropicThinking",
    "AnthropicUsage",
    "ContentBlock",
    "OpaqueBlock",
    "RedactedThinkingBlock",
    "TextBlock",
    "ThinkingBlock",
]
