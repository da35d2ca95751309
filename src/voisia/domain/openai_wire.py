"""OpenAI Responses API - Wire Request and Response Shapes.

Request and response records for ``POST /v1/responses``. Field names differ
from the Anthropic shapes on purpose and are kept as the provider spells
them:

    Anthropic      OpenAI
    ---------      ------
    messages   ->  input
    max_tokens ->  max_output_tokens
    system     ->  instructions (plain string, not blocks)

The response wraps text in an ``output`` envelope of messages, each holding
``output_text`` content parts; it is deliberately not unified with the
Anthropic ``content`` array.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .domain_type import MessageRole
from .domain_value import NeutralMessage

_U32_MAX = 2**32 - 1

# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------


class OpenAIRequest(BaseModel):
    """Body of ``POST /v1/responses``.

    Attributes:
        input: Conversation, oldest first, ending with a user turn
        model: Provider model id
        max_output_tokens: Output limit (>= 1)
        store: Whether the provider keeps the exchange server-side
        instructions: Optional system prompt
        temperature: Sampling temperature in [0, 1]
        top_p: Nucleus sampling mass in [0, 1]
    """

    input: tuple[NeutralMessage, ...] = Field(min_length=1)
    model: str = Field(min_length=1)
    max_output_tokens: int = Field(ge=1, le=_U32_MAX)
    store: bool
    instructions: str | None = None
    temperature: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)
    top_p: float = Field(ge=0.0, le=1.0, allow_inf_nan=False)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_last_turn(self) -> OpenAIRequest:
        if self.input[-1].role != MessageRole.USER:
            raise ValueError("last input message must have role 'user'")
        return self

    def to_payload(self) -> dict[str, Any]:
        """JSON body with absent optionals elided."""
        return self.model_dump(mode="json", exclude_none=True)


# ---------------------------------------------------------------------------
# Response
# ---------------------------------------------------------------------------


class OpenAIOutputContent(BaseModel):
    type: str
    text: str = ""
    annotations: list[Any] = []


class OpenAIOutputMessage(BaseModel):
    type: str
    id: str
    status: str | None = None
    role: str | None = None
    content: list[OpenAIOutputContent] = []


class OpenAITokenDetails(BaseModel):
    cached_tokens: int | None = None
    reasoning_tokens: int | None = None


class OpenAIUsage(BaseModel):
    input_tokens: int
    output_tokens: int
    total_tokens: int
    input_tokens_details: OpenAITokenDetails | None = None
    output_tokens_details: OpenAITokenDetails | None = None


class OpenAIResponse(BaseModel):
    """Body of a successful ``POST /v1/responses`` answer.

    Nullable fields are optional. Unknown fields are ignored, ``tools`` and
    annotation entries are kept opaque.
    """

    id: str
    object: str
    created_at: int
    status: str
    error: Any | None = None
    incomplete_details: Any | None = None
    instructions: Any | None = None
    max_output_tokens: int | None = None
    model: str
    output: list[OpenAIOutputMessage]
    parallel_tool_calls: bool
    previous_response_id: str | None = None
    store: bool
    temperature: float | None = None
    tool_choice: Any
    tools: list[Any]
    top_p: float | None = None
    truncation: str | None = None
    usage: OpenAIUsage | None = None
    user: str | None = None
    metadata: dict[str, Any] | None = None

    @property
    def output_text(self) -> str:
        """Concatenated ``output_text`` parts of every output message."""
        return "".join(
            part.text
            for message in self.output
            if message.type == "message"
            for part in message.content
            if part.type == "output_text"
        )

    def to_message(self) -> NeutralMessage:
        """Assistant turn to append to the UI's history."""
        return NeutralMessage.assistant(self.output_text)


__all__ = [
    "OpenAIOutputContent",
    "OpenAIOutputMessage",
    "OpenAIRequest",
    "OpenAIResponse",
    "OpenAITokenDetails",
    "OpenAIUsage",
]
