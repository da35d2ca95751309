# src/voisia/api/contracts/commands.py
"""Command API contracts - flat UI arguments, domain types for history."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ...domain.domain_value import NeutralMessage


class AnthropicCommand(BaseModel):
    """Arguments of ``generate_anthropic_response``.

    Range checks (temperature, top_p, thinking budget) happen in the command
    itself so they come back as ``"validation: ..."`` strings.
    """

    model: str = Field(description="Anthropic model id", examples=["claude-sonnet-4-5-20250929"])
    input: str = Field(description="New user turn", examples=["Hello!"])
    system: str | None = Field(default=None, description="Optional system prompt")
    max_tokens: int = Field(validation_alias=AliasChoices("max_tokens", "maxTokens"), examples=[1024])
    temperature: float = Field(examples=[0.7])
    top_p: float = Field(validation_alias=AliasChoices("top_p", "topP"), examples=[1.0])
    thinking: dict[str, Any] | None = Field(
        default=None,
        description="Extended thinking directive",
        examples=[{"type": "enabled", "budget_tokens": 2048}],
    )
    convo_history: list[NeutralMessage] = Field(
        default_factory=list,
        validation_alias=AliasChoices("convo_history", "convoHistory"),
        description="Prior turns, oldest first",
    )

    model_config = ConfigDict(protected_namespaces=())


class OpenAICommand(BaseModel):
    """Arguments of ``generate_openai_response``."""

    model: str = Field(description="OpenAI model id", examples=["gpt-4.1"])
    input: str = Field(description="New user turn", examples=["Hello!"])
    max_tokens: int = Field(validation_alias=AliasChoices("max_tokens", "maxTokens"), examples=[1024])
    temperature: float = Field(examples=[0.7])
    top_p: float = Field(validation_alias=AliasChoices("top_p", "topP"), examples=[1.0])
    store: bool = Field(description="Let the provider keep the exchange server-side", examples=[False])
    system: str | None = Field(default=None, description="Optional system prompt (sent as instructions)")
    conversation_history: list[NeutralMessage] = Field(
        default_factory=list,
        validation_alias=AliasChoices("conversation_history", "conversationHistory"),
        description="Prior turns, oldest first",
    )

    model_config = ConfigDict(protected_namespaces=())
