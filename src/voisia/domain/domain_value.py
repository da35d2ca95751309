"""Value Layer - Provider-Neutral Conversation Turns.

Both wire formats carry the conversation as a flat list of
``{"role": ..., "content": ...}`` objects, so one frozen model serves as the
conversation turn for the UI, the Anthropic ``messages`` array and the OpenAI
``input`` array alike.

Design Notes:
    - Immutable (frozen=True): a history handed to a request cannot be
      changed behind its back
    - Tuples, not lists: building a request copies the caller's history
      instead of appending to it
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from .domain_type import MessageRole


class NeutralMessage(BaseModel):
    """Provider-Agnostic Conversation Turn.

    Attributes:
        role: Who produced the turn (user, assistant, system)
        content: Plain text of the turn

    Example:
        >>> NeutralMessage.user("hi").model_dump(mode="json")
        {'role': 'user', 'content': 'hi'}
    """

    role: MessageRole
    content: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def user(cls, content: str) -> NeutralMessage:
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> NeutralMessage:
        return cls(role=MessageRole.ASSISTANT, content=content)


def with_user_turn(history: Iterable[NeutralMessage], text: str) -> tuple[NeutralMessage, ...]:
    """Copy History and Append the New User Turn.

    Functional update: returns a new tuple ``history ++ [user(text)]``.
    The caller's sequence is iterated, never mutated, so a list passed in
    from the UI layer keeps its original length.

    Args:
        history: Prior turns, oldest first (may be empty)
        text: The new user prompt

    Returns:
        New tuple ending with the user turn
    """
    return (*history, NeutralMessage.user(text))


__all__ = ["NeutralMessage", "with_user_turn"]
