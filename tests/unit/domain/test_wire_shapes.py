"""
Tests for the Anthropic and OpenAI wire shapes.

These tests demonstrate:
- Testing the exact JSON keys each provider receives
- Testing our own validation rules (thinking budget, last turn is user)
- Testing tolerant response parsing (unknown fields, unknown block kinds)
"""

from typing import Any

import pytest
from pydantic import ValidationError

from voisia.domain.anthropic_wire import (
    AnthropicRequest,
    AnthropicResponse,
    AnthropicThinking,
    OpaqueBlock,
    TextBlock,
    ThinkingBlock,
)
from voisia.domain.domain_type import MessageRole, ThinkingType
from voisia.domain.domain_value import NeutralMessage
from voisia.domain.openai_wire import OpenAIRequest, OpenAIResponse


def _anthropic_request(**overrides: Any) -> AnthropicRequest:
    fields: dict[str, Any] = {
        "model": "claude-x",
        "messages": (NeutralMessage.user("hi"),),
        "max_tokens": 100,
        "temperature": 0.5,
        "top_p": 1.0,
    }
    fields.update(overrides)
    return AnthropicRequest(**fields)


def test_anthropic_payload_omits_absent_optionals():
    """
    Demonstrates: Absent system/thinking are left out, not sent as null.
    """
    payload = _anthropic_request().to_payload()

    assert payload == {
        "model": "claude-x",
        "messages": [{"role": "user", "content": "hi"}],
        "max_tokens": 100,
        "temperature": 0.5,
        "top_p": 1.0,
    }


def test_anthropic_payload_wraps_system_and_keeps_thinking():
    payload = _anthropic_request(
        system=AnthropicRequest.system_blocks("Be brief"),
        max_tokens=2048,
        thinking=AnthropicThinking(type=ThinkingType.ENABLED, budget_tokens=1024),
    ).to_payload()

    assert payload["system"] == [{"type": "text", "text": "Be brief"}]
    assert payload["thinking"] == {"type": "enabled", "budget_tokens": 1024}


@pytest.mark.parametrize(
    ("budget", "max_tokens"),
    [
        (500, 2048),  # below the provider minimum
        (2048, 2048),  # not strictly below max_tokens
        (None, 2048),  # enabled without a budget
    ],
)
def test_enabled_thinking_budget_rules(budget: int | None, max_tokens: int):
    """
    Demonstrates: Testing our domain rule for extended thinking budgets.
    """
    with pytest.raises(ValidationError):
        _anthropic_request(
            max_tokens=max_tokens,
            thinking={"type": "enabled", "budget_tokens": budget},
        )


def test_disabled_thinking_needs_no_budget():
    request = _anthropic_request(thinking={"type": "disabled"})

    assert request.thinking is not None
    assert not request.thinking.enabled
    assert request.to_payload()["thinking"] == {"type": "disabled"}


def test_last_turn_must_be_user():
    with pytest.raises(ValidationError):
        _anthropic_request(messages=(NeutralMessage.user("hi"), NeutralMessage.assistant("hello")))


@pytest.mark.parametrize("field", ["temperature", "top_p"])
def test_sampling_values_outside_unit_range_rejected(field: str):
    with pytest.raises(ValidationError):
        _anthropic_request(**{field: 1.5})


def test_anthropic_response_keeps_thinking_and_unknown_blocks():
    """
    Demonstrates: New block kinds from the provider do not break parsing.
    """
    body = {
        "id": "msg_1",
        "type": "message",
        "role": "assistant",
        "model": "claude-x",
        "content": [
            {"type": "thinking", "thinking": "let me see", "signature": "sig"},
            {"type": "text", "text": "Hel"},
            {"type": "tool_use", "id": "tu_1", "name": "lookup", "input": {}},
            {"type": "text", "text": "lo"},
        ],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 1, "output_tokens": 2, "cache_read_input_tokens": 0},
        "container": None,
    }

    response = AnthropicResponse.model_validate(body)

    assert [type(block) for block in response.content] == [ThinkingBlock, TextBlock, OpaqueBlock, TextBlock]
    assert response.text == "Hello"
    assert response.thinking_blocks[0].signature == "sig"
    assert response.to_message() == NeutralMessage(role=MessageRole.ASSISTANT, content="Hello")


def test_openai_payload_uses_provider_field_names():
    """
    Demonstrates: max_tokens/system travel as max_output_tokens/instructions.
    """
    request = OpenAIRequest(
        input=(NeutralMessage.user("hi"),),
        model="gpt-x",
        max_output_tokens=50,
        store=True,
        instructions="sys",
        temperature=0.2,
        top_p=0.9,
    )

    assert request.to_payload() == {
        "input": [{"role": "user", "content": "hi"}],
        "model": "gpt-x",
        "max_output_tokens": 50,
        "store": True,
        "instructions": "sys",
        "temperature": 0.2,
        "top_p": 0.9,
    }


def test_openai_payload_omits_missing_instructions():
    request = OpenAIRequest(
        input=(NeutralMessage.user("hi"),),
        model="gpt-x",
        max_output_tokens=50,
        store=False,
        temperature=0.2,
        top_p=0.9,
    )

    assert "instructions" not in request.to_payload()


def test_openai_response_parses_nulls_and_concatenates_output_text(openai_body: dict[str, Any]):
    """
    Demonstrates: Nullable fields and unknown fields (reasoning, text) are tolerated.
    """
    openai_body["output"].insert(0, {"type": "reasoning", "id": "rs_1", "summary": []})
    openai_body["output"][1]["content"].append({"type": "output_text", "text": "!", "annotations": []})

    response = OpenAIResponse.model_validate(openai_body)

    assert response.error is None
    assert response.output_text == "c!!"
    assert response.to_message().content == "c!!"
    assert response.usage is not None and response.usage.total_tokens == 123


@pytest.mark.parametrize(
    ("overrides", "accepted"),
    [
        ({"max_tokens": 0}, False),
        ({"max_tokens": 1}, True),
        ({"temperature": 0.0, "top_p": 0.0}, True),
        ({"temperature": 1.0, "top_p": 1.0}, True),
        ({"temperature": -0.01}, False),
        ({"top_p": 1.01}, False),
        ({"max_tokens": 1025, "thinking": {"type": "enabled", "budget_tokens": 1024}}, True),
        ({"max_tokens": 1024, "thinking": {"type": "enabled", "budget_tokens": 1024}}, False),
        ({"max_tokens": 4096, "thinking": {"type": "enabled", "budget_tokens": 1023}}, False),
    ],
)
def test_anthropic_range_boundaries(overrides: dict[str, Any], accepted: bool):
    """
    Demonstrates: The limits themselves are valid; one step past them is not.
    """
    if accepted:
        assert _anthropic_request(**overrides).max_tokens >= 1
    else:
        with pytest.raises(ValidationError):
            _anthropic_request(**overrides)


@pytest.mark.parametrize(
    ("overrides", "accepted"),
    [
        ({"max_output_tokens": 0}, False),
        ({"max_output_tokens": 1}, True),
        ({"temperature": 0.0, "top_p": 0.0}, True),
        ({"temperature": 1.0, "top_p": 1.0}, True),
        ({"temperature": 1.5}, False),
        ({"top_p": -0.5}, False),
    ],
)
def test_openai_range_boundaries(overrides: dict[str, Any], accepted: bool):
    fields: dict[str, Any] = {
        "input": (NeutralMessage.user("hi"),),
        "model": "gpt-x",
        "max_output_tokens": 50,
        "store": False,
        "temperature": 0.5,
        "top_p": 0.5,
    }
    fields.update(overrides)

    if accepted:
        assert OpenAIRequest(**fields).to_payload()["model"] == "gpt-x"
    else:
        with pytest.raises(ValidationError):
            OpenAIRequest(**fields)
