"""
Shared test fixtures and configuration.

Environment strategy:
- All tests use .env.test (no provider keys, no log files on disk)
- Provider HTTP is served in-process by httpx.MockTransport; nothing leaves the machine
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest
from dotenv import load_dotenv

ENV_FILE = Path(__file__).parent.parent / ".env.test"

load_dotenv(ENV_FILE, override=True)

from voisia.credentials import StaticCredentials  # noqa: E402
from voisia.domain.domain_type import Provider  # noqa: E402
from voisia.service import AnthropicClient, ChatService, HttpTransport, OpenAIClient  # noqa: E402

REPO_ROOT = Path(__file__).parent.parent


class FakeProvider:
    """In-process provider endpoint: records every request, replays one canned answer."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        error: Exception | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.status_code = status_code
        self.body = body
        self.error = error
        self.headers = headers or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, bytes):
            return httpx.Response(self.status_code, headers=self.headers, content=self.body)
        if isinstance(self.body, str):
            return httpx.Response(self.status_code, headers=self.headers, text=self.body)
        return httpx.Response(self.status_code, headers=self.headers, json=self.body)

    @property
    def last_json(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def anthropic_body() -> dict[str, Any]:
    """Successful Messages API answer with a single text block."""
    return {
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "model": "claude-x",
        "content": [{"type": "text", "text": "Hello!"}],
        "stop_reason": "end_turn",
        "stop_sequence": None,
        "usage": {"input_tokens": 10, "output_tokens": 3},
    }


@pytest.fixture
def openai_body() -> dict[str, Any]:
    """Successful Responses API answer, nulls included as the provider sends them."""
    return {
        "id": "resp_1",
        "object": "response",
        "created_at": 1741476542,
        "status": "completed",
        "error": None,
        "incomplete_details": None,
        "instructions": None,
        "max_output_tokens": 50,
        "model": "gpt-x",
        "output": [
            {
                "type": "message",
                "id": "msg_1",
                "status": "completed",
                "role": "assistant",
                "content": [{"type": "output_text", "text": "c!", "annotations": []}],
            }
        ],
        "parallel_tool_calls": True,
        "previous_response_id": None,
        "reasoning": {"effort": None, "summary": None},
        "store": True,
        "temperature": 0.2,
        "text": {"format": {"type": "text"}},
        "tool_choice": "auto",
        "tools": [],
        "top_p": 0.9,
        "truncation": "disabled",
        "usage": {
            "input_tokens": 36,
            "input_tokens_details": {"cached_tokens": 0},
            "output_tokens": 87,
            "output_tokens_details": {"reasoning_tokens": 0},
            "total_tokens": 123,
        },
        "user": None,
        "metadata": {},
    }


@pytest.fixture
def credentials() -> StaticCredentials:
    """Both provider keys present, default endpoints."""
    return StaticCredentials(keys={Provider.ANTHROPIC: "sk-ant-test", Provider.OPENAI: "sk-test"})


@pytest.fixture
def make_transport() -> Callable[[FakeProvider], HttpTransport]:
    """Factory: HttpTransport whose pool is wired to a FakeProvider."""

    def _make(fake: FakeProvider) -> HttpTransport:
        return HttpTransport(timeout_seconds=5.0, transport=httpx.MockTransport(fake))

    return _make


@pytest.fixture
def catalog_file(tmp_path: Path) -> Path:
    """Two-entry catalog, one model per provider."""
    path = tmp_path / "llm-info.json"
    path.write_text(
        json.dumps(
            {
                "models": [
                    {
                        "id": "claude-x",
                        "display_name": "Claude X",
                        "provider": "anthropic",
                        "tags": ["chat"],
                        "params": {"max_tokens": 1024, "temperature": 0.7, "top_p": 1.0},
                    },
                    {
                        "id": "gpt-x",
                        "display_name": "GPT X",
                        "provider": "openai",
                        "tags": [],
                        "params": {"max_tokens": 2048, "temperature": 0.5, "top_p": 0.9},
                    },
                ]
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_service(
    credentials: StaticCredentials,
    make_transport: Callable[[FakeProvider], HttpTransport],
    catalog_file: Path,
) -> Callable[..., ChatService]:
    """Factory: ChatService over a FakeProvider, static keys and the tmp catalog."""

    def _make(fake: FakeProvider | None = None, *, creds: Any = None, catalog_path: Path | None = None) -> ChatService:
        transport = make_transport(fake or FakeProvider())
        source = creds if creds is not None else credentials
        return ChatService(
            catalog_path=catalog_path or catalog_file,
            anthropic=AnthropicClient(source, transport),
            openai=OpenAIClient(source, transport),
            transport=transport,
        )

    return _make
