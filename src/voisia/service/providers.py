"""Provider clients - build a wire request, POST it once, parse the answer.

Both clients follow the same fail-fast sequence:

1. validate inputs and build the typed request (no I/O yet)
2. resolve the API key and endpoint (CredentialMissing short-circuits here)
3. one HTTP POST through the shared transport
4. 2xx -> typed response, anything else -> UpstreamError with the raw body

There are no retries. Each call is independent; the only shared state is the
transport's connection pool.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..credentials import CredentialSource
from ..domain.anthropic_wire import AnthropicRequest, AnthropicResponse, AnthropicThinking
from ..domain.domain_type import Provider
from ..domain.domain_value import NeutralMessage, with_user_turn
from ..domain.openai_wire import OpenAIRequest, OpenAIResponse
from ..domain.errors import ParseError, RequestValidationError, UpstreamError, VoisiaError
from ..log import get_logger
from .transport import HttpTransport

ANTHROPIC_VERSION = "2023-06-01"

logger = get_logger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ProviderClient(ABC, Generic[ResponseT]):
    """Shared send/parse/log path for one provider."""

    provider: Provider
    response_model: type[ResponseT]

    def __init__(self, credentials: CredentialSource, transport: HttpTransport):
        self.credentials = credentials
        self.transport = transport

    @abstractmethod
    def build_headers(self, api_key: str) -> dict[str, str]:
        """Request headers carrying the provider's auth scheme."""

    async def send(
        self,
        payload: dict[str, Any],
        *,
        timeout_seconds: float | None = None,
    ) -> ResponseT:
        """POST a validated request payload and return the parsed response."""
        try:
            api_key = self.credentials.get_key(self.provider)
            url = self.credentials.get_endpoint(self.provider)

            logger.info(
                "provider request",
                provider=self.provider.value,
                url=url,
                model=payload.get("model"),
                turns=len(payload.get("messages") or payload.get("input") or ()),
            )
            response = await self.transport.post_json(
                self.provider,
                url,
                headers=self.build_headers(api_key),
                payload=payload,
                timeout_seconds=timeout_seconds,
            )
            parsed = self._parse(response)
        except VoisiaError as exc:
            logger.error("provider failure", provider=self.provider.value, stage=exc.stage.value, error=str(exc))
            raise

        logger.info("provider success", provider=self.provider.value, status=response.status_code, id=getattr(parsed, "id", None))
        return parsed

    def _parse(self, response: httpx.Response) -> ResponseT:
        body = response.text
        if not response.is_success:
            raise UpstreamError(self.provider, response.status_code, body)
        try:
            return self.response_model.model_validate_json(body)
        except ValidationError as exc:
            reason = "invalid JSON" if any(e["type"] == "json_invalid" for e in exc.errors()) else "unexpected shape"
            raise ParseError(self.provider, body, reason) from exc


class AnthropicClient(ProviderClient[AnthropicResponse]):
    """Anthropic Messages API client."""

    provider = Provider.ANTHROPIC
    response_model = AnthropicResponse

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    @staticmethod
    def build_request(
        *,
        model: str,
        history: Sequence[NeutralMessage],
        new_user_text: str,
        system: str | None,
        max_tokens: int,
        temperature: float,
        top_p: float,
        thinking: AnthropicThinking | None,
    ) -> AnthropicRequest:
        """Validate inputs and assemble the request.

        Raises:
            RequestValidationError: A range or thinking-budget rule is broken
        """
        try:
            return AnthropicRequest(
                model=model,
                messages=with_user_turn(history, new_user_text),
                system=AnthropicRequest.system_blocks(system),
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                thinking=thinking,
            )
        except ValidationError as exc:
            raise RequestValidationError.from_pydantic(exc) from exc

    async def generate(
        self,
        *,
        model: str,
        history: Sequence[NeutralMessage],
        new_user_text: str,
        system: str | None = None,
        max_tokens: int,
        temperature: float,
        top_p: float,
        thinking: AnthropicThinking | None = None,
        timeout_seconds: float | None = None,
    ) -> AnthropicResponse:
        """Generate a response using Anthropic's Messages API."""
        try:
            request = self.build_request(
                model=model,
                history=history,
                new_user_text=new_user_text,
                system=system,
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                thinking=thinking,
            )
        except RequestValidationError as exc:
            logger.error("provider failure", provider=self.provider.value, stage=exc.stage.value, error=str(exc))
            raise
        return await self.send(request.to_payload(), timeout_seconds=timeout_seconds)


class OpenAIClient(ProviderClient[OpenAIResponse]):
    """OpenAI Responses API client."""

    provider = Provider.OPENAI
    response_model = OpenAIResponse

    def build_headers(self, api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }

    @staticmethod
    def build_request(
        *,
        model: str,
        history: Sequence[NeutralMessage],
        new_user_text: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
        store: bool,
        system: str | None,
    ) -> OpenAIRequest:
        """Validate inputs and assemble the request, renaming fields for the wire.

        Raises:
            RequestValidationError: A range rule is broken
        """
        try:
            return OpenAIRequest(
                input=with_user_turn(history, new_user_text),
                model=model,
                max_output_tokens=max_tokens,
                store=store,
                instructions=system,
                temperature=temperature,
                top_p=top_p,
            )
        except ValidationError as exc:
            raise RequestValidationError.from_pydantic(exc) from exc

    async def generate(
        self,
        *,
        model: str,
        history: Sequence[NeutralMessage],
        new_user_text: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
        store: bool,
        system: str | None = None,
        timeout_seconds: float | None = None,
    ) -> OpenAIResponse:
        """Generate a response using OpenAI's Responses API."""
        try:
            request = self.build_request(
                model=model,
                history=history,
                new_user_text=new_user_text,
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                store=store,
                system=system,
            )
        except RequestValidationError as exc:
            logger.error("provider failure", provider=self.provider.value, stage=exc.stage.value, error=str(exc))
            raise
        return await self.send(request.to_payload(), timeout_seconds=timeout_seconds)


__all__ = ["ANTHROPIC_VERSION", "AnthropicClient", "OpenAIClient", "ProviderClient"]
