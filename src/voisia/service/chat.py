"""Command facade - the three operations the UI invokes.

Thin adapter: flat UI arguments plus prior history in, typed provider response
out. Any failure comes back as a ``"<stage>: <detail>"`` string instead of an
exception, which is the shape the UI expects from a command.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..config import Settings
from ..credentials import CredentialSource, EnvironmentCredentials
from ..domain.anthropic_wire import AnthropicResponse, AnthropicThinking
from ..domain.domain_value import NeutralMessage
from ..domain.model_catalog import ModelCatalog, ModelInfo
from ..domain.openai_wire import OpenAIResponse
from ..domain.errors import RequestValidationError, VoisiaError
from ..log import get_logger
from .providers import AnthropicClient, OpenAIClient
from .transport import HttpTransport

logger = get_logger(__name__)

_HISTORY = TypeAdapter(tuple[NeutralMessage, ...])
_THINKING = TypeAdapter(AnthropicThinking | None)


def _coerce(adapter: TypeAdapter[Any], value: Any) -> Any:
    try:
        return adapter.validate_python(value)
    except ValidationError as exc:
        raise RequestValidationError.from_pydantic(exc) from exc


class ChatService:
    """
    Pure infrastructure orchestrator - zero provider logic.

    Service responsibilities:
    1. Own the catalog path and load the catalog once
    2. Turn UI arguments into provider client calls
    3. Render every VoisiaError as a UI error string

    No retries, no fan-out: one command, one provider call.
    """

    def __init__(
        self,
        catalog_path: Path,
        anthropic: AnthropicClient,
        openai: OpenAIClient,
        transport: HttpTransport,
        timeout_seconds: float | None = None,
    ):
        self.catalog_path = catalog_path
        self.anthropic = anthropic
        self.openai = openai
        self.transport = transport
        self.timeout_seconds = timeout_seconds
        self._catalog: ModelCatalog | None = None

    async def generate_anthropic_response(
        self,
        model: str,
        input: str,
        system: str | None,
        max_tokens: int,
        temperature: float,
        top_p: float,
        thinking: AnthropicThinking | dict[str, Any] | None,
        convo_history: Sequence[NeutralMessage | dict[str, Any]],
    ) -> AnthropicResponse | str:
        """
        Send the new user turn plus history to Anthropic.

        Returns:
            Parsed response, or an error string like ``"upstream: ..."``
        """
        try:
            history = _coerce(_HISTORY, convo_history)
            directive = _coerce(_THINKING, thinking)
        except RequestValidationError as exc:
            return self._fail("generate_anthropic_response", exc)
        try:
            return await self.anthropic.generate(
                model=model,
                history=history,
                new_user_text=input,
                system=system,
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                thinking=directive,
                timeout_seconds=self.timeout_seconds,
            )
        except VoisiaError as exc:
            # already logged by the provider client
            return exc.to_ui_string()

    async def generate_openai_response(
        self,
        model: str,
        input: str,
        max_tokens: int,
        temperature: float,
        top_p: float,
        store: bool,
        system: str | None,
        conversation_history: Sequence[NeutralMessage | dict[str, Any]],
    ) -> OpenAIResponse | str:
        """
        Send the new user turn plus history to OpenAI.

        Returns:
            Parsed response, or an error string like ``"upstream: ..."``
        """
        try:
            history = _coerce(_HISTORY, conversation_history)
        except RequestValidationError as exc:
            return self._fail("generate_openai_response", exc)
        try:
            return await self.openai.generate(
                model=model,
                history=history,
                new_user_text=input,
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                store=store,
                system=system,
                timeout_seconds=self.timeout_seconds,
            )
        except VoisiaError as exc:
            # already logged by the provider client
            return exc.to_ui_string()

    def get_available_models(self) -> list[ModelInfo] | str:
        """Catalog entries in file order, or an error string.

        The catalog is read on the first successful call and reused after.
        """
        try:
            if self._catalog is None:
                self._catalog = ModelCatalog.from_json_file(self.catalog_path)
                logger.info("model catalog loaded", path=str(self.catalog_path), models=len(self._catalog.models()))
            return list(self._catalog.models())
        except VoisiaError as exc:
            return self._fail("get_available_models", exc)

    async def aclose(self) -> None:
        await self.transport.aclose()

    @staticmethod
    def _fail(command: str, exc: VoisiaError) -> str:
        logger.error("command failed", command=command, stage=exc.stage.value, error=str(exc))
        return exc.to_ui_string()


def create_chat_service(
    settings: Settings,
    *,
    credentials: CredentialSource | None = None,
    transport: HttpTransport | None = None,
) -> ChatService:
    """
    Factory function for creating ChatService.

    Args:
        settings: Application settings (catalog path, timeout)
        credentials: Key/endpoint source; defaults to the environment
        transport: Shared HTTP transport; one is created when omitted

    Returns:
        Configured ChatService ready for use
    """
    credentials = credentials or EnvironmentCredentials()
    transport = transport or HttpTransport(timeout_seconds=settings.request_timeout_seconds)
    return ChatService(
        catalog_path=Path(settings.model_catalog_path),
        anthropic=AnthropicClient(credentials, transport),
        openai=OpenAIClient(credentials, transport),
        transport=transport,
        timeout_seconds=settings.request_timeout_seconds,
    )


__all__ = ["ChatService", "create_chat_service"]
