"""Command API Router - thin HTTP layer over the command facade.

Each route is one UI command. A facade error string is sent back as the
``detail`` of an HTTP error whose status reflects the failing stage.
"""

from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException

from ...domain.anthropic_wire import AnthropicResponse
from ...domain.domain_type import ErrorStage
from ...domain.model_catalog import ModelInfo
from ...domain.openai_wire import OpenAIResponse
from ...service import ChatService
from ..contracts import AnthropicCommand, OpenAICommand
from ..deps import get_chat_service

router = APIRouter(prefix="/commands", tags=["commands"])

STAGE_STATUS: dict[ErrorStage, int] = {
    ErrorStage.VALIDATION: 422,
    ErrorStage.CREDENTIAL: 503,
    ErrorStage.HTTP: 504,
    ErrorStage.UPSTREAM: 502,
    ErrorStage.PARSE: 502,
    ErrorStage.CATALOG: 500,
}


def _raise_command_error(error: str) -> NoReturn:
    stage = ErrorStage.from_ui_string(error)
    status_code = STAGE_STATUS.get(stage, 500) if stage else 500
    raise HTTPException(status_code=status_code, detail=error)


@router.post("/generate_anthropic_response", response_model=AnthropicResponse)
async def generate_anthropic_response(
    command: AnthropicCommand,
    service: Annotated[ChatService, Depends(get_chat_service)],
) -> AnthropicResponse:
    """Send a prompt plus history to Anthropic and return the full response."""
    result = await service.generate_anthropic_response(
        model=command.model,
        input=command.input,
        system=command.system,
        max_tokens=command.max_tokens,
        temperature=command.temperature,
        top_p=command.top_p,
        thinking=command.thinking,
        convo_history=command.convo_history,
    )
    if isinstance(result, str):
        _raise_command_error(result)
    return result


@router.post("/generate_openai_response", response_model=OpenAIResponse)
async def generate_openai_response(
    command: OpenAICommand,
    service: Annotated[ChatService, Depends(get_chat_service)],
) -> OpenAIResponse:
    """Send a prompt plus history to OpenAI and return the full response."""
    result = await service.generate_openai_response(
        model=command.model,
        input=command.input,
        max_tokens=command.max_tokens,
        temperature=command.temperature,
        top_p=command.top_p,
        store=command.store,
        system=command.system,
        conversation_history=command.conversation_history,
    )
    if isinstance(result, str):
        _raise_command_error(result)
    return result


@router.get("/get_available_models", response_model=list[ModelInfo])
async def get_available_models(
    service: Annotated[ChatService, Depends(get_chat_service)],
) -> list[ModelInfo]:
    """List the models the UI may offer, in catalog order."""
    result = service.get_available_models()
    if isinstance(result, str):
        _raise_command_error(result)
    return result
