"""Voisia backend package exports."""

from .config import Settings, get_settings, settings
from .credentials import CredentialSource, EnvironmentCredentials, StaticCredentials
from .domain import AnthropicResponse, ModelInfo, NeutralMessage, OpenAIResponse, VoisiaError
from .service import ChatService, create_chat_service

__all__ = [
    "AnthropicResponse",
    "ChatService",
    "CredentialSource",
    "EnvironmentCredentials",
    "ModelInfo",
    "NeutralMessage",
    "OpenAIResponse",
    "Settings",
    "StaticCredentials",
    "VoisiaError",
    "create_chat_service",
    "get_settings",
    "settings",
]
