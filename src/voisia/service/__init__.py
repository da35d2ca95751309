"""Service layer - provider clients, shared transport and the command facade."""

from .chat import ChatService, create_chat_service
from .providers import ANTHROPIC_VERSION, AnthropicClient, OpenAIClient, ProviderClient
from .transport import HttpTransport

__all__ = [
    "ANTHROPIC_VERSION",
    "AnthropicClient",
    "ChatService",
    "HttpTransport",
    "OpenAIClient",
    "ProviderClient",
    "create_chat_service",
]
