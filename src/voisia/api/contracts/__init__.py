from .commands import AnthropicCommand, OpenAICommand
from .health import HealthResponse

__all__ = [
    "AnthropicCommand",
    "HealthResponse",
    "OpenAICommand",
]
