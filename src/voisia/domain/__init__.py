"""Domain Layer - Wire Shapes, Catalog and Error Taxonomy.

This module provides the provider-abstraction core: one neutral conversation
turn, two provider-specific request/response families, the static model
catalog and the errors every command can surface.

Key Components:
    - NeutralMessage: Provider-agnostic {role, content} turn
    - AnthropicRequest/AnthropicResponse: Messages API wire shapes
    - OpenAIRequest/OpenAIResponse: Responses API wire shapes
    - ModelCatalog: Type-safe list of offered models loaded from JSON
    - VoisiaError: Stage-tagged failures rendered as "<stage>: <detail>"

Design Principles:
    - Immutable requests: frozen models, tuples instead of lists
    - Validate at construction: a request that exists is sendable
    - Elide, don't null: absent optionals never reach the wire
"""

from .anthropic_wire import (
    MIN_THINKING_BUDGET,
    AnthropicRequest,
    AnthropicResponse,
    AnthropicSystemBlock,
    AnthropicThinking,
    AnthropicUsage,
    ContentBlock,
    OpaqueBlock,
    RedactedThinkingBlock,
    TextBlock,
    ThinkingBlock,
)
from .domain_type import ErrorStage, MessageRole, Provider, ThinkingType
from .domain_value import NeutralMessage, with_user_turn
from .errors import (
    CatalogError,
    CatalogIoError,
    CatalogParseError,
    CredentialMissing,
    ParseError,
    ProviderError,
    RequestValidationError,
    TransportError,
    UpstreamError,
    VoisiaError,
)
from .model_catalog import ModelCatalog, ModelInfo, ModelParams
from .openai_wire import (
    OpenAIOutputContent,
    OpenAIOutputMessage,
    OpenAIRequest,
    OpenAIResponse,
    OpenAITokenDetails,
    OpenAIUsage,
)

__all__ = [
    "MIN_THINKING_BUDGET",
    "AnthropicRequest",
    "AnthropicResponse",
    "AnthropicSystemBlock",
    "AnthropicThinking",
    "AnthropicUsage",
    "CatalogError",
    "CatalogIoError",
    "CatalogParseError",
    "ContentBlock",
    "CredentialMissing",
    "ErrorStage",
    "MessageRole",
    "ModelCatalog",
    "ModelInfo",
    "ModelParams",
    "NeutralMessage",
    "OpaqueBlock",
    "OpenAIOutputContent",
    "OpenAIOutputMessage",
    "OpenAIRequest",
    "OpenAIResponse",
    "OpenAITokenDetails",
    "OpenAIUsage",
    "ParseError",
    "Provider",
    "ProviderError",
    "RedactedThinkingBlock",
    "RequestValidationError",
    "TextBlock",
    "ThinkingBlock",
    "ThinkingType",
    "TransportError",
    "UpstreamError",
    "VoisiaError",
    "with_user_turn",
]
