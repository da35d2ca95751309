"""Model Catalog - Configuration-Driven List of Offered Models.

Provides the static list of models the UI may offer, with the default
generation parameters for each. The catalog is loaded from a JSON document
shaped ``{"models": [ModelInfo, ...]}`` and is trusted input: entries are not
checked against the providers' real inventories.

Architecture:
    ModelCatalog: Root container, loaded from resources/llm-info.json
    └─ ModelInfo: One offered model (id, display name, provider, tags)
       └─ ModelParams: Default max_tokens / temperature / top_p

Key Features:
    - File order preserved: models() returns entries exactly as listed
    - Typed failures: CatalogIoError for read errors, CatalogParseError for
      malformed JSON or a document that does not match the shape
    - Frozen models: loaded once, shared read-only by every command
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CatalogIoError, CatalogParseError


class ModelParams(BaseModel):
    """Default Generation Parameters for a Model.

    Attributes:
        max_tokens: Output token limit (>= 1)
        temperature: Sampling temperature in [0, 1]
        top_p: Nucleus sampling mass in [0, 1]
    """

    max_tokens: int = Field(ge=1)
    temperature: float = Field(ge=0.0, le=1.0)
    top_p: float = Field(ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class ModelInfo(BaseModel):
    """One Model Offered to the UI.

    Attributes:
        id: Provider's model identifier (sent as ``model`` on the wire)
        display_name: Human-readable label for pickers
        provider: Provider key as written in the catalog (e.g. "anthropic");
            kept as a plain string so new providers need no code change
        tags: Ordered free-form labels ("chat", "reasoning", ...)
        params: Default generation parameters
    """

    id: str
    display_name: str
    provider: str
    tags: tuple[str, ...] = ()
    params: ModelParams

    model_config = ConfigDict(frozen=True)


class ModelCatalog(BaseModel):
    """Catalog of offered models - wraps the document for type safety."""

    models_: tuple[ModelInfo, ...] = Field(alias="models")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_json_file(cls, path: Path) -> ModelCatalog:
        """Load and validate catalog from JSON.

        Raises:
            CatalogIoError: File missing or unreadable
            CatalogParseError: Not JSON, or not shaped like {"models": [...]}
        """
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogIoError(path, exc) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise CatalogParseError(path, str(exc)) from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise CatalogParseError(path, _summarize(exc)) from exc

    def models(self) -> tuple[ModelInfo, ...]:
        """All entries, in file order."""
        return self.models_

    def find(self, model_id: str) -> ModelInfo:
        """First entry with this id (ids are not required to be unique)."""
        wanted = model_id.strip()
        for info in self.models_:
            if info.id == wanted:
                return info
        raise KeyError(f"Model '{model_id}' not in catalog")

    def for_provider(self, provider: str) -> tuple[ModelInfo, ...]:
        return tuple(info for info in self.models_ if info.provider == provider)


def _summarize(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    extra = f" (+{exc.error_count() - 1} more)" if exc.error_count() > 1 else ""
    return f"{location}: {first['msg']}{extra}"


__all__ = [
    "ModelCatalog",
    "ModelInfo",
    "ModelParams",
]
