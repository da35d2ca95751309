"""Exception hierarchy for the Voisia backend.

Every failure a command can hit is a ``VoisiaError`` tagged with the
``ErrorStage`` it came from. Nothing in the core recovers from these; the
command facade renders them with ``to_ui_string()`` and hands the string
to the UI.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from .domain_type import ErrorStage, Provider

_BODY_SNIPPET_CHARS = 500


class VoisiaError(Exception):
    """Base exception for all Voisia errors."""

    stage: ErrorStage

    def __init__(self, message: str, *, stage: ErrorStage) -> None:
        super().__init__(message)
        self.stage = stage

    @property
    def detail(self) -> str:
        return str(self)

    def to_ui_string(self) -> str:
        """Render as ``"<stage>: <detail>"`` for the UI."""
        return f"{self.stage.value}: {self.detail}"


class CredentialMissing(VoisiaError):
    """API key for a provider is not set in the environment."""

    def __init__(self, provider: Provider, env_var: str) -> None:
        super().__init__(
            f"{provider.value} API key is not set ({env_var})",
            stage=ErrorStage.CREDENTIAL,
        )
        self.provider = provider
        self.env_var = env_var


class RequestValidationError(VoisiaError):
    """Request parameters violate a range or thinking-budget rule.

    Raised before any network I/O.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message, stage=ErrorStage.VALIDATION)
        self.field = field

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> RequestValidationError:
        """Flatten pydantic's report into one readable line."""
        errors = exc.errors()
        parts: list[str] = []
        for error in errors:
            location = ".".join(str(part) for part in error["loc"])
            message = error["msg"].removeprefix("Value error, ")
            parts.append(f"{location}: {message}" if location else message)
        first_field = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        return cls("; ".join(parts), field=first_field or None)


class ProviderError(VoisiaError):
    """A provider call failed after the request was built."""

    def __init__(self, message: str, *, stage: ErrorStage, provider: Provider) -> None:
        super().__init__(message, stage=stage)
        self.provider = provider


class TransportError(ProviderError):
    """DNS, TCP, TLS, timeout or connection reset while talking to a provider."""

    def __init__(self, provider: Provider, cause: BaseException) -> None:
        kind = type(cause).__name__
        reason = str(cause) or kind
        super().__init__(
            f"{provider.value} HTTP request failed ({kind}): {reason}",
            stage=ErrorStage.HTTP,
            provider=provider,
        )


class UpstreamError(ProviderError):
    """Provider answered with a non-2xx status. The body is kept verbatim."""

    def __init__(self, provider: Provider, status_code: int, body: str) -> None:
        super().__init__(
            f"{provider.value} API call failed with status {status_code}: {body}",
            stage=ErrorStage.UPSTREAM,
            provider=provider,
        )
        self.status_code = status_code
        self.body = body


class ParseError(ProviderError):
    """Provider answered 2xx but the body does not match the response shape."""

    def __init__(self, provider: Provider, body: str, reason: str) -> None:
        self.body_snippet = body[:_BODY_SNIPPET_CHARS]
        super().__init__(
            f"failed to parse {provider.value} response ({reason}): {self.body_snippet}",
            stage=ErrorStage.PARSE,
            provider=provider,
        )
        self.reason = reason


class CatalogError(VoisiaError):
    """Model catalog could not be loaded."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(message, stage=ErrorStage.CATALOG)
        self.path = path


class CatalogIoError(CatalogError):
    """Catalog file could not be read."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"failed to read model catalog {path}: {cause}", path=path)


class CatalogParseError(CatalogError):
    """Catalog file is not valid JSON or not shaped like ``{"models": [...]}``."""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"failed to parse model catalog {path}: {detail}", path=path)
        self.parse_detail = detail


__all__ = [
    "CatalogError",
    "CatalogIoError",
    "CatalogParseError",
    "CredentialMissing",
    "ParseError",
    "ProviderError",
    "RequestValidationError",
    "TransportError",
    "UpstreamError",
    "VoisiaError",
]
