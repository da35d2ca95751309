"""Credential Source - API Keys and Endpoints per Provider.

Provider clients never read the environment themselves; they are handed a
``CredentialSource``. The production source re-reads the environment on
every call, tests and embedders can pass a ``StaticCredentials``.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from pydantic import SecretStr

from .config import ProviderEnvironment
from .domain.domain_type import Provider
from .domain.errors import CredentialMissing

DEFAULT_ENDPOINTS: dict[Provider, str] = {
    Provider.ANTHROPIC: "https://api.anthropic.com/v1/messages",
    Provider.OPENAI: "https://api.openai.com/v1/responses",
}

KEY_ENV_VARS: dict[Provider, str] = {
    Provider.ANTHROPIC: "ANTHROPIC_API_KEY",
    Provider.OPENAI: "OPENAI_API_KEY",
    Provider.GEMINI: "GEMINI_API_KEY",
}


@runtime_checkable
class CredentialSource(Protocol):
    """Where provider clients get their key and URL."""

    def get_key(self, provider: Provider) -> str:
        """Return the API key, or raise CredentialMissing."""
        ...

    def get_endpoint(self, provider: Provider) -> str:
        """Return the override URL if configured, else the default."""
        ...


def _default_endpoint(provider: Provider) -> str:
    try:
        return DEFAULT_ENDPOINTS[provider]
    except KeyError:
        raise ValueError(f"No default endpoint for provider '{provider.value}'") from None


class EnvironmentCredentials:
    """Read-through source over process environment (and ``.env``).

    Nothing is cached: each lookup builds a fresh ProviderEnvironment.
    """

    def _environment(self) -> ProviderEnvironment:
        return ProviderEnvironment()

    def get_key(self, provider: Provider) -> str:
        env = self._environment()
        secret: SecretStr | None = {
            Provider.ANTHROPIC: env.anthropic_api_key,
            Provider.OPENAI: env.openai_api_key,
            Provider.GEMINI: env.gemini_api_key,
        }[provider]
        value = secret.get_secret_value().strip() if secret is not None else ""
        if not value:
            raise CredentialMissing(provider, KEY_ENV_VARS[provider])
        return value

    def get_endpoint(self, provider: Provider) -> str:
        env = self._environment()
        override = {
            Provider.ANTHROPIC: env.anthropic_api_endpoint,
            Provider.OPENAI: env.openai_api_endpoint,
        }.get(provider)
        if override and override.strip():
            return override.strip()
        return _default_endpoint(provider)


class StaticCredentials:
    """Fixed keys and endpoint overrides held in memory."""

    def __init__(
        self,
        keys: dict[Provider, str] | None = None,
        endpoints: dict[Provider, str] | None = None,
    ) -> None:
        self._keys = dict(keys or {})
        self._endpoints = dict(endpoints or {})

    def get_key(self, provider: Provider) -> str:
        value = self._keys.get(provider, "")
        if not value:
            raise CredentialMissing(provider, KEY_ENV_VARS[provider])
        return value

    def get_endpoint(self, provider: Provider) -> str:
        return self._endpoints.get(provider) or _default_endpoint(provider)


__all__ = [
    "DEFAULT_ENDPOINTS",
    "KEY_ENV_VARS",
    "CredentialSource",
    "EnvironmentCredentials",
    "StaticCredentials",
]
