"""
AI Provider Factory
Maps a provider name to a constructed backend.
"""
from typing import Optional, Dict, Callable

import httpx

from coach_ai.adapter import AIProvider, CompletionProvider
from coach_ai.anthropic_provider import AnthropicProvider
from coach_ai.config import ProviderSettings, DEFAULT_PROVIDER
from coach_ai.errors import UnknownProviderError
from coach_ai.fallback import FallbackProvider
from coach_ai.ollama_provider import OllamaProvider
from coach_ai.openai_provider import OpenAIProvider


PROVIDERS: Dict[str, Callable[..., CompletionProvider]] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
    "ollama": OllamaProvider,
}


class AIProviderFactory:
    """
    Builds providers from one ProviderSettings.

    Name resolution: explicit argument, then settings.default_provider,
    then "openai".
    """

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings if settings is not None else ProviderSettings.from_env()
        self._transport = transport

    def resolve_name(self, provider: Optional[str] = None) -> str:
        selected = provider or self.settings.default_provider or DEFAULT_PROVIDER
        return selected.strip().lower()

    def create(self, provider: Optional[str] = None) -> AIProvider:
        """
        Construct the named backend.

        Raises:
            UnknownProviderError: name is not one of PROVIDERS.
            ProviderConfigurationError: the backend's settings are incomplete.
        """
        name = self.resolve_name(provider)
        provider_cls = PROVIDERS.get(name)
        if provider_cls is None:
            raise UnknownProviderError(provider or name, list(PROVIDERS))
        return provider_cls(self.settings, transport=self._transport)

    def create_with_fallback(self, primary: str, fallback: str) -> AIProvider:
        """Construct both backends and wrap them so `fallback` is tried once if `primary` fails."""
        return FallbackProvider(self.create(primary), self.create(fallback))


def create_provider(
    provider: Optional[str] = None,
    settings: Optional[ProviderSettings] = None
) -> AIProvider:
    """Shortcut for AIProviderFactory(settings).create(provider)."""
    return AIProviderFactory(settings).create(provider)
