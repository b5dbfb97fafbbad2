"""
Coach AI - Program Generation Providers
=======================================

Model-agnostic access to the LLM backends that write training programs:

- One async interface, five capabilities (program, challenge, workout
  adaptation, deload options, performance analysis)
- OpenAI, Anthropic and Ollama backends
- Factory driven by explicit ProviderSettings
- One-hop fallback between two backends

Callers own persistence and HTTP; this package only talks to the models.
"""

from coach_ai.config import ProviderSettings
from coach_ai.errors import AIProviderError, ProviderConfigurationError, UnknownProviderError
from coach_ai.adapter import AIProvider, CompletionProvider, validate_program_structure
from coach_ai.openai_provider import OpenAIProvider
from coach_ai.anthropic_provider import AnthropicProvider
from coach_ai.ollama_provider import OllamaProvider
from coach_ai.fallback import FallbackProvider
from coach_ai.factory import AIProviderFactory, create_provider

__all__ = [
    'ProviderSettings',
    'AIProviderError',
    'ProviderConfigurationError',
    'UnknownProviderError',
    'AIProvider',
    'CompletionProvider',
    'validate_program_structure',
    'OpenAIProvider',
    'AnthropicProvider',
    'OllamaProvider',
    'FallbackProvider',
    'AIProviderFactory',
    'create_provider',
]
