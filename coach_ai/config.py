"""
Provider Settings
Reads AI provider selection, credentials and endpoints from the environment.
"""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


DEFAULT_PROVIDER = "openai"
DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434"
DEFAULT_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True)
class ProviderSettings:
    """
    Explicit configuration handed to the factory and to each provider.

    Only from_env() touches the process environment; everything else takes
    a ProviderSettings so construction stays deterministic in tests.
    """
    default_provider: Optional[str] = None

    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o"

    anthropic_api_key: Optional[str] = None
    anthropic_base_url: str = "https://api.anthropic.com/v1"
    anthropic_model: str = "claude-3-5-sonnet-20241022"
    anthropic_version: str = "2023-06-01"

    ollama_base_url: Optional[str] = None
    ollama_model: str = "llama3.1"

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_env(cls) -> "ProviderSettings":
        """Build settings from .env / process environment."""
        load_dotenv()

        timeout = os.getenv("AI_REQUEST_TIMEOUT")
        return cls(
            default_provider=os.getenv("AI_PROVIDER") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL", cls.openai_base_url),
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            anthropic_base_url=os.getenv("ANTHROPIC_BASE_URL", cls.anthropic_base_url),
            anthropic_model=os.getenv("ANTHROPIC_MODEL", cls.anthropic_model),
            ollama_base_url=os.getenv("OLLAMA_BASE_URL") or None,
            ollama_model=os.getenv("OLLAMA_MODEL", cls.ollama_model),
            timeout_seconds=float(timeout) if timeout else DEFAULT_TIMEOUT_SECONDS,
        )
