"""
OpenAI Provider
Primary backend for program generation (chat completions, JSON mode)
"""
from typing import Optional, Dict, Any, Tuple

import httpx

from coach_ai.adapter import CompletionProvider
from coach_ai.config import ProviderSettings
from coach_ai.errors import ProviderConfigurationError
from coach_ai.prompts import PromptSpec


class OpenAIProvider(CompletionProvider):
    """OpenAI-style /chat/completions backend."""

    name = "openai"

    def __init__(
        self,
        settings: ProviderSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not settings.openai_api_key:
            raise ProviderConfigurationError(
                "OPENAI_API_KEY environment variable is required", "OPENAI_API_KEY"
            )
        super().__init__(settings, transport)
        self.api_key = settings.openai_api_key
        self.base_url = settings.openai_base_url.rstrip("/")
        self.model = settings.openai_model

    def _build_request(self, spec: PromptSpec) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": spec.system_prompt},
                {"role": "user", "content": spec.user_prompt},
            ],
            "temperature": spec.temperature,
            "max_tokens": spec.max_tokens,
            "response_format": {"type": "json_object"},
        }
        return f"{self.base_url}/chat/completions", headers, body

    def _extract_content(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]
