"""
Ollama Provider
Local/self-hosted backend, no API key
"""
from typing import Optional, Dict, Any, Tuple

import httpx

from coach_ai.adapter import CompletionProvider
from coach_ai.config import ProviderSettings, DEFAULT_OLLAMA_BASE_URL
from coach_ai.errors import ProviderConfigurationError
from coach_ai.prompts import PromptSpec


class OllamaProvider(CompletionProvider):
    """Ollama /api/chat backend with format=json."""

    name = "ollama"

    def __init__(
        self,
        settings: ProviderSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        base_url = settings.ollama_base_url or DEFAULT_OLLAMA_BASE_URL
        if not base_url.startswith(("http://", "https://")):
            raise ProviderConfigurationError(
                "OLLAMA_BASE_URL must start with http:// or https://", "OLLAMA_BASE_URL"
            )
        super().__init__(settings, transport)
        self.base_url = base_url.rstrip("/")
        self.model = settings.ollama_model

    def _build_request(self, spec: PromptSpec) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        headers = {"Content-Type": "application/json"}
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": spec.system_prompt},
                {"role": "user", "content": spec.user_prompt},
            ],
            "format": "json",
            "stream": False,
            "options": {
                "temperature": spec.temperature,
                "num_predict": spec.max_tokens,
            },
        }
        return f"{self.base_url}/api/chat", headers, body

    def _extract_content(self, data: Dict[str, Any]) -> str:
        return data["message"]["content"]
