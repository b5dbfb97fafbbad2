"""
Anthropic Provider
Secondary backend using the Messages API
"""
from typing import Optional, Dict, Any, Tuple

import httpx

from coach_ai.adapter import CompletionProvider
from coach_ai.config import ProviderSettings
from coach_ai.errors import ProviderConfigurationError
from coach_ai.prompts import PromptSpec


class AnthropicProvider(CompletionProvider):
    """Anthropic-style /messages backend."""

    name = "anthropic"

    def __init__(
        self,
        settings: ProviderSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        if not settings.anthropic_api_key:
            raise ProviderConfigurationError(
                "ANTHROPIC_API_KEY environment variable is required", "ANTHROPIC_API_KEY"
            )
        super().__init__(settings, transport)
        self.api_key = settings.anthropic_api_key
        self.base_url = settings.anthropic_base_url.rstrip("/")
        self.model = settings.anthropic_model
        self.api_version = settings.anthropic_version

    def _build_request(self, spec: PromptSpec) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
            "Content-Type": "application/json",
        }
        # No JSON mode on this API; ask for it in the prompt instead
        body = {
            "model": self.model,
            "max_tokens": spec.max_tokens,
            "temperature": spec.temperature,
            "system": spec.system_prompt,
            "messages": [
                {
                    "role": "user",
                    "content": f"{spec.user_prompt}\n\nPlease respond with valid JSON only.",
                }
            ],
        }
        return f"{self.base_url}/messages", headers, body

    def _extract_content(self, data: Dict[str, Any]) -> str:
        text_blocks = [block for block in data["content"] if block.get("type", "text") == "text"]
        return text_blocks[0]["text"]
