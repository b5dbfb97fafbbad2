"""
Errors raised by the AI provider layer.
"""
from typing import Any, Dict, List, Optional


class AppError(Exception):
    """Base error carrying a machine-readable code and an HTTP-ish status."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }


class ProviderConfigurationError(AppError, ValueError):
    """Missing credential or malformed endpoint. Raised at construction."""

    def __init__(self, message: str, setting: Optional[str] = None):
        super().__init__(
            message,
            "PROVIDER_CONFIGURATION_ERROR",
            500,
            {"setting": setting} if setting else None
        )
        self.setting = setting


class UnknownProviderError(AppError, ValueError):
    """Factory was asked for a backend it does not know."""

    def __init__(self, provider: str, supported: List[str]):
        super().__init__(
            f"Unknown AI provider: {provider}. Supported providers: {', '.join(supported)}",
            "UNKNOWN_AI_PROVIDER",
            400,
            {"provider": provider, "supported": list(supported)}
        )
        self.provider = provider


class AIProviderError(AppError):
    """
    A single call to an upstream model failed.

    Covers transport failures, non-2xx responses and unparseable payloads.
    """

    def __init__(
        self,
        provider: str,
        operation: str,
        original_error: str,
        status_code: Optional[int] = None
    ):
        super().__init__(
            f"Failed to {operation} ({provider}): {original_error}",
            "AI_PROVIDER_ERROR",
            503,
            {
                "provider": provider,
                "operation": operation,
                "original_error": original_error,
                "upstream_status": status_code,
            },
            ["Check your API keys", "Try again in a few moments", "Contact support if problem persists"]
        )
        self.provider = provider
        self.operation = operation
        self.original_error = original_error
        self.upstream_status = status_code
