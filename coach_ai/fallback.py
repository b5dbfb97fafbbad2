"""
Fallback Provider
Retries a failed call once against a secondary backend.
"""
import logging
from typing import Optional, List, Dict, Any

from coach_ai.adapter import AIProvider
from coach_ai.schemas import Challenge, DeloadOption, PerformanceAnalysis, ContextInput

logger = logging.getLogger(__name__)


class FallbackProvider:
    """
    Wraps a primary and a secondary AIProvider behind the same interface.

    Each call goes to the primary first. If it raises, the same call with
    the same arguments goes to the secondary, whose result or exception is
    returned as-is. There is never a third attempt.
    """

    def __init__(self, primary: AIProvider, fallback: AIProvider):
        self._primary = primary
        self._fallback = fallback

    @property
    def primary(self) -> AIProvider:
        return self._primary

    @property
    def fallback(self) -> AIProvider:
        return self._fallback

    async def _call(self, operation: str, *args):
        try:
            return await getattr(self._primary, operation)(*args)
        except Exception as e:
            logger.warning(
                f"Primary AI provider {self._primary!r} failed on {operation}, "
                f"trying fallback {self._fallback!r}: {e}"
            )
        return await getattr(self._fallback, operation)(*args)

    async def generate_program(
        self,
        profile: Dict[str, Any],
        target_event: Dict[str, Any],
        context: ContextInput = None
    ) -> Dict[str, Any]:
        return await self._call("generate_program", profile, target_event, context)

    async def generate_challenge(
        self,
        profile: Dict[str, Any],
        challenge_type: Optional[str] = "general"
    ) -> Challenge:
        return await self._call("generate_challenge", profile, challenge_type)

    async def adapt_workout(self, workout: Dict[str, Any], context: ContextInput) -> Dict[str, Any]:
        return await self._call("adapt_workout", workout, context)

    async def generate_deload_options(
        self,
        workout: Dict[str, Any],
        deload_reason: str
    ) -> List[DeloadOption]:
        return await self._call("generate_deload_options", workout, deload_reason)

    async def analyze_performance(
        self,
        profile: Dict[str, Any],
        performance_data: ContextInput,
        program: Dict[str, Any]
    ) -> PerformanceAnalysis:
        return await self._call("analyze_performance", profile, performance_data, program)

    def __repr__(self) -> str:
        return f"FallbackProvider(primary={self._primary!r}, fallback={self._fallback!r})"
