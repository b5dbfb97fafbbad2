"""
AI Provider Adapter
===================

Model-agnostic interface for swappable program-generation backends
(OpenAI / Anthropic / Ollama).

CompletionProvider implements the five capabilities once. Concrete
backends only describe their request envelope and where the JSON payload
sits inside the response body.
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Protocol, Optional, List, Dict, Any, Tuple

import httpx
from pydantic import ValidationError

from coach_ai.config import ProviderSettings
from coach_ai.errors import AIProviderError
from coach_ai.prompts import (
    PromptSpec,
    program_prompt,
    challenge_prompt,
    adapt_prompt,
    deload_prompt,
    analysis_prompt,
)
from coach_ai.schemas import (
    ChallengeType,
    DeloadReason,
    ProgramGenerationContext,
    WorkoutAdaptationContext,
    PerformanceData,
    Challenge,
    DeloadOption,
    PerformanceAnalysis,
    ContextInput,
    context_to_dict,
)

logger = logging.getLogger(__name__)


class AIProvider(Protocol):
    """
    Protocol for program-generation backends.
    All implementations must provide the five async capabilities below.
    """

    async def generate_program(
        self,
        profile: Dict[str, Any],
        target_event: Dict[str, Any],
        context: ContextInput = None
    ) -> Dict[str, Any]:
        """Generate a periodized program working backwards from the event date."""
        ...

    async def generate_challenge(
        self,
        profile: Dict[str, Any],
        challenge_type: str = "general"
    ) -> Challenge:
        """Generate a challenge for users without a specific goal."""
        ...

    async def adapt_workout(
        self,
        workout: Dict[str, Any],
        context: ContextInput
    ) -> Dict[str, Any]:
        """Adapt a workout to today's equipment, time, readiness and injuries."""
        ...

    async def generate_deload_options(
        self,
        workout: Dict[str, Any],
        deload_reason: str
    ) -> List[DeloadOption]:
        """Return 1-2 literature-based reduced-load variants of the workout."""
        ...

    async def analyze_performance(
        self,
        profile: Dict[str, Any],
        performance_data: ContextInput,
        program: Dict[str, Any]
    ) -> PerformanceAnalysis:
        """Summarize logged performance into insights and recommendations."""
        ...


def default_current_context(now: Optional[str] = None) -> Dict[str, Any]:
    return {
        "travel_mode": False,
        "available_equipment": [],
        "location_type": "home",
        "last_updated": now or datetime.now(timezone.utc).isoformat(),
    }


def validate_program_structure(
    program_data: Dict[str, Any],
    user_id: Optional[str],
    target_event: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Normalize a loosely-typed model response into the Program shape.

    The id is always freshly generated and status is always "active";
    every other field falls back to a default when the model left it out.
    """
    return {
        "id": str(uuid.uuid4()),
        "user_id": user_id,
        "name": program_data.get("name") or "Generated Program",
        "target_event": program_data.get("target_event") or target_event or {},
        "program_structure": program_data.get("program_structure") or {},
        "current_context": program_data.get("current_context") or default_current_context(),
        "performance_tracking": program_data.get("performance_tracking") or {
            "baseline_tests": [],
            "progress_checkpoints": [],
        },
        "status": "active",
    }


def parse_json_payload(text: str) -> Any:
    """
    Parse the JSON document a model returned.
    Tolerates ```json fences around the payload.
    """
    if not isinstance(text, str):
        raise TypeError(f"Expected text content, got {type(text).__name__}")
    text = text.strip()
    if "```json" in text:
        text = text.split("```json")[1].split("```")[0].strip()
    elif text.startswith("```"):
        parts = text.split("```")
        if len(parts) >= 2:
            text = parts[1].strip()
    return json.loads(text)


class CompletionProvider:
    """
    Shared request/response flow for JSON-mode chat completion backends.

    Subclasses set `name` and implement _build_request() and
    _extract_content(). Nothing here is mutated after __init__, so a single
    instance can serve concurrent callers.
    """

    name = "base"

    def __init__(
        self,
        settings: ProviderSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.settings = settings
        self.timeout = settings.timeout_seconds
        self._transport = transport

    # ------------------------------------------------------------------
    # Backend-specific envelope
    # ------------------------------------------------------------------

    def _build_request(self, spec: PromptSpec) -> Tuple[str, Dict[str, str], Dict[str, Any]]:
        """Return (url, headers, json body) for one completion."""
        raise NotImplementedError

    def _extract_content(self, data: Dict[str, Any]) -> str:
        """Return the model's text payload from the decoded response body."""
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _complete_json(self, spec: PromptSpec) -> Any:
        """
        Run one completion and return the decoded JSON payload.

        Raises:
            AIProviderError: on network failure, non-2xx status, or a body
                that does not carry parseable JSON.
        """
        url, headers, body = self._build_request(spec)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, headers=headers, json=body)
        except httpx.HTTPError as e:
            logger.error(f"{self.name} {spec.operation} transport error: {e}")
            raise AIProviderError(self.name, spec.operation, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            message = f"{self.name} API error: {response.status_code} {response.reason_phrase}"
            logger.error(f"{self.name} {spec.operation} failed: {message}")
            raise AIProviderError(self.name, spec.operation, message, response.status_code)

        try:
            content = self._extract_content(response.json())
            return parse_json_payload(content)
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(f"{self.name} {spec.operation} returned malformed payload: {e}")
            raise AIProviderError(
                self.name, spec.operation, f"Malformed response payload: {e}", response.status_code
            ) from e

    async def _complete_object(self, spec: PromptSpec) -> Dict[str, Any]:
        payload = await self._complete_json(spec)
        if not isinstance(payload, dict):
            raise AIProviderError(
                self.name, spec.operation,
                f"Expected a JSON object, got {type(payload).__name__}"
            )
        return payload

    def _validate(self, spec: PromptSpec, model: type, payload: Any):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            logger.error(f"{self.name} {spec.operation} payload failed validation: {e}")
            raise AIProviderError(self.name, spec.operation, f"Invalid response shape: {e}") from e

    # ------------------------------------------------------------------
    # Capabilities
    # ------------------------------------------------------------------

    async def generate_program(
        self,
        profile: Dict[str, Any],
        target_event: Dict[str, Any],
        context: ContextInput = None
    ) -> Dict[str, Any]:
        context_data = context_to_dict(context, ProgramGenerationContext)
        spec = program_prompt(profile, target_event, context_data)

        program_data = await self._complete_object(spec)
        return validate_program_structure(program_data, profile.get("id"), target_event)

    async def generate_challenge(
        self,
        profile: Dict[str, Any],
        challenge_type: str = "general"
    ) -> Challenge:
        challenge_type = ChallengeType(challenge_type or ChallengeType.GENERAL).value
        spec = challenge_prompt(profile, challenge_type)

        payload = await self._complete_object(spec)
        return self._validate(spec, Challenge, payload)

    async def adapt_workout(
        self,
        workout: Dict[str, Any],
        context: ContextInput
    ) -> Dict[str, Any]:
        context_data = context_to_dict(context, WorkoutAdaptationContext)
        spec = adapt_prompt(workout, context_data)

        adapted = await self._complete_object(spec)
        return {**workout, **adapted}

    async def generate_deload_options(
        self,
        workout: Dict[str, Any],
        deload_reason: str
    ) -> List[DeloadOption]:
        deload_reason = DeloadReason(deload_reason).value
        spec = deload_prompt(workout, deload_reason)

        payload = await self._complete_json(spec)
        if isinstance(payload, list):
            raw_options = payload
        elif isinstance(payload, dict):
            raw_options = payload.get("deload_options") or []
        else:
            raise AIProviderError(
                self.name, spec.operation,
                f"Expected a JSON object, got {type(payload).__name__}"
            )

        return [self._validate(spec, DeloadOption, option) for option in raw_options]

    async def analyze_performance(
        self,
        profile: Dict[str, Any],
        performance_data: ContextInput,
        program: Dict[str, Any]
    ) -> PerformanceAnalysis:
        performance = context_to_dict(performance_data, PerformanceData) or {}
        spec = analysis_prompt(profile, performance, program)

        payload = await self._complete_object(spec)
        return self._validate(spec, PerformanceAnalysis, payload)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={getattr(self, 'model', None)!r})"
