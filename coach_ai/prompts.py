"""
Prompt Builders
===============

One builder per capability. Each returns a PromptSpec holding the system
and user instructions plus the sampling settings that operation runs with.
Backends only decide how to wrap a PromptSpec into their own envelope.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PromptSpec:
    """Everything a backend needs to issue one completion request."""
    operation: str          # human-readable, used in error messages
    system_prompt: str
    user_prompt: str
    temperature: float
    max_tokens: int


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


PROGRAM_SYSTEM_PROMPT = """You are an expert strength and conditioning coach with deep knowledge of periodization principles from Supertraining (Siff & Verkhoshansky), Joel Jamieson's methods, and peer-reviewed S&C research.

Your task is to generate a complete periodized training program using REVERSE PERIODIZATION from the target event date. The program must:

1. Work backwards from the event to determine optimal periodization phases
2. Consider the user's lifestyle constraints (work, travel, equipment access)
3. Use evidence-based periodization models (linear, undulating, conjugate, or block)
4. Include specific deload weeks based on literature recommendations
5. Account for the user's training age and experience level
6. Focus on PERFORMANCE outcomes, not aesthetics

Return a single JSON object with the fields name, target_event, program_structure (total_duration_weeks, periodization_model, phases) and performance_tracking."""

CHALLENGE_SYSTEM_PROMPT = """You are an expert S&C coach who creates motivating, achievable performance challenges.

Generate a specific, measurable challenge based on the user's current fitness level and goals. The challenge should:
1. Be achievable within 8-16 weeks based on their training age
2. Focus on performance metrics, not aesthetics
3. Be specific and measurable
4. Align with evidence-based training principles

Return a JSON object with name, type, target_date, and description fields."""

ADAPT_SYSTEM_PROMPT = """You are an expert S&C coach who adapts workouts based on real-world constraints.

Your task is to modify the given workout based on the current context while maintaining the training stimulus as much as possible. Consider:
1. Available equipment limitations
2. Time constraints
3. User readiness (sleep, stress, soreness)
4. Travel mode adaptations
5. Injury limitations

Return the modified workout as a JSON object in the same structure, with explanations in the modifications_applied field."""

DELOAD_SYSTEM_PROMPT = """You are an expert S&C coach who provides literature-based deload recommendations.

Based on current research, provide 1-2 deload options for the given workout. Options should:
1. Follow evidence-based deload protocols (typically 20-40% volume reduction OR 10-20% intensity reduction)
2. Maintain movement patterns while reducing stress
3. Be specific to the deload reason
4. Include clear explanations based on research

Return a JSON object {"deload_options": [...]} where each option has type ("volume_deload" or "intensity_deload"), description, and modifications."""

ANALYSIS_SYSTEM_PROMPT = """You are an expert S&C coach and data analyst who provides actionable performance insights.

Analyze the performance data and provide:
1. Key insights about training adaptations
2. Specific recommendations for program adjustments
3. Identification of stalling patterns or overreaching
4. Suggestions for periodization modifications

Base analysis on evidence-based principles and current research.
Return a JSON object with insights (list of strings), recommendations (list of strings) and optionally program_adjustments (object)."""


def program_prompt(
    profile: Dict[str, Any],
    target_event: Dict[str, Any],
    context: Optional[Dict[str, Any]] = None
) -> PromptSpec:
    user_prompt = f"""Generate a periodized training program for:

USER PROFILE:
{_dump(profile)}

TARGET EVENT:
{_dump(target_event)}

CONTEXT:
{_dump(context)}

The program must be scientifically sound, realistic given their constraints, and optimized for the target event. Include specific exercises, sets, reps, and RPE targets where appropriate."""
    return PromptSpec("generate program", PROGRAM_SYSTEM_PROMPT, user_prompt, 0.7, 4000)


def challenge_prompt(profile: Dict[str, Any], challenge_type: str) -> PromptSpec:
    user_prompt = f"""Create a {challenge_type} challenge for this user:
{_dump(profile)}

Make it exciting but realistic given their experience level and constraints."""
    return PromptSpec("generate challenge", CHALLENGE_SYSTEM_PROMPT, user_prompt, 0.8, 500)


def adapt_prompt(workout: Dict[str, Any], context: Dict[str, Any]) -> PromptSpec:
    user_prompt = f"""Adapt this workout based on current context:

ORIGINAL WORKOUT:
{_dump(workout)}

CURRENT CONTEXT:
{_dump(context)}

Maintain training stimulus while adapting to constraints."""
    return PromptSpec("adapt workout", ADAPT_SYSTEM_PROMPT, user_prompt, 0.5, 2000)


def deload_prompt(workout: Dict[str, Any], deload_reason: str) -> PromptSpec:
    # Only the live prescription matters for a same-day deload
    prescription = workout.get("current_prescription", workout)
    user_prompt = f"""Provide deload options for:

WORKOUT:
{_dump(prescription)}

DELOAD REASON: {deload_reason}

Base recommendations on current literature (Izquierdo, Helms, etc.)."""
    return PromptSpec("generate deload options", DELOAD_SYSTEM_PROMPT, user_prompt, 0.3, 1000)


def analysis_prompt(
    profile: Dict[str, Any],
    performance_data: Dict[str, Any],
    program: Dict[str, Any]
) -> PromptSpec:
    name = (profile.get("profile") or {}).get("name", "Unknown")
    level = (profile.get("training_background") or {}).get("experience_level", "unknown")
    event_name = (program.get("target_event") or {}).get("name", "no specific event")

    user_prompt = f"""Analyze performance for:

USER: {name} ({level})
PROGRAM: {program.get("name", "Unnamed program")} targeting {event_name}

PERFORMANCE DATA:
{_dump(performance_data)}

Provide actionable insights and recommendations."""
    return PromptSpec("analyze performance", ANALYSIS_SYSTEM_PROMPT, user_prompt, 0.4, 1500)
