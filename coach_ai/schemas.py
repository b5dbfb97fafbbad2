"""
Pydantic Schemas for the AI provider layer
Context records passed in by callers and result shapes returned to them
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Union
from enum import Enum


class ChallengeType(str, Enum):
    STRENGTH = "strength"
    ENDURANCE = "endurance"
    POWER = "power"
    GENERAL = "general"


class DeloadReason(str, Enum):
    POOR_SLEEP = "poor_sleep"
    HIGH_STRESS = "high_stress"
    FATIGUE = "fatigue"
    OVERREACHING = "overreaching"


class DeloadType(str, Enum):
    VOLUME = "volume_deload"
    INTENSITY = "intensity_deload"


class LocationType(str, Enum):
    HOME = "home"
    COMMERCIAL_GYM = "commercial_gym"
    HOTEL = "hotel"
    OUTDOOR = "outdoor"
    BODYWEIGHT = "bodyweight"


# ============ Context Schemas ============

class TimeConstraints(BaseModel):
    max_session_duration: int
    available_days: List[str] = []
    preferred_times: List[str] = []


class FitnessIndicators(BaseModel):
    strength_indicators: Dict[str, float] = {}
    endurance_indicators: Dict[str, float] = {}
    power_indicators: Dict[str, float] = {}


class ProgramGenerationContext(BaseModel):
    """Constraints the generated program has to respect."""
    available_equipment: List[str] = []
    location_constraints: List[str] = []
    time_constraints: Optional[TimeConstraints] = None
    current_fitness_level: Optional[FitnessIndicators] = None


class UserReadiness(BaseModel):
    sleep_quality: str = Field(default="good", pattern="^(poor|fair|good|excellent)$")
    stress_level: str = Field(default="moderate", pattern="^(low|moderate|high)$")
    soreness: str = Field(default="none", pattern="^(none|mild|moderate|high)$")
    motivation: str = Field(default="moderate", pattern="^(low|moderate|high)$")


class WorkoutAdaptationContext(BaseModel):
    """Today's real-world situation: equipment, time, readiness, travel, injuries."""
    available_equipment: List[str] = []
    location_type: LocationType = LocationType.COMMERCIAL_GYM
    time_available_minutes: int = Field(default=60, ge=5, le=240)
    user_readiness: UserReadiness = UserReadiness()
    travel_mode: bool = False
    injury_limitations: Optional[List[str]] = None


class RecentWorkout(BaseModel):
    date: str
    session_rpe: float
    completion_rate: float
    performance_metrics: Dict[str, Any] = {}


class AdherenceData(BaseModel):
    planned_sessions: int = 0
    completed_sessions: int = 0
    missed_sessions: int = 0
    deload_frequency: float = 0


class PerformanceData(BaseModel):
    """Logged training history summarized for analysis."""
    recent_workouts: List[RecentWorkout] = []
    strength_progression: Dict[str, List[Dict[str, Any]]] = {}
    endurance_progression: Dict[str, List[Dict[str, Any]]] = {}
    adherence_data: AdherenceData = AdherenceData()


# ============ Result Schemas ============

class Challenge(BaseModel):
    name: str
    type: str
    target_date: str
    description: str


class DeloadOption(BaseModel):
    type: DeloadType
    description: str
    modifications: Dict[str, Any] = {}


class PerformanceAnalysis(BaseModel):
    insights: List[str] = []
    recommendations: List[str] = []
    program_adjustments: Optional[Dict[str, Any]] = None


ContextInput = Union[BaseModel, Dict[str, Any], None]


def context_to_dict(context: ContextInput, model: type) -> Optional[Dict[str, Any]]:
    """
    Validate a caller-supplied context (model or plain dict) and return it
    as a JSON-ready dict. Invalid input raises pydantic.ValidationError.
    """
    if context is None:
        return None
    if isinstance(context, model):
        return context.model_dump(mode="json", exclude_none=True)
    if isinstance(context, BaseModel):
        context = context.model_dump()
    return model.model_validate(context).model_dump(mode="json", exclude_none=True)
