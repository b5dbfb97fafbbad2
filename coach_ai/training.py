"""
Training Helpers
Deload eligibility, deload application and periodization phase lookups.

Deload spacing rules:
    min 3 calendar days between deloads
    max 1 deload within the last 6 training days

Phase progress:
    progress % = (today - start) / (end - start) × 100, clamped to 0-100
"""

import copy
from dataclasses import dataclass, asdict
from datetime import date, datetime, timezone
from typing import List, Dict, Any, Optional, Iterable, Union

from coach_ai.schemas import DeloadOption, DeloadReason, DeloadType


MIN_DAYS_BETWEEN_DELOADS = 3
MAX_DELOADS_PER_6_TRAINING_DAYS = 1
TRAINING_DAY_WINDOW = 6

DateLike = Union[date, datetime, str]


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # ISO-8601, with or without a time part / trailing Z
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


@dataclass
class DeloadEligibility:
    can_deload: bool
    days_since_last_deload: Optional[int]
    deloads_in_last_6_training_days: int
    reason_blocked: Optional[str] = None
    min_days_between_deloads: int = MIN_DAYS_BETWEEN_DELOADS
    max_deloads_per_6_training_days: int = MAX_DELOADS_PER_6_TRAINING_DAYS

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def check_deload_eligibility(
    deload_dates: Iterable[DateLike],
    training_dates: Iterable[DateLike],
    today: Optional[DateLike] = None
) -> DeloadEligibility:
    """
    Decide whether a deload may be applied today.

    Args:
        deload_dates: Dates deloads were applied
        training_dates: Dates the user actually trained
        today: Reference date (default: today)
    """
    today = _to_date(today) if today is not None else date.today()
    deloads = sorted({_to_date(d) for d in deload_dates if _to_date(d) <= today})
    trained = sorted({_to_date(d) for d in training_dates if _to_date(d) <= today})

    days_since_last = (today - deloads[-1]).days if deloads else None

    # Window = the last 6 distinct training days (today counts if trained)
    window = trained[-TRAINING_DAY_WINDOW:]
    window_start = window[0] if window else today
    recent_deloads = sum(1 for d in deloads if d >= window_start)

    reason = None
    if days_since_last is not None and days_since_last < MIN_DAYS_BETWEEN_DELOADS:
        reason = (
            f"Last deload was {days_since_last} day(s) ago; "
            f"wait at least {MIN_DAYS_BETWEEN_DELOADS} days between deloads"
        )
    elif recent_deloads >= MAX_DELOADS_PER_6_TRAINING_DAYS:
        reason = (
            f"Already {recent_deloads} deload(s) in the last {TRAINING_DAY_WINDOW} training days"
        )

    return DeloadEligibility(
        can_deload=reason is None,
        days_since_last_deload=days_since_last,
        deloads_in_last_6_training_days=recent_deloads,
        reason_blocked=reason,
    )


def apply_deload_option(
    workout: Dict[str, Any],
    options: List[Union[DeloadOption, Dict[str, Any]]],
    deload_type: str,
    reason: str,
    applied_at: Optional[str] = None
) -> Dict[str, Any]:
    """
    Record the chosen deload on a copy of the workout.

    The selected option's description is appended to
    current_prescription.modifications_applied; the input is not mutated.

    Raises:
        ValueError: unknown deload type/reason, or no option of that type.
    """
    deload_type = DeloadType(deload_type).value
    reason = DeloadReason(reason).value

    selected = None
    for option in options:
        option = option if isinstance(option, DeloadOption) else DeloadOption.model_validate(option)
        if option.type.value == deload_type:
            selected = option
            break
    if selected is None:
        raise ValueError(f"No {deload_type} option available")

    updated = copy.deepcopy(workout)
    prescription = updated.setdefault("current_prescription", {})
    prescription.setdefault("modifications_applied", []).append({
        "type": deload_type,
        "reason": reason,
        "changes": selected.description,
        "applied_at": applied_at or datetime.now(timezone.utc).isoformat(),
    })
    return updated


# ============ Periodization ============

def _phases(program: Dict[str, Any]) -> List[Dict[str, Any]]:
    structure = program.get("program_structure") or {}
    return list(structure.get("phases") or [])


def get_current_phase(program: Dict[str, Any], today: Optional[DateLike] = None) -> Optional[Dict[str, Any]]:
    """Return the phase whose start/end dates (inclusive) contain today."""
    today = _to_date(today) if today is not None else date.today()
    for phase in _phases(program):
        if _to_date(phase["start_date"]) <= today <= _to_date(phase["end_date"]):
            return phase
    return None


def calculate_phase_progress(phase: Optional[Dict[str, Any]], today: Optional[DateLike] = None) -> int:
    if not phase:
        return 0
    today = _to_date(today) if today is not None else date.today()
    start = _to_date(phase["start_date"])
    end = _to_date(phase["end_date"])

    total = (end - start).days
    if total <= 0:
        return 100 if today >= end else 0
    elapsed = (today - start).days
    return max(0, min(100, round(elapsed / total * 100)))


def get_next_phase(program: Dict[str, Any], phase: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not phase:
        return None
    ordered = sorted(_phases(program), key=lambda p: _to_date(p["start_date"]))
    names = [p.get("name") for p in ordered]
    try:
        index = names.index(phase.get("name"))
    except ValueError:
        return None
    return ordered[index + 1] if index + 1 < len(ordered) else None
