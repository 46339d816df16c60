"""Models for achievement definitions and their conditions.

Conditions are plain data: each kind carries its parameters and is
interpreted by the achievement engine against an ``AchievementSnapshot``.
"""
from dataclasses import dataclass, fields
from datetime import datetime
from typing import Any, ClassVar, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class CounterThreshold:
    """Satisfied when a snapshot counter reaches ``target``."""
    kind: ClassVar[str] = "counter_threshold"
    counter: str
    target: int


@dataclass(frozen=True)
class RatioThreshold:
    """Satisfied when a snapshot ratio (a percentage) reaches ``target``."""
    kind: ClassVar[str] = "ratio_threshold"
    ratio: str
    target: float


@dataclass(frozen=True)
class GoalReached:
    """Satisfied when a snapshot counter reaches another snapshot field."""
    kind: ClassVar[str] = "goal_reached"
    counter: str
    goal: str


@dataclass(frozen=True)
class TimeWindow:
    """Satisfied when the evaluation hour is in ``[start_hour, end_hour)``."""
    kind: ClassVar[str] = "time_window"
    start_hour: int
    end_hour: int


@dataclass(frozen=True)
class AllOf:
    """Satisfied when every nested condition is."""
    kind: ClassVar[str] = "all_of"
    conditions: Tuple["Condition", ...]


Condition = Union[CounterThreshold, RatioThreshold, GoalReached, TimeWindow, AllOf]

CONDITION_KINDS = {
    cls.kind: cls
    for cls in (CounterThreshold, RatioThreshold, GoalReached, TimeWindow, AllOf)
}


def condition_to_dict(condition: Condition) -> Dict[str, Any]:
    """Serialize a condition tree to plain data."""
    if isinstance(condition, AllOf):
        return {
            "kind": AllOf.kind,
            "conditions": [condition_to_dict(c) for c in condition.conditions],
        }
    data = {"kind": condition.kind}
    data.update({f.name: getattr(condition, f.name) for f in fields(condition)})
    return data


def condition_from_dict(data: Dict[str, Any]) -> Condition:
    """Build a condition tree from plain data."""
    kind = data.get("kind")
    if kind not in CONDITION_KINDS:
        raise ValueError(f"Unknown condition kind: {kind!r}")
    if kind == AllOf.kind:
        return AllOf(tuple(condition_from_dict(c) for c in data.get("conditions", [])))
    params = {key: value for key, value in data.items() if key != "kind"}
    return CONDITION_KINDS[kind](**params)


@dataclass(frozen=True)
class AchievementDefinition:
    """Static description of an achievement."""
    id: str
    name: str
    description: str
    icon: str
    condition: Condition


@dataclass(frozen=True)
class AchievementSnapshot:
    """Aggregate values one evaluation pass reads from."""
    total_learned: int
    total_correct: int
    total_wrong: int
    today_learned: int
    today_reviewed: int
    streak: int
    new_count: int
    learning_count: int
    mastered_count: int
    accuracy: int
    total_answers: int
    daily_goal: int
    hour: Optional[int] = None


@dataclass(frozen=True)
class AchievementStatus:
    """Achievement together with its unlock state."""
    definition: AchievementDefinition
    unlocked: bool
    unlocked_at: Optional[datetime] = None


@dataclass(frozen=True)
class AchievementProgress:
    """Progress towards a threshold achievement."""
    current: int
    target: int
    percent: int


@dataclass(frozen=True)
class AchievementCount:
    """Number of unlocked achievements out of the catalog size."""
    unlocked: int
    total: int
