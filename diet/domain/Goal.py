"""Goal domain entity: weight-change target with biometric and preference parameters."""
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict


class GoalType(str, Enum):
    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"


class DietPreference(str, Enum):
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non_vegetarian"
    VEGAN = "vegan"


class GoalStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"


class GoalParameters(BaseModel):
    """Immutable input to calorie estimation and plan generation."""
    model_config = ConfigDict(frozen=True)

    goal_type: GoalType
    current_weight_kg: float
    target_weight_kg: float
    age_years: int
    diet_preference: DietPreference
    duration_weeks: int


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class Goal:
    def __init__(self, user_id: str, parameters: GoalParameters, id: Optional[str] = None,
                 status: GoalStatus = GoalStatus.ACTIVE, created_at: Optional[str] = None,
                 updated_at: Optional[str] = None):
        self.id = id or str(uuid4())
        self.user_id = user_id
        self.parameters = parameters
        self.status = GoalStatus(status)
        self.created_at = created_at or _now_iso()
        self.updated_at = updated_at or self.created_at

    @property
    def goal_type(self) -> GoalType:
        return self.parameters.goal_type

    @property
    def current_weight(self) -> float:
        return self.parameters.current_weight_kg

    @property
    def target_weight(self) -> float:
        return self.parameters.target_weight_kg

    @property
    def duration_weeks(self) -> int:
        return self.parameters.duration_weeks

    @property
    def created_datetime(self) -> datetime:
        return datetime.fromisoformat(self.created_at)

    def set_status(self, status: GoalStatus):
        self.status = GoalStatus(status)
        self.updated_at = _now_iso()

    def __str__(self) -> str:
        p = self.parameters
        return (f"{p.goal_type.value} {p.current_weight_kg}kg -> {p.target_weight_kg}kg "
                f"in {p.duration_weeks} weeks ({self.status.value})")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Goal from a stored row. Ignores unknown keys.'''
        d = dict(data)
        parameters = GoalParameters(
            goal_type=d["goal_type"],
            current_weight_kg=d["current_weight"],
            target_weight_kg=d["target_weight"],
            age_years=d["age"],
            diet_preference=d["diet_preference"],
            duration_weeks=d["goal_duration_weeks"],
        )
        return Goal(
            user_id=d["user_id"],
            parameters=parameters,
            id=d.get("id"),
            status=d.get("status", GoalStatus.ACTIVE.value),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
        )

    def to_dict(self):
        '''Converts the Goal to a row for JSON persistence.'''
        p = self.parameters
        return {
            "id": self.id,
            "user_id": self.user_id,
            "goal_type": p.goal_type.value,
            "current_weight": p.current_weight_kg,
            "target_weight": p.target_weight_kg,
            "age": p.age_years,
            "diet_preference": p.diet_preference.value,
            "goal_duration_weeks": p.duration_weeks,
            "status": self.status.value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
