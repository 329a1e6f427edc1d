"""Diet plan domain: meal entries, snacks and the daily plan built for one goal."""
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, List, Optional
from uuid import uuid4

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


class PlanSource(str, Enum):
    GENERATED = "generated"
    FALLBACK = "fallback"


def _whole_calories(value):
    # 450.5 -> 451; non-numeric and non-finite values are left for validation
    if isinstance(value, float) and math.isfinite(value):
        return int(math.floor(value + 0.5))
    return value


Calories = Annotated[int, BeforeValidator(_whole_calories), Field(ge=0)]


class MealEntry(BaseModel):
    """One of breakfast, lunch or dinner."""
    model_config = ConfigDict(frozen=True)

    foods: List[str]
    calories: Calories
    description: str = ""


class SnackEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    foods: List[str] = Field(default_factory=list)
    calories: Calories


class DietPlan(BaseModel):
    """Structured daily plan. Field names follow the generator's JSON contract."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    daily_calories: Annotated[int, BeforeValidator(_whole_calories)] = Field(..., alias="dailyCalories")
    breakfast: MealEntry
    lunch: MealEntry
    dinner: MealEntry
    snacks: List[SnackEntry] = Field(default_factory=list)
    source: PlanSource = PlanSource.GENERATED

    @property
    def is_fallback(self) -> bool:
        return self.source == PlanSource.FALLBACK

    def meals(self):
        return {"breakfast": self.breakfast, "lunch": self.lunch, "dinner": self.dinner}

    def total_calories(self) -> int:
        return (self.breakfast.calories + self.lunch.calories + self.dinner.calories
                + sum(s.calories for s in self.snacks))

    def to_payload(self) -> dict:
        """JSON body returned to clients (camelCase keys, plus the source tag)."""
        return self.model_dump(mode="json", by_alias=True)


class DietPlanRecord:
    """Persisted diet plan row, owned by a user and attached to a goal."""

    def __init__(self, goal_id: str, user_id: str, plan: DietPlan,
                 id: Optional[str] = None, created_at: Optional[str] = None):
        self.id = id or str(uuid4())
        self.goal_id = goal_id
        self.user_id = user_id
        self.plan = plan
        self.created_at = created_at or datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"DietPlan {self.id} for goal {self.goal_id} - {self.plan.daily_calories} kcal ({self.plan.source.value})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        plan = DietPlan(
            daily_calories=d["daily_calories"],
            breakfast=d["breakfast"],
            lunch=d["lunch"],
            dinner=d["dinner"],
            snacks=d.get("snacks") or [],
            source=d.get("source", PlanSource.GENERATED.value),
        )
        return DietPlanRecord(d["goal_id"], d["user_id"], plan, id=d.get("id"), created_at=d.get("created_at"))

    def to_dict(self):
        body = self.plan.model_dump(mode="json")
        return {
            "id": self.id,
            "goal_id": self.goal_id,
            "user_id": self.user_id,
            "daily_calories": body["daily_calories"],
            "breakfast": body["breakfast"],
            "lunch": body["lunch"],
            "dinner": body["dinner"],
            "snacks": body["snacks"],
            "source": body["source"],
            "created_at": self.created_at,
        }
