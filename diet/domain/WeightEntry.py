"""Weight history entry: a measurement recorded against a goal."""
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4


class WeightEntry:
    def __init__(self, user_id: str, goal_id: str, current_weight: float,
                 id: Optional[str] = None, recorded_at: Optional[str] = None):
        self.id = id or str(uuid4())
        self.user_id = user_id
        self.goal_id = goal_id
        self.current_weight = current_weight
        self.recorded_at = recorded_at or datetime.now(timezone.utc).isoformat()

    @property
    def recorded_datetime(self) -> datetime:
        return datetime.fromisoformat(self.recorded_at)

    def __str__(self) -> str:
        return f"{self.current_weight}kg @ {self.recorded_at}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data)
        return WeightEntry(
            user_id=d["user_id"],
            goal_id=d["goal_id"],
            current_weight=d.get("current_weight"),
            id=d.get("id"),
            recorded_at=d.get("recorded_at"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "goal_id": self.goal_id,
            "current_weight": self.current_weight,
            "recorded_at": self.recorded_at,
        }
