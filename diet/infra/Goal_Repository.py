"""Goal repository. Every call is scoped to the owning user."""
import logging
from typing import List, Optional

from diet.domain.Goal import Goal, GoalStatus
from diet.infra.Store import JsonStore
from diet.infra.paths import GOALS_FILE, DIET_PLANS_FILE, HISTORY_FILE

logger = logging.getLogger(__name__)


class GoalRepository:
    def __init__(self, store: Optional[JsonStore] = None):
        self.store = store or JsonStore()

    def create(self, goal: Goal) -> Goal:
        self.store.insert(GOALS_FILE, goal.to_dict())
        return goal

    def list_for_user(self, user_id: str) -> List[Goal]:
        """Newest first."""
        rows = self.store.select(GOALS_FILE, lambda r: r.get("user_id") == user_id)
        goals = [Goal.from_dict(r) for r in rows]
        goals.sort(key=lambda g: g.created_at, reverse=True)
        return goals

    def get(self, user_id: str, goal_id: str) -> Optional[Goal]:
        rows = self.store.select(GOALS_FILE, lambda r: r.get("id") == goal_id and r.get("user_id") == user_id)
        return Goal.from_dict(rows[0]) if rows else None

    def update_status(self, user_id: str, goal_id: str, status: GoalStatus) -> Optional[Goal]:
        with self.store.lock:
            goal = self.get(user_id, goal_id)
            if goal is None:
                return None
            goal.set_status(status)
            self.store.update(
                GOALS_FILE,
                lambda r: r.get("id") == goal_id and r.get("user_id") == user_id,
                {"status": goal.status.value, "updated_at": goal.updated_at},
            )
        return goal

    def delete(self, user_id: str, goal_id: str) -> bool:
        """Delete the goal with its diet plans and weight history."""
        with self.store.lock:
            removed = self.store.delete(
                GOALS_FILE, lambda r: r.get("id") == goal_id and r.get("user_id") == user_id)
            if not removed:
                return False
            plans = self.store.delete(DIET_PLANS_FILE, lambda r: r.get("goal_id") == goal_id)
            entries = self.store.delete(HISTORY_FILE, lambda r: r.get("goal_id") == goal_id)
        logger.info("Deleted goal %s (%s plans, %s history entries)", goal_id, plans, entries)
        return True
