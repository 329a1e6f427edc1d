from typing import List, Optional

from diet.domain.DietPlan import DietPlan, DietPlanRecord
from diet.infra.Store import JsonStore
from diet.infra.paths import DIET_PLANS_FILE


class DietPlanRepository:
    def __init__(self, store: Optional[JsonStore] = None):
        self.store = store or JsonStore()

    def create(self, user_id: str, goal_id: str, plan: DietPlan) -> DietPlanRecord:
        record = DietPlanRecord(goal_id=goal_id, user_id=user_id, plan=plan)
        self.store.insert(DIET_PLANS_FILE, record.to_dict())
        return record

    def list_for_goal(self, user_id: str, goal_id: str) -> List[DietPlanRecord]:
        rows = self.store.select(
            DIET_PLANS_FILE, lambda r: r.get("goal_id") == goal_id and r.get("user_id") == user_id)
        records = [DietPlanRecord.from_dict(r) for r in rows]
        records.sort(key=lambda rec: rec.created_at, reverse=True)
        return records

    def latest_for_goal(self, user_id: str, goal_id: str) -> Optional[DietPlanRecord]:
        records = self.list_for_goal(user_id, goal_id)
        return records[0] if records else None
