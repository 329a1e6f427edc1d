from typing import List, Optional

from diet.domain.WeightEntry import WeightEntry
from diet.infra.Store import JsonStore
from diet.infra.paths import HISTORY_FILE


class HistoryRepository:
    def __init__(self, store: Optional[JsonStore] = None):
        self.store = store or JsonStore()

    def add(self, entry: WeightEntry) -> WeightEntry:
        self.store.insert(HISTORY_FILE, entry.to_dict())
        return entry

    def list_for_goal(self, user_id: str, goal_id: str) -> List[WeightEntry]:
        """Newest first."""
        rows = self.store.select(
            HISTORY_FILE, lambda r: r.get("goal_id") == goal_id and r.get("user_id") == user_id)
        entries = [WeightEntry.from_dict(r) for r in rows]
        entries.sort(key=lambda e: e.recorded_at, reverse=True)
        return entries
