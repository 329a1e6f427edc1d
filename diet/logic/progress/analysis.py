"""Weight progress aggregation for a goal.

Entries are WeightEntry objects for a single goal, in any order.
"""
import math
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from diet.domain.Goal import Goal
from diet.domain.WeightEntry import WeightEntry


def _aware(dt: datetime) -> datetime:
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _chart_label(dt: datetime) -> str:
    return f"{dt:%b} {dt.day}"


def latest_entry(entries: List[WeightEntry]) -> Optional[WeightEntry]:
    if not entries:
        return None
    return max(entries, key=lambda e: _aware(e.recorded_datetime))


def chart_points(goal: Goal, entries: List[WeightEntry]) -> List[Dict]:
    """Oldest first: {date, weight, target} per entry."""
    ordered = sorted(entries, key=lambda e: _aware(e.recorded_datetime))
    return [
        {
            "date": _chart_label(e.recorded_datetime),
            "recorded_at": e.recorded_at,
            "weight": e.current_weight,
            "target": goal.target_weight,
        }
        for e in ordered
    ]


def progress_percent(goal: Goal, entries: List[WeightEntry]) -> float:
    """Share of the planned weight change achieved by the latest entry, capped at 100."""
    latest = latest_entry(entries)
    if latest is None:
        return 0.0
    total = abs(goal.target_weight - goal.current_weight)
    if total == 0:
        return 100.0
    changed = abs(latest.current_weight - goal.current_weight)
    return min(100.0, changed / total * 100)


def weight_change(goal: Goal, entries: List[WeightEntry]) -> float:
    """Signed change from the starting weight to the latest entry (0 without entries)."""
    latest = latest_entry(entries)
    if latest is None:
        return 0.0
    return round(latest.current_weight - goal.current_weight, 1)


def time_remaining(goal: Goal, now: Optional[datetime] = None) -> Dict[str, int]:
    """Whole weeks and leftover days until the goal's end date."""
    now = _aware(now or datetime.now(timezone.utc))
    end = _aware(goal.created_datetime) + timedelta(weeks=goal.duration_weeks)
    diff = end - now
    if diff.total_seconds() <= 0:
        return {"weeks": 0, "days": 0}
    days_remaining = math.ceil(diff.total_seconds() / 86400)
    return {"weeks": days_remaining // 7, "days": days_remaining % 7}


def summarize(goal: Goal, entries: List[WeightEntry], now: Optional[datetime] = None) -> Dict:
    latest = latest_entry(entries)
    return {
        "goal_id": goal.id,
        "entries": [e.to_dict() for e in sorted(entries, key=lambda e: _aware(e.recorded_datetime), reverse=True)],
        "chart": chart_points(goal, entries),
        "progress_percent": round(progress_percent(goal, entries), 1),
        "current_weight": latest.current_weight if latest else goal.current_weight,
        "weight_change": weight_change(goal, entries),
        "time_remaining": time_remaining(goal, now),
    }
