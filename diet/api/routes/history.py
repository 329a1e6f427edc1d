from fastapi import APIRouter, Body, Depends, HTTPException

from diet.api.deps import get_current_user, get_store
from diet.domain.Profile import Profile
from diet.domain.WeightEntry import WeightEntry
from diet.events.event_helpers import publish_weight_recorded
from diet.infra.Goal_Repository import GoalRepository
from diet.infra.History_Repository import HistoryRepository
from diet.infra.Store import JsonStore
from diet.logic.progress.analysis import progress_percent, summarize
from diet.utilities.validators import WeightEntryInput

router = APIRouter(prefix="/api/goals", tags=["history"])


@router.post("/{goal_id}/history", status_code=201)
def add_weight_entry(
    goal_id: str,
    payload: WeightEntryInput = Body(...),
    user: Profile = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
):
    goal = GoalRepository(store).get(user.user_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")

    repo = HistoryRepository(store)
    entry = repo.add(WeightEntry(user_id=user.user_id, goal_id=goal_id, current_weight=payload.weight))
    progress = progress_percent(goal, repo.list_for_goal(user.user_id, goal_id))
    publish_weight_recorded(entry, progress)
    return {"entry": entry.to_dict(), "progress_percent": round(progress, 1)}


@router.get("/{goal_id}/history")
def get_weight_history(goal_id: str, user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    """Entries newest first, chart points oldest first, progress and time remaining."""
    goal = GoalRepository(store).get(user.user_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    entries = HistoryRepository(store).list_for_goal(user.user_id, goal_id)
    return summarize(goal, entries)
