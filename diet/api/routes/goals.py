import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from fastapi.concurrency import run_in_threadpool

from diet.api.api_ai import generation_error_response
from diet.api.deps import get_current_user, get_generation_service, get_store
from diet.domain.DietPlan import DietPlan
from diet.domain.Goal import Goal, GoalParameters
from diet.domain.Profile import Profile
from diet.events.event_helpers import publish_goal_created, publish_goal_deleted, publish_plan_created
from diet.infra.DietPlan_Repository import DietPlanRepository
from diet.infra.Goal_Repository import GoalRepository
from diet.infra.Store import JsonStore
from diet.infra.pdf_utils import generate_pdf_for_plan
from diet.logic.planning.generation_service import PlanGenerationService
from diet.utilities.errors import DietPlannerError
from diet.utilities.validators import GoalInput, GoalStatusInput

router = APIRouter(prefix="/api/goals", tags=["goals"])
logger = logging.getLogger(__name__)


def _plan_response(record):
    return {"id": record.id, "goal_id": record.goal_id, "created_at": record.created_at,
            **record.plan.to_payload()}


def save_goal_with_plan(store: JsonStore, user_id: str, params: GoalParameters, plan: DietPlan):
    """Write the goal and its first plan under one store lock."""
    with store.lock:
        goal = GoalRepository(store).create(Goal(user_id=user_id, parameters=params))
        record = DietPlanRepository(store).create(user_id, goal.id, plan)
    return goal, record


def _get_goal_or_404(store: JsonStore, user: Profile, goal_id: str) -> Goal:
    goal = GoalRepository(store).get(user.user_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@router.post("", status_code=201)
async def create_goal(
    payload: GoalInput = Body(...),
    user: Profile = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
    service: PlanGenerationService = Depends(get_generation_service),
):
    """Generate the diet plan, then store goal and plan together.

    Nothing is written when generation fails.
    """
    params = payload.to_parameters()
    try:
        plan = await service.generate(params)
    except DietPlannerError as e:
        logger.error("Goal creation for user %s failed: %s", user.user_id, e)
        return generation_error_response(e)

    goal, record = await run_in_threadpool(save_goal_with_plan, store, user.user_id, params, plan)

    publish_goal_created(goal)
    publish_plan_created(record)
    logger.info("Created goal %s with %s plan", goal.id, plan.source.value)
    return {"goal": goal.to_dict(), "diet_plan": _plan_response(record)}


@router.get("")
def list_goals(user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    goals = GoalRepository(store).list_for_user(user.user_id)
    return {"count": len(goals), "goals": [g.to_dict() for g in goals]}


@router.get("/{goal_id}")
def get_goal(goal_id: str, user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    return _get_goal_or_404(store, user, goal_id).to_dict()


@router.patch("/{goal_id}")
def update_goal_status(
    goal_id: str,
    payload: GoalStatusInput = Body(...),
    user: Profile = Depends(get_current_user),
    store: JsonStore = Depends(get_store),
):
    goal = GoalRepository(store).update_status(user.user_id, goal_id, payload.status)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal.to_dict()


@router.delete("/{goal_id}", status_code=204)
def delete_goal(goal_id: str, user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    if not GoalRepository(store).delete(user.user_id, goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    publish_goal_deleted(user.user_id, goal_id)
    return Response(status_code=204)


@router.get("/{goal_id}/plan")
def get_goal_plan(goal_id: str, user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    _get_goal_or_404(store, user, goal_id)
    record = DietPlanRepository(store).latest_for_goal(user.user_id, goal_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Diet plan not found")
    return _plan_response(record)


@router.get("/{goal_id}/plan/pdf")
def export_plan_pdf(goal_id: str, user: Profile = Depends(get_current_user), store: JsonStore = Depends(get_store)):
    goal = _get_goal_or_404(store, user, goal_id)
    record = DietPlanRepository(store).latest_for_goal(user.user_id, goal_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Diet plan not found")
    pdf_bytes = generate_pdf_for_plan(goal, record.plan)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename=diet_plan_{goal_id}.pdf"
        },
    )
