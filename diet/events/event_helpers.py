"""Event helper utilities.

Quick import:
    from diet.events.event_helpers import (
        publish_goal_created, publish_goal_deleted, publish_plan_created, publish_weight_recorded
    )
"""
from __future__ import annotations
from .Event_Bus import (
    create_event,
    GOAL_CREATED, GOAL_DELETED, PLAN_CREATED, WEIGHT_RECORDED,
)

__all__ = [
    'publish_goal_created', 'publish_goal_deleted', 'publish_plan_created', 'publish_weight_recorded',
]


def publish_goal_created(goal):
    create_event(GOAL_CREATED, {
        'user_id': goal.user_id,
        'goal_id': goal.id,
        'goal_type': goal.goal_type.value,
    })


def publish_goal_deleted(user_id: str, goal_id: str):
    create_event(GOAL_DELETED, {'user_id': user_id, 'goal_id': goal_id})


def publish_plan_created(record):
    """Publish a plan.created event; 'source' tells generated plans from fallback ones."""
    create_event(PLAN_CREATED, {
        'user_id': record.user_id,
        'goal_id': record.goal_id,
        'plan_id': record.id,
        'daily_calories': record.plan.daily_calories,
        'source': record.plan.source.value,
    })


def publish_weight_recorded(entry, progress: float):
    create_event(WEIGHT_RECORDED, {
        'user_id': entry.user_id,
        'goal_id': entry.goal_id,
        'weight': entry.current_weight,
        'progress_percent': round(progress, 1),
    })
