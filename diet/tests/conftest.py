import json

import httpx
import pytest

from diet.domain.Goal import GoalParameters
from diet.infra.Store import JsonStore

SAMPLE_PLAN = {
    "dailyCalories": 1100,
    "breakfast": {"foods": ["Poha (1 cup)", "Green tea"], "calories": 280, "description": "Light start"},
    "lunch": {"foods": ["Grilled chicken (120g)", "Brown rice (1 cup)"], "calories": 390, "description": "Lean protein"},
    "dinner": {"foods": ["Fish curry", "Steamed vegetables"], "calories": 320, "description": "Early dinner"},
    "snacks": [{"name": "Sprouts chaat", "foods": ["Moong sprouts", "Lemon"], "calories": 110}],
}


def gemini_envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def params():
    return GoalParameters(
        goal_type="weight_loss",
        current_weight_kg=80,
        target_weight_kg=70,
        age_years=30,
        diet_preference="non_vegetarian",
        duration_weeks=10,
    )


@pytest.fixture
def store(tmp_path):
    return JsonStore(tmp_path)


@pytest.fixture
def sample_plan_text():
    return "```json\n" + json.dumps(SAMPLE_PLAN) + "\n```"


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def mock_gemini(recorded_requests, sample_plan_text):
    """Build an AsyncClient whose transport answers like the Gemini API."""

    def factory(status_code=200, body=None, exc=None):
        def handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if exc is not None:
                raise exc
            payload = body if body is not None else gemini_envelope(sample_plan_text)
            return httpx.Response(status_code, json=payload)

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory
