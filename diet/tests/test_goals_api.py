import json
import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from diet.api.api_run import app
from diet.api.deps import get_data_dir, get_generation_service
from diet.api.routes.goals import save_goal_with_plan
from diet.events import web_observers
from diet.infra.DietPlan_Repository import DietPlanRepository
from diet.infra.Goal_Repository import GoalRepository
from diet.infra.Store import JsonStore
from diet.logic.planning.generation_service import PlanGenerationService
from diet.logic.planning.response_parser import build_fallback_plan
from diet.utilities.config import ProviderConfig
from diet.utilities.errors import ProviderError
from diet.utilities.validators import GoalInput

PLAN = {
    "dailyCalories": 1100,
    "breakfast": {"foods": ["Vegetable upma", "Buttermilk"], "calories": 280, "description": "Fibre-rich"},
    "lunch": {"foods": ["Rajma", "Jeera rice"], "calories": 390, "description": "Plant protein"},
    "dinner": {"foods": ["Moong dal khichdi"], "calories": 320, "description": "Easy to digest"},
    "snacks": [{"name": "Roasted chana", "foods": ["Chana (30g)"], "calories": 110}],
}

GOAL_BODY = {
    "goalType": "weight_loss",
    "currentWeight": 80,
    "targetWeight": 70,
    "age": 30,
    "dietPreference": "vegetarian",
    "goalDurationWeeks": 10,
}


class FakeProvider:
    """Stands in for the Gemini client; records prompts."""

    def __init__(self, text=None, error=None):
        self.text = text if text is not None else "Here you go:\n" + json.dumps(PLAN)
        self.error = error
        self.prompts = []

    async def generate_text(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


class ApiTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.provider = FakeProvider()
        self.config = ProviderConfig(api_key="test-key")
        app.dependency_overrides[get_data_dir] = lambda: Path(self.tmp.name)
        app.dependency_overrides[get_generation_service] = \
            lambda: PlanGenerationService(self.config, provider=self.provider)
        self.client = TestClient(app)
        self.headers = self.register("ana@example.com")

    def tearDown(self):
        app.dependency_overrides.clear()
        self.tmp.cleanup()

    def register(self, email):
        resp = self.client.post("/api/auth/register", json={"email": email})
        self.assertEqual(resp.status_code, 201, resp.text)
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    def create_goal(self, headers=None, body=None):
        return self.client.post("/api/goals", json=body or GOAL_BODY, headers=headers or self.headers)


class TestAuthApi(ApiTestCase):

    def test_register_provisions_profile(self):
        resp = self.client.post("/api/auth/register", json={"email": "Bo@Example.com", "full_name": " Bo "})
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["profile"]["email"], "bo@example.com")
        self.assertEqual(data["profile"]["full_name"], "Bo")
        self.assertNotIn("token", data["profile"])

        me = self.client.get("/api/profile", headers={"Authorization": f"Bearer {data['token']}"})
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json()["user_id"], data["user_id"])

    def test_duplicate_registration(self):
        resp = self.client.post("/api/auth/register", json={"email": "ana@example.com"})
        self.assertEqual(resp.status_code, 409)

    def test_missing_or_bad_token(self):
        self.assertEqual(self.client.get("/api/goals").status_code, 401)
        bad = self.client.get("/api/goals", headers={"Authorization": "Bearer nope"})
        self.assertEqual(bad.status_code, 401)


class TestGoalsApi(ApiTestCase):

    def test_create_goal_with_generated_plan(self):
        resp = self.create_goal()
        self.assertEqual(resp.status_code, 201, resp.text)
        data = resp.json()
        self.assertEqual(data["goal"]["goal_type"], "weight_loss")
        self.assertEqual(data["goal"]["status"], "active")
        self.assertEqual(data["diet_plan"]["dailyCalories"], 1100)
        self.assertEqual(data["diet_plan"]["source"], "generated")
        self.assertEqual(data["diet_plan"]["lunch"]["foods"], ["Rajma", "Jeera rice"])
        self.assertEqual(len(self.provider.prompts), 1)
        self.assertIn("follow a vegetarian diet", self.provider.prompts[0])

        goal_id = data["goal"]["id"]
        plan = self.client.get(f"/api/goals/{goal_id}/plan", headers=self.headers)
        self.assertEqual(plan.status_code, 200)
        self.assertEqual(plan.json()["snacks"][0]["name"], "Roasted chana")

        listing = self.client.get("/api/goals", headers=self.headers).json()
        self.assertEqual(listing["count"], 1)
        self.assertEqual(listing["goals"][0]["id"], goal_id)

    def test_create_goal_with_fallback_plan(self):
        self.provider.text = "I'm not able to produce JSON today."
        data = self.create_goal().json()
        self.assertEqual(data["diet_plan"]["source"], "fallback")
        self.assertEqual(data["diet_plan"]["dailyCalories"], 1100)
        self.assertEqual(data["diet_plan"]["breakfast"]["calories"], 275)

    def test_fast_weight_loss_goal_is_created(self):
        self.provider.text = "no json"
        resp = self.create_goal(body=dict(GOAL_BODY, goalDurationWeeks=3))
        self.assertEqual(resp.status_code, 201, resp.text)
        plan = resp.json()["diet_plan"]
        self.assertEqual(plan["source"], "fallback")
        self.assertEqual(plan["dailyCalories"], -67)
        self.assertEqual(plan["snacks"][0]["calories"], 0)

    def test_save_goal_with_plan_writes_both_rows(self):
        store = JsonStore(Path(self.tmp.name))
        params = GoalInput.model_validate(GOAL_BODY).to_parameters()
        goal, record = save_goal_with_plan(store, "user-x", params, build_fallback_plan(1100))
        self.assertEqual(record.goal_id, goal.id)
        self.assertEqual(GoalRepository(store).get("user-x", goal.id).goal_type.value, "weight_loss")
        self.assertEqual(DietPlanRepository(store).latest_for_goal("user-x", goal.id).id, record.id)

    def test_provider_failure_leaves_no_goal(self):
        self.provider.error = ProviderError("Gemini API error: 500 Internal Server Error", status_code=500)
        resp = self.create_goal()
        self.assertEqual(resp.status_code, 502)
        self.assertEqual(resp.json(), {
            "error": "Gemini API error: 500 Internal Server Error",
            "details": "Failed to generate diet plan",
        })
        self.assertEqual(self.client.get("/api/goals", headers=self.headers).json()["count"], 0)

    def test_missing_credential(self):
        self.config = ProviderConfig(api_key="")
        resp = self.create_goal()
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json()["details"], "Failed to generate diet plan")
        self.assertEqual(self.provider.prompts, [])

    def test_validation(self):
        for field, value in (("goalDurationWeeks", 0), ("currentWeight", -3), ("goalType", "maintain"),
                             ("dietPreference", "keto"), ("age", 0)):
            body = dict(GOAL_BODY, **{field: value})
            self.assertEqual(self.create_goal(body=body).status_code, 422, field)
        self.assertEqual(self.provider.prompts, [])

    def test_goals_isolated_between_users(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        other = self.register("bo@example.com")
        self.assertEqual(self.client.get(f"/api/goals/{goal_id}", headers=other).status_code, 404)
        self.assertEqual(self.client.get(f"/api/goals/{goal_id}/plan", headers=other).status_code, 404)
        self.assertEqual(self.client.delete(f"/api/goals/{goal_id}", headers=other).status_code, 404)
        self.assertEqual(self.client.get("/api/goals", headers=other).json()["count"], 0)

    def test_update_status(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        resp = self.client.patch(f"/api/goals/{goal_id}", json={"status": "paused"}, headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "paused")
        bad = self.client.patch(f"/api/goals/{goal_id}", json={"status": "abandoned"}, headers=self.headers)
        self.assertEqual(bad.status_code, 422)

    def test_delete_cascades(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        self.client.post(f"/api/goals/{goal_id}/history", json={"weight": 79.2}, headers=self.headers)

        resp = self.client.delete(f"/api/goals/{goal_id}", headers=self.headers)
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.get(f"/api/goals/{goal_id}/plan", headers=self.headers).status_code, 404)
        self.assertEqual(self.client.get(f"/api/goals/{goal_id}/history", headers=self.headers).status_code, 404)
        stored = json.loads((Path(self.tmp.name) / "user_history.json").read_text(encoding="utf-8"))
        self.assertEqual(stored, [])

    def test_export_pdf(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        resp = self.client.get(f"/api/goals/{goal_id}/plan/pdf", headers=self.headers)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))


class TestHistoryApi(ApiTestCase):

    def test_record_and_summarize(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        first = self.client.post(f"/api/goals/{goal_id}/history", json={"weight": 78}, headers=self.headers)
        self.assertEqual(first.status_code, 201)
        self.assertEqual(first.json()["progress_percent"], 20.0)
        self.client.post(f"/api/goals/{goal_id}/history", json={"weight": 75}, headers=self.headers)

        data = self.client.get(f"/api/goals/{goal_id}/history", headers=self.headers).json()
        self.assertEqual(data["progress_percent"], 50.0)
        self.assertEqual(data["current_weight"], 75)
        self.assertEqual(len(data["entries"]), 2)
        self.assertEqual([p["weight"] for p in data["chart"]], [78, 75])
        self.assertIn("weeks", data["time_remaining"])

    def test_unknown_goal_and_bad_weight(self):
        resp = self.client.post("/api/goals/missing/history", json={"weight": 70}, headers=self.headers)
        self.assertEqual(resp.status_code, 404)
        goal_id = self.create_goal().json()["goal"]["id"]
        resp = self.client.post(f"/api/goals/{goal_id}/history", json={"weight": 0}, headers=self.headers)
        self.assertEqual(resp.status_code, 422)


class TestEventsApi(ApiTestCase):

    def setUp(self):
        super().setUp()
        web_observers.start()
        web_observers.clear()

    def test_events_scoped_to_user(self):
        goal_id = self.create_goal().json()["goal"]["id"]
        self.client.post(f"/api/goals/{goal_id}/history", json={"weight": 79}, headers=self.headers)
        other = self.register("bo@example.com")
        self.create_goal(headers=other)

        data = self.client.get("/api/events", headers=self.headers).json()
        types = [e["type"] for e in data["events"]]
        self.assertEqual(types, ["goal.created", "plan.created", "weight.recorded"])
        self.assertEqual(data["events"][1]["source"], "generated")
        self.assertTrue(all(e["goal_id"] == goal_id for e in data["events"]))

        newer = self.client.get("/api/events", params={"since": data["events"][-1]["id"]}, headers=self.headers)
        self.assertEqual(newer.json()["events"], [])


if __name__ == '__main__':
    unittest.main()
