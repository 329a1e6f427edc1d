"""Extract a DietPlan from free-text model output.

parse_diet_plan never raises: when no candidate JSON object validates, the
deterministic fallback plan is returned and tagged as such.
"""
import re
import json
import logging
from json import JSONDecodeError
from typing import List, Optional

from pydantic import ValidationError

from diet.domain.DietPlan import DietPlan, MealEntry, PlanSource, SnackEntry
from diet.logic.calories.model import round_half_up
from diet.utilities.constants import FALLBACK_MEALS, FALLBACK_SHARES, FALLBACK_SNACK

logger = logging.getLogger(__name__)

# Greedy: first '{' to last '}'
_GREEDY_OBJECT = re.compile(r"\{[\s\S]*\}")


def _extract_greedy_span(text: str) -> Optional[str]:
    match = _GREEDY_OBJECT.search(text)
    return match.group(0) if match else None


def _extract_balanced_object(text: str) -> Optional[str]:
    """Return the first complete {...} object, skipping braces inside strings."""
    start = None
    depth = 0
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if start is None:
            if ch == "{":
                start = i
                depth = 1
            continue
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def candidate_spans(text: str) -> List[str]:
    """Greedy span first, then the first balanced object if it differs."""
    spans = []
    greedy = _extract_greedy_span(text)
    if greedy:
        spans.append(greedy)
    balanced = _extract_balanced_object(text)
    if balanced and balanced not in spans:
        spans.append(balanced)
    return spans


def _share(target_calories: int, slot: str) -> int:
    # Very fast weight-loss goals produce targets at or below zero
    return max(0, round_half_up(target_calories * FALLBACK_SHARES[slot]))


def build_fallback_plan(target_calories: int) -> DietPlan:
    """Fixed menu split 25/35/30/10 percent across breakfast, lunch, dinner and one snack.

    Shares are floored at 0 kcal; daily_calories keeps the target as computed.
    """
    meals = {
        slot: MealEntry(
            foods=list(FALLBACK_MEALS[slot]["foods"]),
            calories=_share(target_calories, slot),
            description=FALLBACK_MEALS[slot]["description"],
        )
        for slot in ("breakfast", "lunch", "dinner")
    }
    snack = SnackEntry(
        name=FALLBACK_SNACK["name"],
        foods=list(FALLBACK_SNACK["foods"]),
        calories=_share(target_calories, "snack"),
    )
    return DietPlan(
        daily_calories=target_calories,
        breakfast=meals["breakfast"],
        lunch=meals["lunch"],
        dinner=meals["dinner"],
        snacks=[snack],
        source=PlanSource.FALLBACK,
    )


def parse_diet_plan(raw_text: str, fallback_target: int) -> DietPlan:
    """Return the plan described in raw_text, or the fallback plan for fallback_target."""
    text = raw_text if isinstance(raw_text, str) else ""
    spans = candidate_spans(text)
    if not spans:
        logger.warning("No JSON object found in model output (%d chars); using fallback plan", len(text))
        return build_fallback_plan(fallback_target)

    for span in spans:
        try:
            data = json.loads(span)
        except JSONDecodeError as e:
            logger.warning("Model output is not valid JSON: %s", e)
            continue
        if not isinstance(data, dict):
            continue
        data.pop("source", None)
        try:
            plan = DietPlan.model_validate(data)
        except ValidationError as e:
            logger.warning("Model output does not match the diet plan shape: %s", e.errors()[:3])
            continue
        return plan.model_copy(update={"source": PlanSource.GENERATED})

    logger.warning("Could not parse diet plan from model output; using fallback plan")
    return build_fallback_plan(fallback_target)
