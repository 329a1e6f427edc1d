from diet.domain.Goal import GoalParameters
from diet.utilities.constants import PROMPT_TEMPLATE, DIET_PLAN_JSON_FORMAT


def _humanize(value) -> str:
    """'non_vegetarian' -> 'non vegetarian'. Only the first underscore is replaced."""
    text = getattr(value, "value", value)
    return str(text).replace("_", " ", 1)


def _fmt_weight(kg: float) -> str:
    return f"{kg:g}"


def build_prompt(params: GoalParameters, target_calories: int) -> str:
    """Build the generation prompt, ending with the JSON structure the parser expects."""
    prompt = PROMPT_TEMPLATE.format(
        age=params.age_years,
        goal=_humanize(params.goal_type),
        current=_fmt_weight(params.current_weight_kg),
        target=_fmt_weight(params.target_weight_kg),
        weeks=params.duration_weeks,
        diet=_humanize(params.diet_preference),
        calories=target_calories,
    )
    return prompt + DIET_PLAN_JSON_FORMAT
