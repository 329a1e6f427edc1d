"""Daily calorie target estimation."""
import math

from diet.domain.Goal import GoalParameters, GoalType
from diet.utilities.constants import BASE_BMR, BMR_AGE_ADJUSTMENT, BMR_AGE_THRESHOLD, KCAL_PER_KG


def round_half_up(value: float) -> int:
    """Round .5 upward (toward +inf), unlike the builtin round()."""
    return int(math.floor(value + 0.5))


def compute_target_calories(goal_type, current_weight_kg: float, target_weight_kg: float,
                            age_years: int, duration_weeks: int) -> int:
    """Return the daily calorie target for a goal.

    The weekly weight change is spread evenly over the goal duration and
    converted to calories at a fixed KCAL_PER_KG. The base rate is a coarse
    two-bucket approximation by age. Raises ZeroDivisionError when
    duration_weeks is 0.
    """
    weight_delta = abs(target_weight_kg - current_weight_kg)
    weekly_delta = weight_delta / duration_weeks
    weekly_adjustment = weekly_delta * KCAL_PER_KG
    daily_adjustment = weekly_adjustment / 7

    base_bmr = BASE_BMR + (-BMR_AGE_ADJUSTMENT if age_years > BMR_AGE_THRESHOLD else BMR_AGE_ADJUSTMENT)

    if GoalType(goal_type) == GoalType.WEIGHT_LOSS:
        return round_half_up(base_bmr - daily_adjustment)
    return round_half_up(base_bmr + daily_adjustment)


def target_for(params: GoalParameters) -> int:
    return compute_target_calories(
        params.goal_type,
        params.current_weight_kg,
        params.target_weight_kg,
        params.age_years,
        params.duration_weeks,
    )
