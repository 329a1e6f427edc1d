import logging
from typing import Optional

from diet.domain.DietPlan import DietPlan
from diet.domain.Goal import GoalParameters
from diet.infra.gemini_provider import GeminiProvider
from diet.logic.calories.model import target_for
from diet.logic.planning.prompt_builder import build_prompt
from diet.logic.planning.response_parser import parse_diet_plan
from diet.utilities.config import ProviderConfig
from diet.utilities.errors import ConfigurationError

logger = logging.getLogger(__name__)


class PlanGenerationService:
    """Builds the prompt, makes one provider call and parses the reply.

    No caching and no retries: each call to generate() is one provider request.
    """

    def __init__(self, config: ProviderConfig, provider: Optional[GeminiProvider] = None):
        self.config = config
        self.provider = provider or GeminiProvider(config)

    async def generate(self, params: GoalParameters) -> DietPlan:
        if not self.config.is_configured:
            raise ConfigurationError("GEMINI_API_KEY not found in environment variables")

        target_calories = target_for(params)
        if target_calories <= 0:
            logger.warning("Computed target %s kcal is not positive; meal shares will be floored at 0", target_calories)
        logger.info("Generating diet plan: %s %s -> %s kg over %s weeks, target %s kcal",
                    params.goal_type.value, params.current_weight_kg, params.target_weight_kg,
                    params.duration_weeks, target_calories)

        prompt = build_prompt(params, target_calories)
        generated_text = await self.provider.generate_text(prompt)

        plan = parse_diet_plan(generated_text, target_calories)
        if plan.is_fallback:
            logger.warning("Diet plan for target %s kcal built from fallback menu", target_calories)
        return plan
