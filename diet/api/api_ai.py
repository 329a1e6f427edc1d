import logging

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from diet.logic.planning.generation_service import PlanGenerationService
from diet.api.deps import get_generation_service
from diet.utilities.constants import GENERATION_FAILED_DETAILS
from diet.utilities.errors import DietPlannerError, ProviderError
from diet.utilities.validators import GoalInput

logger = logging.getLogger(__name__)


def generation_error_response(exc: DietPlannerError) -> JSONResponse:
    """Error envelope {error, details}: 500 for missing configuration, 502 for provider failures."""
    status = 502 if isinstance(exc, ProviderError) else 500
    return JSONResponse(status_code=status, content={"error": str(exc), "details": GENERATION_FAILED_DETAILS})


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/generate-diet-plan")
async def generate_diet_plan(
    payload: GoalInput = Body(...),
    service: PlanGenerationService = Depends(get_generation_service),
):
    """Stateless generation: goal parameters in, diet plan JSON out."""
    try:
        plan = await service.generate(payload.to_parameters())
    except DietPlannerError as e:
        logger.error("Error in generate-diet-plan: %s", e)
        return generation_error_response(e)
    return plan.to_payload()
