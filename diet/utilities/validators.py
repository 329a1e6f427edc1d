"""
Input validation schemas using Pydantic for request bodies.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from diet.domain.Goal import DietPreference, GoalParameters, GoalStatus, GoalType


class GoalInput(BaseModel):
    """Schema for goal submission. Accepts the camelCase body sent by the web client."""
    model_config = ConfigDict(populate_by_name=True)

    goal_type: GoalType = Field(..., alias="goalType")
    current_weight: float = Field(..., alias="currentWeight", gt=0, le=500)
    target_weight: float = Field(..., alias="targetWeight", gt=0, le=500)
    age: int = Field(..., gt=0, le=120)
    diet_preference: DietPreference = Field(..., alias="dietPreference")
    goal_duration_weeks: int = Field(..., alias="goalDurationWeeks", ge=1, le=520)

    def to_parameters(self) -> GoalParameters:
        return GoalParameters(
            goal_type=self.goal_type,
            current_weight_kg=self.current_weight,
            target_weight_kg=self.target_weight,
            age_years=self.age,
            diet_preference=self.diet_preference,
            duration_weeks=self.goal_duration_weeks,
        )


class GoalStatusInput(BaseModel):
    """Schema for goal status updates."""
    status: GoalStatus


class WeightEntryInput(BaseModel):
    """Schema for a new weight measurement."""
    weight: float = Field(..., gt=0, le=500)


class RegisterInput(BaseModel):
    """Schema for account registration."""
    email: str = Field(..., min_length=3, max_length=254)
    full_name: Optional[str] = Field(None, max_length=200)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        """Basic shape check; delivery is not verified."""
        v = v.strip().lower()
        if '@' not in v or v.startswith('@') or v.endswith('@'):
            raise ValueError('Invalid email address')
        return v

    @field_validator('full_name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace; blank becomes None."""
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v
