"""Pydantic models for API request bodies."""

from datetime import date

from pydantic import BaseModel, Field

from diet_tracker.domain.profiles import ActivityLevel, Gender
from diet_tracker.services.calculators import CalculationMethod


class LoginRequest(BaseModel):
    """Start a session for an already authenticated user."""

    username: str = Field(min_length=1)


class ActiveDateRequest(BaseModel):
    """Select the active date."""

    day: date


class CalculationMethodRequest(BaseModel):
    """Select the calorie calculation method."""

    method: CalculationMethod


class BasicFoodRequest(BaseModel):
    """New basic food."""

    id: str = Field(min_length=1)
    name: str | None = None
    keywords: list[str] = Field(default_factory=list)
    calories_per_serving: float = Field(allow_inf_nan=False)


class ComponentRequest(BaseModel):
    """Component reference within a composite food."""

    food_id: str
    servings: float = Field(allow_inf_nan=False)


class CompositeFoodRequest(BaseModel):
    """New composite food."""

    id: str = Field(min_length=1)
    name: str | None = None
    keywords: list[str] = Field(default_factory=list)
    components: list[ComponentRequest]


class EntryRequest(BaseModel):
    """New log entry on the active date."""

    food_id: str
    servings: float = Field(allow_inf_nan=False)


class ProfileUpdateRequest(BaseModel):
    """Profile fields to change; omitted fields carry over."""

    gender: Gender | None = None
    height_cm: float | None = Field(default=None, allow_inf_nan=False)
    age: int | None = None
    weight_kg: float | None = Field(default=None, allow_inf_nan=False)
    activity_level: ActivityLevel | None = None
