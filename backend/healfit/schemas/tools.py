"""Calculator request/response schemas."""
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator

from healfit.models.profile import ActivityLevel, Gender
from healfit.services.calculators import BmrFormula, DietType


class BmrRequest(BaseModel):
    """Inputs for BMR/TDEE estimation."""
    gender: Gender
    weight_kg: float = Field(..., gt=0, le=500)
    height_cm: float = Field(..., gt=0, le=300)
    age: int = Field(..., ge=1, le=120)
    activity_level: Optional[ActivityLevel] = None
    activity_multiplier: Optional[float] = Field(None, ge=1.0, le=2.5)
    body_fat: Optional[float] = Field(None, ge=0, lt=100)

    @model_validator(mode="after")
    def check_inputs(self) -> "BmrRequest":
        if self.activity_level is None and self.activity_multiplier is None:
            raise ValueError("activity_level or activity_multiplier is required")
        # Mifflin-St Jeor has no neutral constant
        if self.body_fat is None and self.gender == Gender.OTHER:
            raise ValueError("gender must be male or female unless body_fat is given")
        return self


class BmrResponse(BaseModel):
    """Estimated energy expenditure."""
    bmr: int
    tdee: int
    formula: BmrFormula


class BodyFatRequest(BaseModel):
    """Inputs for the US Navy body fat formula."""
    gender: Gender
    waist: float = Field(..., gt=0)
    neck: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    hip: Optional[float] = Field(None, gt=0)
    unit: Literal["cm", "in"] = "cm"

    @model_validator(mode="after")
    def check_inputs(self) -> "BodyFatRequest":
        if self.gender == Gender.OTHER:
            raise ValueError("gender must be male or female")
        if self.gender == Gender.FEMALE and self.hip is None:
            raise ValueError("hip is required for females")
        return self


class BodyFatResponse(BaseModel):
    """Body fat estimate."""
    body_fat: float


class MacroRequest(BaseModel):
    """Inputs for a macro split."""
    tdee: int = Field(..., gt=0, le=10000)
    diet_type: DietType = DietType.BALANCED
    protein_pct: Optional[float] = Field(None, ge=0, le=100)
    carbs_pct: Optional[float] = Field(None, ge=0, le=100)
    fat_pct: Optional[float] = Field(None, ge=0, le=100)

    @model_validator(mode="after")
    def check_custom(self) -> "MacroRequest":
        if self.diet_type != DietType.CUSTOM:
            return self
        if self.protein_pct is None or self.carbs_pct is None or self.fat_pct is None:
            raise ValueError("custom diet_type needs protein_pct, carbs_pct and fat_pct")
        if abs(self.protein_pct + self.carbs_pct + self.fat_pct - 100) > 0.01:
            raise ValueError("Macro percentages must add up to 100")
        return self


class MacroResponse(BaseModel):
    """Daily macro targets."""
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    protein_pct: float
    carbs_pct: float
    fat_pct: float
