"""Fitness calculator routes. Open to everyone."""
from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from healfit.schemas.tools import (
    BmrRequest,
    BmrResponse,
    BodyFatRequest,
    BodyFatResponse,
    MacroRequest,
    MacroResponse,
)
from healfit.services.calculators import (
    activity_multiplier_for,
    calculate_body_fat_navy,
    calculate_macro_split,
    estimate_energy,
)

router = APIRouter(prefix="/api/tools", tags=["Tools"])


@router.post("/bmr", response_model=BmrResponse)
async def calculate_bmr(request: BmrRequest):
    """
    Estimate BMR and TDEE.

    Uses Katch-McArdle when body fat is given, Mifflin-St Jeor otherwise.
    """
    multiplier = request.activity_multiplier or activity_multiplier_for(request.activity_level)

    estimate = estimate_energy(
        gender=request.gender,
        weight_kg=request.weight_kg,
        height_cm=request.height_cm,
        age=request.age,
        activity_multiplier=multiplier,
        body_fat_percent=request.body_fat,
    )
    return BmrResponse(bmr=estimate.bmr, tdee=estimate.tdee, formula=estimate.formula)


@router.post("/body-fat", response_model=BodyFatResponse)
async def calculate_body_fat(request: BodyFatRequest):
    """Estimate body fat with the US Navy circumference method."""
    try:
        body_fat = calculate_body_fat_navy(
            gender=request.gender,
            waist=request.waist,
            neck=request.neck,
            height=request.height,
            hip=request.hip,
            unit=request.unit,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        )

    return BodyFatResponse(body_fat=body_fat)


@router.post("/macros", response_model=MacroResponse)
async def calculate_macros(request: MacroRequest):
    """Split a calorie target into macro grams."""
    split = calculate_macro_split(
        tdee=request.tdee,
        diet_type=request.diet_type,
        protein_pct=request.protein_pct,
        carbs_pct=request.carbs_pct,
        fat_pct=request.fat_pct,
    )
    return MacroResponse(**asdict(split))
