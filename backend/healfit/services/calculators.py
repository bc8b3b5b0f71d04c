"""Energy expenditure, body fat and macro split calculators."""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from healfit.models.profile import ActivityLevel, Gender


# Activity level multipliers for TDEE calculation
ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,      # Little or no exercise
    ActivityLevel.LIGHT: 1.375,         # Light exercise 1-3 days/week
    ActivityLevel.MODERATE: 1.55,       # Moderate exercise 3-5 days/week
    ActivityLevel.ACTIVE: 1.725,        # Hard exercise 6-7 days/week
    ActivityLevel.VERY_ACTIVE: 1.9,     # Very hard exercise, physical job
}

CM_PER_INCH = 2.54

# Energy per gram of macronutrient
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


class BmrFormula(str, Enum):
    """BMR equation used."""
    MIFFLIN_ST_JEOR = "mifflin_st_jeor"
    KATCH_MCARDLE = "katch_mcardle"


class DietType(str, Enum):
    """Macro split presets."""
    BALANCED = "balanced"
    LOW_CARB = "lowcarb"
    HIGH_PROTEIN = "highprotein"
    CUSTOM = "custom"


# (protein %, carbs %, fat %)
DIET_PRESETS = {
    DietType.BALANCED: (30, 40, 30),
    DietType.LOW_CARB: (40, 20, 40),
    DietType.HIGH_PROTEIN: (40, 35, 25),
}


@dataclass
class EnergyEstimate:
    """BMR and TDEE for a person."""
    bmr: int
    tdee: int
    formula: BmrFormula


@dataclass
class MacroSplit:
    """Daily macro targets in grams."""
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    protein_pct: float
    carbs_pct: float
    fat_pct: float


def calculate_bmr_mifflin(
    gender: Gender,
    weight_kg: float,
    height_cm: float,
    age: int,
) -> float:
    """
    Basal Metabolic Rate using the Mifflin-St Jeor equation.

    - Male:   BMR = (10 × weight_kg) + (6.25 × height_cm) - (5 × age) + 5
    - Female: BMR = (10 × weight_kg) + (6.25 × height_cm) - (5 × age) - 161

    Args:
        gender: MALE or FEMALE
        weight_kg: Body weight in kilograms
        height_cm: Height in centimeters
        age: Age in years

    Returns:
        Unrounded BMR in calories per day

    Raises:
        ValueError: If gender is not MALE or FEMALE
    """
    bmr = (10 * weight_kg) + (6.25 * height_cm) - (5 * age)

    if gender == Gender.MALE:
        return bmr + 5
    if gender == Gender.FEMALE:
        return bmr - 161
    raise ValueError("Mifflin-St Jeor requires male or female")


def calculate_bmr_katch_mcardle(weight_kg: float, body_fat_percent: float) -> float:
    """
    Basal Metabolic Rate from lean body mass (Katch-McArdle).

    BMR = 370 + 21.6 × lean_mass_kg, lean_mass_kg = weight × (1 - body_fat / 100)

    Returns:
        Unrounded BMR in calories per day
    """
    lean_mass = weight_kg * (1 - body_fat_percent / 100)
    return 370 + 21.6 * lean_mass


def estimate_energy(
    gender: Gender,
    weight_kg: float,
    height_cm: float,
    age: int,
    activity_multiplier: float,
    body_fat_percent: Optional[float] = None,
) -> EnergyEstimate:
    """
    Estimate BMR and TDEE.

    Uses Katch-McArdle when body fat is known, Mifflin-St Jeor otherwise.
    TDEE is computed from the unrounded BMR.
    """
    if body_fat_percent is not None:
        bmr = calculate_bmr_katch_mcardle(weight_kg, body_fat_percent)
        formula = BmrFormula.KATCH_MCARDLE
    else:
        bmr = calculate_bmr_mifflin(gender, weight_kg, height_cm, age)
        formula = BmrFormula.MIFFLIN_ST_JEOR

    return EnergyEstimate(
        bmr=round(bmr),
        tdee=round(bmr * activity_multiplier),
        formula=formula,
    )


def activity_multiplier_for(activity_level: ActivityLevel) -> float:
    """TDEE multiplier for an activity level."""
    return ACTIVITY_MULTIPLIERS.get(activity_level, 1.55)


def calculate_body_fat_navy(
    gender: Gender,
    waist: float,
    neck: float,
    height: float,
    hip: Optional[float] = None,
    unit: str = "cm",
) -> float:
    """
    Body fat percentage using the US Navy circumference method.

    - Male:   495 / (1.0324 - 0.19077·log10(waist - neck) + 0.15456·log10(height)) - 450
    - Female: 495 / (1.29579 - 0.35004·log10(waist + hip - neck) + 0.22100·log10(height)) - 450

    Args:
        gender: MALE or FEMALE
        waist: Waist circumference
        neck: Neck circumference
        height: Height
        hip: Hip circumference (required for females)
        unit: "cm" or "in"

    Returns:
        Body fat percentage rounded to one decimal

    Raises:
        ValueError: On missing hip for females, unsupported gender,
            measurements that give a non-positive logarithm argument,
            or a result outside 0-100%
    """
    if unit == "in":
        waist *= CM_PER_INCH
        neck *= CM_PER_INCH
        height *= CM_PER_INCH
        if hip is not None:
            hip *= CM_PER_INCH
    elif unit != "cm":
        raise ValueError(f"Unsupported unit: {unit}")

    if gender == Gender.MALE:
        girth = waist - neck
        a, b, c = 1.0324, 0.19077, 0.15456
    elif gender == Gender.FEMALE:
        if hip is None:
            raise ValueError("Hip circumference is required for females")
        girth = waist + hip - neck
        a, b, c = 1.29579, 0.35004, 0.22100
    else:
        raise ValueError("US Navy formula requires male or female")

    if girth <= 0 or height <= 0:
        raise ValueError("Waist must be larger than neck")

    density_term = a - b * math.log10(girth) + c * math.log10(height)
    body_fat = round(495 / density_term - 450, 1)
    if not 0 <= body_fat < 100:
        raise ValueError(f"Measurements give an impossible body fat of {body_fat}%")
    return body_fat


def calculate_macro_split(
    tdee: int,
    diet_type: DietType,
    protein_pct: Optional[float] = None,
    carbs_pct: Optional[float] = None,
    fat_pct: Optional[float] = None,
) -> MacroSplit:
    """
    Split a calorie target into protein, carbs and fat grams.

    Args:
        tdee: Daily calorie target
        diet_type: Preset, or CUSTOM to use the given percentages
        protein_pct: Percent of calories from protein (custom only)
        carbs_pct: Percent of calories from carbs (custom only)
        fat_pct: Percent of calories from fat (custom only)

    Returns:
        MacroSplit in grams

    Raises:
        ValueError: If custom percentages are missing or don't sum to 100
    """
    if diet_type == DietType.CUSTOM:
        if protein_pct is None or carbs_pct is None or fat_pct is None:
            raise ValueError("Custom split needs protein, carbs and fat percentages")
        if abs(protein_pct + carbs_pct + fat_pct - 100) > 0.01:
            raise ValueError("Macro percentages must add up to 100")
        split = (protein_pct, carbs_pct, fat_pct)
    else:
        split = DIET_PRESETS[diet_type]

    p, c, f = split
    return MacroSplit(
        calories=tdee,
        protein_g=round(tdee * p / 100 / KCAL_PER_G_PROTEIN, 1),
        carbs_g=round(tdee * c / 100 / KCAL_PER_G_CARBS, 1),
        fat_g=round(tdee * f / 100 / KCAL_PER_G_FAT, 1),
        protein_pct=p,
        carbs_pct=c,
        fat_pct=f,
    )


def calculate_bmi(weight_kg: float, height_cm: float) -> Optional[float]:
    """Body mass index rounded to one decimal, or None without a height."""
    if not height_cm or height_cm <= 0:
        return None
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), 1)


def calculate_waist_to_hip(waist: float, hip: float) -> Optional[float]:
    """Waist-to-hip ratio rounded to two decimals."""
    if not hip or hip <= 0:
        return None
    return round(waist / hip, 2)
