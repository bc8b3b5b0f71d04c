"""Profile model and profile enums."""
import enum
import uuid
from datetime import date
from typing import Optional

from sqlalchemy import Enum, String, Float, Integer, Date, Text
from sqlalchemy.orm import Mapped, mapped_column

from healfit.models.base import Base


class Role(str, enum.Enum):
    """Account role."""
    USER = "user"
    TRAINER = "trainer"
    DIETITIAN = "dietitian"
    PHYSIO = "physio"
    ADMIN = "admin"


# Roles that coach members and may see their data
EXPERT_ROLES = frozenset({Role.TRAINER, Role.DIETITIAN, Role.PHYSIO})


class Gender(str, enum.Enum):
    """Gender as entered during onboarding."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(str, enum.Enum):
    """Activity level multipliers for TDEE."""
    SEDENTARY = "sedentary"  # Little or no exercise
    LIGHT = "light"  # Light exercise 1-3 days/week
    MODERATE = "moderate"  # Moderate exercise 3-5 days/week
    ACTIVE = "active"  # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"  # Very hard exercise, physical job


class FitnessGoal(str, enum.Enum):
    """Primary fitness goal."""
    LOSE_WEIGHT = "lose_weight"
    GAIN_MUSCLE = "gain_muscle"
    MAINTAIN = "maintain"
    IMPROVE_FITNESS = "improve_fitness"


class DietaryPreference(str, enum.Enum):
    """Dietary preference."""
    OMNIVORE = "omnivore"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    KETO = "keto"
    PALEO = "paleo"


def generate_public_id() -> str:
    return uuid.uuid4().hex


class Profile(Base):
    """Member, expert or admin profile keyed by phone number."""

    __tablename__ = "profiles"

    phone: Mapped[str] = mapped_column(String(10), primary_key=True)
    id: Mapped[str] = mapped_column(String(64), unique=True, index=True, default=generate_public_id)

    # Account
    username: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    role: Mapped[Role] = mapped_column(Enum(Role), default=Role.USER, index=True)
    specialty: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    trainer_phone: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)

    # Encrypted at rest
    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Body metrics
    gender: Mapped[Optional[Gender]] = mapped_column(Enum(Gender), nullable=True)
    dob: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    height: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # cm
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # kg

    # Onboarding answers
    activity_level: Mapped[Optional[ActivityLevel]] = mapped_column(Enum(ActivityLevel), nullable=True)
    fitness_goal: Mapped[Optional[FitnessGoal]] = mapped_column(Enum(FitnessGoal), nullable=True)
    dietary_preference: Mapped[Optional[DietaryPreference]] = mapped_column(
        Enum(DietaryPreference), nullable=True
    )
    sleep_hours: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    stress_level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    medical_conditions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Address
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @property
    def is_expert(self) -> bool:
        return self.role in EXPERT_ROLES

    @property
    def age(self) -> Optional[int]:
        """Calculate age from date of birth."""
        if not self.dob:
            return None
        today = date.today()
        return today.year - self.dob.year - (
            (today.month, today.day) < (self.dob.month, self.dob.day)
        )
