"""Time clock and body measurement models."""
import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import Enum, String, Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from healfit.models.base import Base, UtcDateTime, utcnow


class EntryType(str, enum.Enum):
    """Clock event direction."""
    IN = "in"
    OUT = "out"


class TimeLog(Base):
    """Gym clock in/out event."""

    __tablename__ = "time_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_phone: Mapped[str] = mapped_column(String(10), index=True)
    role: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    type: Mapped[EntryType] = mapped_column(Enum(EntryType))
    timestamp: Mapped[datetime] = mapped_column(UtcDateTime, default=utcnow, index=True)
    location: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)


class BodyMeasurement(Base):
    """Body composition reading taken by an expert."""

    __tablename__ = "body_measurements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_phone: Mapped[str] = mapped_column(String(10), index=True)
    measured_by: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    measurement_date: Mapped[datetime] = mapped_column(UtcDateTime, default=utcnow, index=True)

    # Composition
    weight: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # kg
    body_fat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # %
    visceral_fat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    skeletal_muscle: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # %
    resting_metabolism: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # kcal
    body_age: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    bmi: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    subcutaneous_fat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)  # %

    # Circumferences (cm)
    waist_circumference: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    hip_circumference: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    waist_to_hip_ratio: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
