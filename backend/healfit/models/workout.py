"""Workout library and assignment models."""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Integer, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from healfit.models.base import Base, UtcDateTime, utcnow


class Workout(Base):
    """Exercise in the gym's shared workout library."""

    __tablename__ = "workouts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    sets: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    reps: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Comma separated tags, e.g. "chest,triceps"
    muscle_group: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    goal: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)

    level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    equipment: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    img: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class UserWorkout(Base):
    """Workout assigned to a member by a trainer."""

    __tablename__ = "user_workouts"
    __table_args__ = (
        UniqueConstraint("user_phone", "workout_id", name="uq_user_workouts_user_workout"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_phone: Mapped[str] = mapped_column(String(10), index=True)
    workout_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("workouts.id", ondelete="CASCADE"), index=True
    )
    assigned_by: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(UtcDateTime, default=utcnow)

    # Relationships
    workout: Mapped["Workout"] = relationship("Workout")
