"""Diet/workout plan models."""
from datetime import date, datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from healfit.models.base import Base, UtcDateTime, utcnow


class DietPlan(Base):
    """A member's plan for one plan cycle.

    The plan body is a list of day objects (meals, workouts, physio routines)
    stored as JSON; the day schema lives in ``healfit.schemas.plan``.
    """

    __tablename__ = "diet_plans"
    __table_args__ = (UniqueConstraint("phone", "cycle_start", name="uq_diet_plans_phone_cycle"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    phone: Mapped[str] = mapped_column(String(10), index=True)
    cycle_start: Mapped[date] = mapped_column(Date)

    plan: Mapped[list[Any]] = mapped_column(JSON, default=list)

    last_modified_at: Mapped[datetime] = mapped_column(UtcDateTime, default=utcnow)
    last_modified_by: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)

    # Relationships
    notes: Mapped[List["PlanNote"]] = relationship(
        "PlanNote", back_populates="plan", cascade="all, delete-orphan",
        order_by="PlanNote.id"
    )


class PlanNote(Base):
    """Expert note attached to a plan change."""

    __tablename__ = "plan_notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("diet_plans.id", ondelete="CASCADE"), index=True
    )
    author_phone: Mapped[Optional[str]] = mapped_column(String(10), nullable=True, index=True)
    expert: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)  # author's role
    section: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    note: Mapped[str] = mapped_column(Text)

    # Relationships
    plan: Mapped["DietPlan"] = relationship("DietPlan", back_populates="notes")
