"""Diet/workout plan routes."""
import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from healfit.models.base import get_db, utcnow
from healfit.models.plan import DietPlan, PlanNote
from healfit.models.profile import Profile
from healfit.schemas.plan import (
    CycleResponse,
    PlanNoteResponse,
    PlanResponse,
    PlanSaveResponse,
    PlanUpsert,
)
from healfit.services import profile_service
from healfit.services.plan_cycle import cycle_for
from healfit.utils.auth import ensure_can_access, get_current_user
from healfit.utils.phone import phone_param

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["Plans"])


@router.get("", response_model=PlanResponse)
async def get_plan(
    phone: str = Query(...),
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Get a member's plan for the cycle containing a date (default today).

    ``plan`` is null when nothing was saved for that cycle yet.
    """
    phone = phone_param(phone)
    ensure_can_access(current_user, phone)

    cycle = cycle_for(day or date.today())
    result = await db.execute(
        select(DietPlan)
        .where(and_(DietPlan.phone == phone, DietPlan.cycle_start == cycle.start))
        .options(selectinload(DietPlan.notes))
    )
    plan = result.scalar_one_or_none()

    if not plan:
        return PlanResponse(cycle=CycleResponse.model_validate(cycle))

    return PlanResponse(
        plan=plan.plan,
        last_modified_at=plan.last_modified_at,
        last_modified_by=plan.last_modified_by,
        cycle=CycleResponse.model_validate(cycle),
        notes=[PlanNoteResponse.model_validate(n) for n in plan.notes],
    )


@router.post("", response_model=PlanSaveResponse)
async def save_plan(
    plan_data: PlanUpsert,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """
    Create or replace a member's plan for a cycle.

    An optional note is appended to the plan's note history.
    """
    ensure_can_access(current_user, plan_data.phone)

    if not await profile_service.get_by_phone(db, plan_data.phone):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    cycle = cycle_for(plan_data.date or date.today())
    result = await db.execute(
        select(DietPlan).where(
            and_(DietPlan.phone == plan_data.phone, DietPlan.cycle_start == cycle.start)
        )
    )
    plan = result.scalar_one_or_none()

    if not plan:
        plan = DietPlan(phone=plan_data.phone, cycle_start=cycle.start)
        db.add(plan)

    plan.plan = [day.model_dump(mode="json") for day in plan_data.plan]
    plan.last_modified_at = utcnow()
    plan.last_modified_by = current_user.phone
    await db.flush()

    if plan_data.note and plan_data.note.strip():
        db.add(
            PlanNote(
                plan_id=plan.id,
                author_phone=current_user.phone,
                expert=plan_data.expert or current_user.role.value,
                section=plan_data.section,
                note=plan_data.note.strip(),
            )
        )
        await db.flush()

    logger.info(f"Plan for {plan_data.phone} (cycle {cycle.index}) saved by {current_user.phone}")

    return PlanSaveResponse(
        last_modified_at=plan.last_modified_at,
        cycle=CycleResponse.model_validate(cycle),
    )

