"""Body measurement routes."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from healfit.models.base import get_db, utcnow
from healfit.models.profile import Profile
from healfit.models.tracking import BodyMeasurement
from healfit.schemas.tracking import (
    MeasurementCreate,
    MeasurementListResponse,
    MeasurementResponse,
    MeasurementSaveResponse,
)
from healfit.services import profile_service
from healfit.services.calculators import calculate_bmi, calculate_waist_to_hip
from healfit.utils.auth import ensure_can_access, get_current_user, require_expert
from healfit.utils.phone import phone_param

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/measurements", tags=["Measurements"])


def _to_response(m: BodyMeasurement) -> MeasurementResponse:
    return MeasurementResponse(
        id=m.id,
        user_id=m.user_phone,
        measured_by=m.measured_by,
        measurement_date=m.measurement_date,
        created_at=m.created_at,
        weight=m.weight,
        body_fat=m.body_fat,
        visceral_fat=m.visceral_fat,
        skeletal_muscle=m.skeletal_muscle,
        resting_metabolism=m.resting_metabolism,
        body_age=m.body_age,
        bmi=m.bmi,
        subcutaneous_fat=m.subcutaneous_fat,
        waist_circumference=m.waist_circumference,
        hip_circumference=m.hip_circumference,
        waist_to_hip_ratio=m.waist_to_hip_ratio,
        notes=m.notes,
    )


@router.post("", response_model=MeasurementSaveResponse, status_code=status.HTTP_201_CREATED)
async def record_measurement(
    data: MeasurementCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(require_expert),
):
    """
    Record a body composition reading.

    Waist-to-hip ratio and BMI are derived when not supplied.
    """
    profile = await profile_service.get_by_phone(db, data.user_id)
    if not profile:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    values = data.model_dump(exclude={"user_id", "measured_by", "measurement_date"})

    if values["waist_to_hip_ratio"] is None and data.waist_circumference and data.hip_circumference:
        values["waist_to_hip_ratio"] = calculate_waist_to_hip(
            data.waist_circumference, data.hip_circumference
        )
    if values["bmi"] is None and data.weight and profile.height:
        values["bmi"] = calculate_bmi(data.weight, profile.height)

    measurement = BodyMeasurement(
        user_phone=profile.phone,
        measured_by=data.measured_by or current_user.phone,
        measurement_date=data.measurement_date or utcnow(),
        **values,
    )
    db.add(measurement)
    await db.flush()

    logger.info(f"Measurement {measurement.id} recorded for {profile.phone} by {current_user.phone}")
    return MeasurementSaveResponse(id=measurement.id)


@router.get("/{user_id}", response_model=MeasurementListResponse)
async def list_measurements(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Profile = Depends(get_current_user),
):
    """Measurements of a member, newest first."""
    phone = phone_param(user_id)
    ensure_can_access(current_user, phone)

    result = await db.execute(
        select(BodyMeasurement)
        .where(BodyMeasurement.user_phone == phone)
        .order_by(BodyMeasurement.measurement_date.desc(), BodyMeasurement.id.desc())
    )
    return MeasurementListResponse(
        measurements=[_to_response(m) for m in result.scalars().all()]
    )
