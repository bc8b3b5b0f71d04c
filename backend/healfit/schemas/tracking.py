"""Tracking schemas for clock events and body measurements."""
import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from healfit.models.tracking import EntryType
from healfit.utils.phone import require_phone


class EntryCreate(BaseModel):
    """Clock in or out."""
    user_id: str  # phone
    type: EntryType
    location: Optional[str] = Field(None, max_length=100)  # "lat:<float>,lng:<float>"

    @field_validator("user_id")
    @classmethod
    def normalize_user_id(cls, v: str) -> str:
        return require_phone(v)


class EntryResponse(BaseModel):
    """Recorded clock event."""
    success: bool = True
    timestamp: dt.datetime


class EntryStatus(BaseModel):
    """Latest clock event of a user."""
    type: Optional[EntryType] = None
    timestamp: Optional[dt.datetime] = None


class TimeLogResponse(BaseModel):
    """Clock event."""
    id: int
    user_id: str
    role: Optional[str] = None
    type: EntryType
    timestamp: dt.datetime
    location: Optional[str] = None


class SessionSummary(BaseModel):
    """Minutes a user spent clocked in."""
    user_id: str
    minutes: int


class AttendanceResponse(BaseModel):
    """Daily attendance overview."""
    date: dt.date
    present: List[str]
    absent: List[str]
    sessions: List[SessionSummary]


class MeasurementBase(BaseModel):
    """Body composition reading."""
    weight: Optional[float] = Field(None, gt=0, le=500)
    body_fat: Optional[float] = Field(None, ge=0, le=100)
    visceral_fat: Optional[float] = Field(None, ge=0)
    skeletal_muscle: Optional[float] = Field(None, ge=0, le=100)
    resting_metabolism: Optional[float] = Field(None, ge=0)
    body_age: Optional[int] = Field(None, ge=0, le=150)
    bmi: Optional[float] = Field(None, gt=0)
    subcutaneous_fat: Optional[float] = Field(None, ge=0, le=100)
    waist_circumference: Optional[float] = Field(None, gt=0)
    hip_circumference: Optional[float] = Field(None, gt=0)
    waist_to_hip_ratio: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class MeasurementCreate(MeasurementBase):
    """Schema for recording a measurement."""
    user_id: str
    measured_by: Optional[str] = None
    measurement_date: Optional[dt.datetime] = None

    @field_validator("user_id")
    @classmethod
    def normalize_user_id(cls, v: str) -> str:
        return require_phone(v)

    @field_validator("measured_by")
    @classmethod
    def normalize_measured_by(cls, v: Optional[str]) -> Optional[str]:
        return require_phone(v) if v else None


class MeasurementResponse(MeasurementBase):
    """Schema for measurement response."""
    id: int
    user_id: str
    measured_by: Optional[str] = None
    measurement_date: dt.datetime
    created_at: dt.datetime


class MeasurementSaveResponse(BaseModel):
    """Result of recording a measurement."""
    success: bool = True
    id: int


class MeasurementListResponse(BaseModel):
    """Measurements of a member, newest first."""
    measurements: List[MeasurementResponse]

    model_config = ConfigDict(from_attributes=True)
