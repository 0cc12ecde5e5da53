"""Schedule Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from study_sns.services.timetable import normalize_time, validate_day

from .note import ImageAnalysisRequest


class ScheduleBase(BaseModel):
    """Fields shared by schedule create payloads."""

    title: str = Field(..., min_length=1, max_length=100)
    day_of_week: str
    start_time: str
    end_time: str
    location: str | None = Field(None, max_length=100)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title must not be blank")
        return v

    @field_validator("day_of_week")
    @classmethod
    def _check_day(cls, v: str) -> str:
        return validate_day(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def _check_time(cls, v: str) -> str:
        return normalize_time(v)

    @field_validator("location")
    @classmethod
    def _strip_location(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class ScheduleCreate(ScheduleBase):
    """Schema for a single new schedule entry."""


class ScheduleBulkCreate(BaseModel):
    """Save a batch of entries, typically confirmed from image analysis."""

    schedules: list[ScheduleCreate] = Field(..., min_length=1, max_length=100)
    replace_existing: bool = False


class ScheduleUpdate(BaseModel):
    """Partial update; validated in the handler to report precise errors."""

    title: str | None = None
    day_of_week: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    location: str | None = None


class ScheduleResponse(BaseModel):
    """Stored schedule entry."""

    id: int
    user_id: str
    title: str
    day_of_week: str
    start_time: str
    end_time: str
    location: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ScheduleAnalysisRequest(ImageAnalysisRequest):
    """Timetable image plus the first-period start used for period-style grids."""

    first_period_start: str = "09:00"

    @field_validator("first_period_start")
    @classmethod
    def _check_first_period(cls, v: str) -> str:
        return normalize_time(v)


class ExtractedSchedule(BaseModel):
    """A class slot recognised in a timetable image."""

    title: str
    day_of_week: str
    start_time: str
    end_time: str
    location: str | None = None
    confidence: float = 1.0


class ScheduleAnalysisResponse(BaseModel):
    """Timetable analysis outcome."""

    success: bool = True
    schedules: list[ExtractedSchedule]
    message: str
    notes: str | None = None
