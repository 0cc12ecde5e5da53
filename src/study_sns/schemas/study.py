"""Study timer Pydantic schemas."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class StudyStartRequest(BaseModel):
    """Start a new study session."""

    study_subject: str | None = Field(None, max_length=100)


class StudySessionAction(BaseModel):
    """Pause, resume or end an existing session."""

    session_id: int


class StudySessionResponse(BaseModel):
    """Study session row."""

    id: int
    user_id: str
    status: str
    started_at: datetime
    paused_at: datetime | None
    ended_at: datetime | None
    accumulated_seconds: int
    study_subject: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StudyRecordResponse(BaseModel):
    """Per-day study total."""

    id: int
    user_id: str
    study_date: date
    total_seconds: int
    session_count: int

    model_config = ConfigDict(from_attributes=True)


class StudySessionEnvelope(BaseModel):
    """Wrapper used by start/pause/resume responses."""

    session: StudySessionResponse


class StudyEndResponse(BaseModel):
    """Outcome of ending a session."""

    session: StudySessionResponse
    total_duration_seconds: int
    daily_record: StudyRecordResponse


class StudyCurrentResponse(BaseModel):
    """Open session (if any) and today's total."""

    session: StudySessionResponse | None
    today_total_seconds: int


class LiveSession(BaseModel):
    """Session fields exposed on the live board."""

    id: int
    started_at: datetime
    paused_at: datetime | None
    accumulated_seconds: int
    study_subject: str | None


class LiveStudyUser(BaseModel):
    """A user currently studying."""

    user_id: str
    username: str
    school_name: str | None
    major: str | None
    session: LiveSession


class LiveStudyResponse(BaseModel):
    """Everyone currently studying."""

    studying_users: list[LiveStudyUser]
    total_count: int


class StudySummary(BaseModel):
    """Aggregate statistics over a set of daily records."""

    total_days: int
    total_seconds: int
    average_seconds: int
    longest_streak: int


class StudyRecordsResponse(BaseModel):
    """Daily records in a range plus their summary."""

    records: list[StudyRecordResponse]
    summary: StudySummary
