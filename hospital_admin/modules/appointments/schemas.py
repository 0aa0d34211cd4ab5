from typing import Literal
from pydantic import BaseModel, Field

AppointmentStatus = Literal["scheduled", "confirmed", "completed", "cancelled", "no-show"]

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^\d{2}:\d{2}$"

class AppointmentCreate(BaseModel):
    patient_id: int
    clinician_id: int | None = None
    clinician_ids: list[int] | None = None
    appointment_date: str = Field(..., pattern=DATE_PATTERN)
    appointment_time: str = Field(..., pattern=TIME_PATTERN)
    reason: str | None = None

class AppointmentUpdate(BaseModel):
    patient_id: int | None = None
    clinician_id: int | None = None
    clinician_ids: list[int] | None = None
    appointment_date: str | None = Field(None, pattern=DATE_PATTERN)
    appointment_time: str | None = Field(None, pattern=TIME_PATTERN)
    status: AppointmentStatus | None = None
    reason: str | None = None
