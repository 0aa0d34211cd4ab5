from pydantic import BaseModel, Field

class HospitalUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    country: str | None = None
    timezone: str | None = None
