from pydantic import BaseModel, Field

class NextOfKin(BaseModel):
    name: str | None = None
    relationship: str | None = None

class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    specialty: str | list[str] | None = None
    email: str | None = None
    phone: str | None = None
    role: str = "Clinician"

class StaffUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    specialty: str | list[str] | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    marital_status: str | None = None
    next_of_kin: NextOfKin | None = None
    home_address: str | None = None
    qualifications: str | None = None
    date_joined: str | None = None

class PasswordCheck(BaseModel):
    password: str = Field(..., min_length=1)
