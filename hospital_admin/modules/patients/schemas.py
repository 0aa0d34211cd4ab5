from pydantic import BaseModel, Field

class ContactPreferences(BaseModel):
    email: bool = True
    sms: bool = True
    voice: bool = False

class NextOfKin(BaseModel):
    name: str | None = None
    relationship: str | None = None
    contact_number: str | None = None

class PatientCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=200)
    last_name: str = Field(..., min_length=1, max_length=200)
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None

class PatientUpdate(BaseModel):
    first_name: str | None = Field(None, min_length=1, max_length=200)
    last_name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = None
    phone: str | None = None
    date_of_birth: str | None = None
    # extended profile, kept in the durable overlay
    contact_preferences: ContactPreferences | None = None
    notes: str | None = None
    gender: str | None = None
    street_address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    blood_type: str | None = None
    next_of_kin: NextOfKin | None = None
    assigned_clinician_id: int | None = None

CORE_FIELDS = ("first_name", "last_name", "email", "phone", "date_of_birth")
