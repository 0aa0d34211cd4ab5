from pydantic import BaseModel, Field

FIRST_STEP, LAST_STEP = 1, 6

class DraftSave(BaseModel):
    currentStep: int
    draft: dict = {}

class OverviewSection(BaseModel):
    name: str | None = Field(None, min_length=1)
    email: str | None = None
    phone: str | None = None
    specialty: str | list[str] | None = None
    role: str | None = None
    marital_status: str | None = None
    next_of_kin_name: str | None = None
    next_of_kin_relationship: str | None = None
    home_address: str | None = None
    qualifications: str | None = None
    date_joined: str | None = None
    profile_picture: str | None = None

class EmploymentSection(BaseModel):
    bankAccount: dict | None = None
    salaryAndBenefits: dict | None = None
    promotions: list[dict] | None = None

class MedicalSection(BaseModel):
    conditions: str | None = None
    allergies: str | None = None
    emergencyContact: dict | None = None
    immunizations: list[dict] | None = None
    assessments: list[dict] | None = None

class DraftDocument(BaseModel):
    fileName: str = Field(..., min_length=1)
    fileSize: int = Field(0, ge=0)
    fileType: str = "application/pdf"
    documentType: str = "other"
    description: str | None = None

class StaffUpdateData(BaseModel):
    overview: OverviewSection | None = None
    employment: EmploymentSection | None = None
    medical: MedicalSection | None = None
    documents: list[DraftDocument] | None = None
