from pydantic import BaseModel, Field

class TaxType(BaseModel):
    id: str | None = None
    name: str = Field(..., min_length=1)
    percentage: float = Field(0, ge=0, le=100)

class SalaryStructureIn(BaseModel):
    baseSalary: float = Field(..., gt=0)
    taxTypes: list[TaxType] = []

DEFAULT_TAX_TYPES = [
    {"id": "vat", "name": "VAT", "percentage": 0},
    {"id": "income-tax", "name": "Income Tax", "percentage": 0},
    {"id": "social-security", "name": "Social Security", "percentage": 0},
    {"id": "medicare", "name": "Medicare", "percentage": 0},
]
