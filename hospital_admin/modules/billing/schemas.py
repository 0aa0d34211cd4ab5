from typing import Literal
from pydantic import BaseModel, Field

class TransactionCreate(BaseModel):
    service: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: Literal["paid", "pending", "refunded"] = "paid"
    invoice_number: str = Field(..., min_length=1)

class PayableCreate(BaseModel):
    vendor: str = Field(..., min_length=1)
    description: str | None = None
    amount: float = Field(..., ge=0)
    category: str | None = None
    due_date: str
    status: Literal["pending", "paid"] = "pending"

class ReceivableCreate(BaseModel):
    patient_name: str = Field(..., min_length=1)
    invoice_number: str = Field(..., min_length=1)
    service_rendered: str | None = None
    amount_due: float = Field(..., ge=0)
    due_date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}")
    status: Literal["pending", "paid", "overdue", "collection"] = "pending"
