from typing import Literal
from pydantic import BaseModel, Field

Channel = Literal["email", "sms", "voice"]

class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    channel: Channel
    subject: str | None = None
    body_text: str = Field(..., min_length=1)
    is_active: bool = True

class TemplateUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    channel: Channel | None = None
    subject: str | None = None
    body_text: str | None = None
    is_active: bool | None = None
