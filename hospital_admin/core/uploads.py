import base64
import binascii
from pydantic import AliasChoices, BaseModel, Field, ValidationError, model_validator
from hospital_admin.core.errors import InvalidInput

class UploadedFile(BaseModel):
    """
    A file handed to a handler, either from a multipart form (the HTTP layer
    fills ``content`` with the raw bytes) or from a JSON body carrying the
    bytes base64-encoded under ``data``.
    """
    filename: str = Field(..., min_length=1, validation_alias=AliasChoices("filename", "name", "file_name", "fileName"))
    content_type: str = Field(
        "application/octet-stream",
        validation_alias=AliasChoices("content_type", "type", "mime_type", "fileType"),
    )
    size: int = Field(0, ge=0, validation_alias=AliasChoices("size", "file_size", "fileSize"))
    content: bytes = b""

    @model_validator(mode="before")
    @classmethod
    def _decode(cls, data):
        if isinstance(data, dict) and isinstance(data.get("data"), str):
            data = dict(data)
            try:
                data["content"] = base64.b64decode(data.pop("data"), validate=True)
            except (binascii.Error, ValueError):
                raise ValueError("data must be base64")
        return data

    @model_validator(mode="after")
    def _size(self):
        if not self.size and self.content:
            self.size = len(self.content)
        return self

    def data_url(self) -> str:
        return f"data:{self.content_type};base64,{base64.b64encode(self.content).decode()}"

def read_upload(body, field: str) -> UploadedFile:
    raw = body.get(field) if isinstance(body, dict) else None
    if raw is None:
        raise InvalidInput("No file provided")
    if isinstance(raw, UploadedFile):
        return raw
    try:
        return UploadedFile.model_validate(raw)
    except ValidationError as e:
        raise InvalidInput(f"Malformed file: {e.errors()[0].get('msg', 'invalid')}") from e
