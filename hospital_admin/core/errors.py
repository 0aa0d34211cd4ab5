from pydantic import BaseModel, ValidationError


class StoreError(Exception):
    """Base for typed failures raised by services and surfaced to the caller."""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StoreError):
    status_code = 404


class InvalidInput(StoreError):
    status_code = 400


class Conflict(StoreError):
    # Reserved for duplicate invoice numbers; nothing raises it yet.
    status_code = 409


class OverlayWriteError(StoreError):
    status_code = 503


def parse_payload(model: type[BaseModel], payload) -> BaseModel:
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise InvalidInput("Request body must be an object")
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(p) for p in first.get("loc", ())) or "body"
        raise InvalidInput(f"{field}: {first.get('msg', 'invalid value')}") from e
