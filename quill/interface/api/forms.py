"""Request bodies for form-like JSON endpoints."""

from typing import Any

from pydantic import BaseModel, field_validator


class FormBody(BaseModel):
    """JSON body whose fields are all strings.

    A field that is missing, null or not a string reads as empty, so every
    malformed submission reaches the use case and fails there with a 400
    instead of being rejected by request parsing with a 422.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _non_string_as_empty(cls, value: Any) -> Any:
        return value if isinstance(value, str) else ""
