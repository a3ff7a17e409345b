"""Pydantic models for the Short Links Service."""

from typing import Optional
from pydantic import (
    AnyHttpUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

_http_url = TypeAdapter(AnyHttpUrl)


class URLSaveRequest(BaseModel):
    """Model for binding a URL to an alias.

    The alias format depends on runtime settings and is checked by the route.
    """

    url: str = Field(..., description="The long URL to shorten")
    alias: Optional[str] = Field(
        None, description="Requested alias; omit to have one generated"
    )

    @field_validator("url")
    @classmethod
    def check_url(cls, value: str) -> str:
        # Validate only; the URL is stored exactly as submitted.
        try:
            _http_url.validate_python(value)
        except ValidationError:
            raise ValueError("URL must be an absolute http or https URL")
        return value


class ErrorResponse(BaseModel):
    """Model for error responses."""

    detail: str
    error_code: Optional[str] = None
