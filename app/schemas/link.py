"""Link Pydantic schemas.

JSON bodies use camelCase (``targetUrl``, ``totalClicks``) to match the
dashboard front end; Python code uses the snake_case field names.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class LinkCreate(BaseModel):
    """Schema for creating a new link.

    Both fields accept any JSON value. URL and code validation is done by
    the registry, so a number or list maps to its 400 errors rather than a
    422 schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    target_url: Any = Field(default=None, description="The URL to shorten")
    code: Any = Field(
        default=None,
        description="Optional custom short code, 6-8 characters of [A-Za-z0-9]",
    )

    @field_validator("code")
    @classmethod
    def blank_code_is_absent(cls, v: Any) -> Any:
        """Treat an empty custom code as no custom code."""
        return None if v == "" else v


class LinkResponse(BaseModel):
    """Schema for link response."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    code: str
    target_url: str
    total_clicks: int
    last_clicked_at: datetime | None
    created_at: datetime

    @field_serializer("last_clicked_at", "created_at")
    def serialize_utc(self, value: datetime | None) -> datetime | None:
        """Stored timestamps are naive UTC; emit them with an explicit offset."""
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
