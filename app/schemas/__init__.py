"""Pydantic schemas."""

from app.schemas.link import LinkCreate, LinkResponse, MessageResponse

__all__ = [
    "LinkCreate",
    "LinkResponse",
    "MessageResponse",
]
