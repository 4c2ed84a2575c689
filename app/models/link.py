"""Link SQLAlchemy model."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class Link(Base):
    """A short code mapped to its target URL, with click accounting."""

    __tablename__ = "links"

    code: Mapped[str] = mapped_column(
        String(8),
        primary_key=True,
        comment="Short code for the URL (6-8 characters of [A-Za-z0-9])",
    )
    target_url: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="The URL to redirect to",
    )
    total_clicks: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
        comment="Number of redirects served for this code",
    )
    last_clicked_at: Mapped[datetime | None] = mapped_column(
        DateTime,
        nullable=True,
        comment="Time of the most recent redirect",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("total_clicks >= 0", name="total_clicks_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Link {self.code} -> {self.target_url[:50]}>"
