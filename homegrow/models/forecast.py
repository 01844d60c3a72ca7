"""Saved forecast history model.

``params`` holds the request that produced the forecast and ``results`` the
response envelope (``meta`` + ``crops``) exactly as returned to the client.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homegrow.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from homegrow.models.user import User


class SavedForecast(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A forecast the user chose to keep in their history."""

    __tablename__ = "saved_forecasts"
    __table_args__ = (
        Index("ix_saved_forecasts_user_created", "user_id", "created_at"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    params: Mapped[dict] = mapped_column(JSONB, nullable=False)
    results: Mapped[dict] = mapped_column(JSONB, nullable=False)

    user: Mapped[User] = relationship(back_populates="forecasts")

    def __repr__(self) -> str:
        return f"<SavedForecast id={self.id} user={self.user_id} name={self.name!r}>"
