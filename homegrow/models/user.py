"""User ORM model for email/password (JWT) authentication.

``preferences`` (JSONB) stores the gardener's form defaults::

    {
        "default_country": "usa",
        "default_region": "west-coast",
        "default_climate": "mediterranean",
        "default_environment": "protected",
        "default_area": 5,
        "preferred_crops": ["tomatoes", "bellPeppers"]
    }
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Enum, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from homegrow.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from homegrow.models.enums import UserRoleEnum

if TYPE_CHECKING:
    from homegrow.models.forecast import SavedForecast


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Application user — authenticates via email/password (JWT)."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(
        String(128), nullable=False
    )
    role: Mapped[UserRoleEnum] = mapped_column(
        Enum(
            UserRoleEnum,
            name="user_role",
            create_constraint=False,
            native_enum=True,
        ),
        nullable=False,
        default=UserRoleEnum.user,
        server_default="user",
    )
    is_active: Mapped[bool] = mapped_column(
        default=True,
        server_default=text("true"),
        nullable=False,
    )
    preferences: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    # ── Relationships ────────────────────────────────────────────────────
    forecasts: Mapped[list[SavedForecast]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="noload",
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r} role={self.role}>"
