"""ORM model registry — importing this module registers every table on Base.metadata.

Alembic ``env.py`` imports ``Base`` from here (not from ``base.py``) so that
autogenerate sees all tables.  Application code can also do::

    from homegrow.models import SavedForecast, User
"""

# ── Auth models ─────────────────────────────────────────────────────────────
from homegrow.models.user import User

# ── Base & Mixins ───────────────────────────────────────────────────────────
from homegrow.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

# ── Enums ───────────────────────────────────────────────────────────────────
from homegrow.models.enums import (
    EnvironmentEnum,
    ExperienceEnum,
    RiskCategoryEnum,
    SeverityEnum,
    SuitabilityEnum,
    UserRoleEnum,
)

# ── Forecast history ────────────────────────────────────────────────────────
from homegrow.models.forecast import SavedForecast

__all__ = [
    # Base & mixins
    "Base",
    # Enums
    "EnvironmentEnum",
    "ExperienceEnum",
    "RiskCategoryEnum",
    # Forecast history
    "SavedForecast",
    "SeverityEnum",
    "SuitabilityEnum",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Auth
    "User",
    "UserRoleEnum",
]
