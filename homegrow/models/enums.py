"""Enum types shared by the ORM, the pydantic schemas and the forecast core.

``UserRoleEnum`` maps 1:1 to a PostgreSQL CREATE TYPE ... AS ENUM.  The
remaining enums type request parameters and computed forecast values; they
are never stored as database enums (forecast payloads are JSONB).
"""

from enum import StrEnum

# ── Forecast parameter enums ────────────────────────────────────────────────


class EnvironmentEnum(StrEnum):
    """Growing environment selected by the gardener."""

    open = "open"
    protected = "protected"
    cooled = "cooled"


class ExperienceEnum(StrEnum):
    """Gardener experience tier."""

    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


# ── Forecast result enums ───────────────────────────────────────────────────


class SuitabilityEnum(StrEnum):
    """Month-by-month planting suitability, best first."""

    optimal = "optimal"
    suitable = "suitable"
    risky = "risky"
    not_recommended = "not_recommended"


class SeverityEnum(StrEnum):
    """Risk severity, ordered from least to most severe."""

    low = "low"
    medium = "medium"
    high = "high"


class RiskCategoryEnum(StrEnum):
    """Normalized risk category used by the severity rule table."""

    temperature = "temperature"
    disease = "disease"
    pest = "pest"
    moisture = "moisture"
    other = "other"


# ── Auth enums ──────────────────────────────────────────────────────────────


class UserRoleEnum(StrEnum):
    """User authorization roles."""

    admin = "admin"
    user = "user"
