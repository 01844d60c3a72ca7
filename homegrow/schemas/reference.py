"""Pydantic schemas for the static reference data (crops, climates, regions, yield factors)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from homegrow.models.enums import SeverityEnum

WILDCARD_CROP = "*"


class ValueRange(BaseModel):
	model_config = ConfigDict(frozen=True)

	min: float
	max: float

	@model_validator(mode="after")
	def _validate_order(self) -> "ValueRange":
		if self.min > self.max:
			raise ValueError("range min must not exceed max")
		return self


class PlantingWindow(BaseModel):
	"""Month sets (1-12) for one climate."""

	model_config = ConfigDict(frozen=True)

	optimal: frozenset[int] = frozenset()
	suitable: frozenset[int] = frozenset()
	risky: frozenset[int] = frozenset()

	@field_validator("optimal", "suitable", "risky")
	@classmethod
	def _validate_months(cls, value: frozenset[int]) -> frozenset[int]:
		invalid = sorted(month for month in value if not 1 <= month <= 12)
		if invalid:
			raise ValueError(f"months must be between 1 and 12, got {invalid}")
		return value


class Risk(BaseModel):
	model_config = ConfigDict(frozen=True)

	category: str
	description: str
	severity: SeverityEnum
	mitigation: str | None = None


class CropProfile(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	scientific_name: str
	life_cycle: str
	growth_pattern: str
	base_yield: ValueRange
	time_to_harvest: ValueRange
	harvest_duration: ValueRange
	maintenance_level: str
	key_requirements: str
	spacing: ValueRange
	seed_start_weeks: int
	protected_extension_weeks: int
	planting_months: dict[str, PlantingWindow] = Field(default_factory=dict)
	risks: list[Risk] = Field(default_factory=list)
	recommended_varieties: dict[str, list[str]] = Field(default_factory=dict)
	beginner_tips: str | None = None
	advanced_tips: str | None = None
	image: str | None = None


class ClimateCharacteristics(BaseModel):
	model_config = ConfigDict(frozen=True)

	min_temp: float
	max_temp: float
	annual_rainfall: str
	growing_season: str
	humidity: str


class ClimateZoneProfile(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	description: str
	characteristics: ClimateCharacteristics
	suitability: dict[str, str] = Field(default_factory=dict)
	challenges: list[str] = Field(default_factory=list)


def _normalize_factor_axis(raw: Any) -> Any:
	"""Migrate legacy factor shapes onto ``key -> crop -> float``.

	A bare number or a ``{"factor": x, "variability": y}`` object becomes a
	wildcard entry ``{"*": x}`` that applies to every crop.
	"""
	if not isinstance(raw, dict):
		return raw
	normalized: dict[str, Any] = {}
	for key, value in raw.items():
		if isinstance(value, bool):
			raise ValueError(f"yield factor for {key!r} must be numeric")
		if isinstance(value, (int, float)):
			normalized[key] = {WILDCARD_CROP: float(value)}
		elif isinstance(value, dict) and "factor" in value:
			normalized[key] = {WILDCARD_CROP: float(value["factor"])}
		else:
			normalized[key] = value
	return normalized


class YieldFactorTable(BaseModel):
	model_config = ConfigDict(frozen=True)

	climate: dict[str, dict[str, float]] = Field(default_factory=dict)
	environment: dict[str, dict[str, float]] = Field(default_factory=dict)
	experience: dict[str, dict[str, float]] = Field(default_factory=dict)

	@field_validator("climate", "environment", "experience", mode="before")
	@classmethod
	def _migrate_legacy_shape(cls, value: Any) -> Any:
		return _normalize_factor_axis(value)

	@staticmethod
	def _lookup(axis: dict[str, dict[str, float]], key: str | None, crop_id: str) -> float:
		if key is None:
			return 1.0
		per_crop = axis.get(key)
		if per_crop is None:
			return 1.0
		if crop_id in per_crop:
			return per_crop[crop_id]
		return per_crop.get(WILDCARD_CROP, 1.0)

	def climate_factor(self, climate_id: str | None, crop_id: str) -> float:
		return self._lookup(self.climate, climate_id, crop_id)

	def environment_factor(self, environment_id: str | None, crop_id: str) -> float:
		return self._lookup(self.environment, environment_id, crop_id)

	def experience_factor(self, experience_id: str | None, crop_id: str) -> float:
		return self._lookup(self.experience, experience_id, crop_id)


class MonthSpan(BaseModel):
	model_config = ConfigDict(frozen=True)

	start_month: int = Field(ge=1, le=12)
	end_month: int = Field(ge=1, le=12)


class TemperatureBand(BaseModel):
	model_config = ConfigDict(frozen=True)

	low: float
	high: float


class Subregion(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	climate_zone: str


class Region(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: str
	name: str
	climate_zone: str
	hemisphere: Literal["north", "south"] = "north"
	growing_season: MonthSpan | None = None
	average_temperatures: dict[str, TemperatureBand] = Field(default_factory=dict)
	subregions: list[Subregion] = Field(default_factory=list)


class Country(BaseModel):
	model_config = ConfigDict(frozen=True)

	code: str
	name: str
	regions: list[Region] = Field(default_factory=list)


# ── API read models ─────────────────────────────────────────────────────────


class CropSummaryRead(BaseModel):
	id: str
	name: str
	image: str | None = None


class ClimateZoneSummaryRead(BaseModel):
	id: str
	name: str
	description: str


class RegionSummaryRead(BaseModel):
	id: str
	name: str
	climate_zone: str


class CropListRead(BaseModel):
	items: list[CropSummaryRead]


class ClimateZoneListRead(BaseModel):
	items: list[ClimateZoneSummaryRead]


class RegionListRead(BaseModel):
	country: str
	items: list[RegionSummaryRead]


class SubregionListRead(BaseModel):
	country: str
	region_id: str
	items: list[Subregion]
