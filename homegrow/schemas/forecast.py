"""Pydantic request/response schemas for forecasts and forecast history."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from homegrow.models.enums import EnvironmentEnum, ExperienceEnum, SuitabilityEnum
from homegrow.schemas.reference import Risk, ValueRange
from homegrow.schemas.weather import WeatherProfile


class YieldRange(BaseModel):
	min: float
	max: float


class CalendarEntry(BaseModel):
	month: int = Field(ge=1, le=12)
	suitability: SuitabilityEnum


class Recommendation(BaseModel):
	category: str
	text: str


class CropProfileSummary(BaseModel):
	name: str
	scientific_name: str
	life_cycle: str
	growth_pattern: str
	yield_per_square_meter: YieldRange
	key_requirements: str


class ProductionMetrics(BaseModel):
	total_yield: YieldRange
	time_to_harvest: ValueRange
	harvest_duration: ValueRange
	maintenance_level: str


class PlantingWindows(BaseModel):
	optimal: list[str] = Field(default_factory=list)
	suitable: list[str] = Field(default_factory=list)
	risky: list[str] = Field(default_factory=list)


class ForecastResult(BaseModel):
	crop_profile: CropProfileSummary
	planting_calendar: list[CalendarEntry]
	planting_windows: PlantingWindows
	production_metrics: ProductionMetrics
	risk_factors: list[Risk]
	recommendations: list[Recommendation]


class ForecastParams(BaseModel):
	"""Inputs for a single-crop forecast."""

	model_config = ConfigDict(frozen=True)

	crop: str
	climate: str
	environment: EnvironmentEnum
	area: float = Field(gt=0)
	experience: ExperienceEnum = ExperienceEnum.intermediate
	weather_data: WeatherProfile | None = None


class ForecastRequest(BaseModel):
	country: str | None = Field(default=None, max_length=64)
	region: str | None = Field(default=None, max_length=64)
	climate: str = Field(min_length=1, max_length=64)
	environment: EnvironmentEnum
	area: float = Field(gt=0)
	crops: list[str] | None = Field(default=None, min_length=1)
	experience: ExperienceEnum | None = None


class ForecastError(BaseModel):
	error: str
	message: str


class CropForecastOutcome(BaseModel):
	forecast: ForecastResult | None = None
	error: ForecastError | None = None


class ForecastMeta(BaseModel):
	generated: datetime
	params: dict[str, Any]
	weather: WeatherProfile | None = None


class ForecastResponse(BaseModel):
	meta: ForecastMeta
	crops: dict[str, CropForecastOutcome]


# ── History ─────────────────────────────────────────────────────────────────


class SavedForecastCreate(BaseModel):
	name: str = Field(min_length=1, max_length=255)
	params: ForecastRequest
	results: dict[str, Any]


class SavedForecastSummaryRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	params: dict[str, Any]
	created_at: datetime


class SavedForecastRead(SavedForecastSummaryRead):
	user_id: uuid.UUID
	results: dict[str, Any]
	updated_at: datetime


class SavedForecastListRead(BaseModel):
	items: list[SavedForecastSummaryRead]
