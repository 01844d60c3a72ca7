"""Pydantic schemas for regional weather profiles."""

from __future__ import annotations

from pydantic import BaseModel


class CurrentConditions(BaseModel):
	temperature: float
	humidity: int
	rainfall: int
	season: str


class TemperatureProfile(BaseModel):
	average: float
	min: float
	max: float


class GrowingSeasonStatus(BaseModel):
	is_active: bool = False
	months_to_start: int | None = None
	months_to_end: int | None = None


class WeatherProfile(BaseModel):
	country: str
	region_id: str
	region_climate: str
	current_conditions: CurrentConditions
	temperature: TemperatureProfile
	growing_season: GrowingSeasonStatus
