"""Regional weather profiles derived from a region's climate zone and the calendar.

No external weather provider is wired in; the profile is a climate-model
estimate for the current season, refined by the region's own temperature
bands and growing season when the reference data has them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import structlog

from homegrow.schemas.reference import Region
from homegrow.schemas.weather import (
	CurrentConditions,
	GrowingSeasonStatus,
	TemperatureProfile,
	WeatherProfile,
)
from homegrow.services.reference_data import ReferenceDataStore

logger = structlog.get_logger("homegrow.weather")


@dataclass(frozen=True, slots=True)
class _ClimateBaseline:
	winter: tuple[float, float, float]
	other: tuple[float, float, float]
	winter_rainfall: str
	other_rainfall: str
	winter_humidity: str
	other_humidity: str


# (average, min, max) in °C for winter and for the rest of the year.
_CLIMATE_BASELINES: dict[str, _ClimateBaseline] = {
	"tropical": _ClimateBaseline((24, 18, 30), (28, 22, 34), "low", "high", "medium", "high"),
	"subtropical": _ClimateBaseline((16, 10, 22), (26, 20, 32), "low", "medium", "low", "medium"),
	"mediterranean": _ClimateBaseline((10, 5, 15), (24, 16, 32), "medium", "very low", "medium", "low"),
	"continental": _ClimateBaseline((-5, -15, 5), (20, 12, 28), "low", "low", "low", "medium"),
	"oceanic": _ClimateBaseline((5, 0, 10), (15, 10, 20), "medium", "medium", "medium", "medium"),
	"arid": _ClimateBaseline((10, 0, 20), (30, 20, 40), "very low", "very low", "very low", "very low"),
	"semiarid": _ClimateBaseline((5, -5, 15), (25, 15, 35), "low", "low", "low", "low"),
}
_DEFAULT_BASELINE = _ClimateBaseline((5, 0, 10), (20, 15, 25), "medium", "medium", "medium", "medium")

_HUMIDITY_PERCENT = {"very low": 20, "low": 40, "medium": 60, "high": 80, "very high": 90}
_RAINFALL_MM = {"very low": 10, "low": 30, "medium": 80, "high": 150, "very high": 250}

_NORTHERN_SEASONS = {
	12: "winter", 1: "winter", 2: "winter",
	3: "spring", 4: "spring", 5: "spring",
	6: "summer", 7: "summer", 8: "summer",
	9: "autumn", 10: "autumn", 11: "autumn",
}
_SOUTHERN_FLIP = {"winter": "summer", "summer": "winter", "spring": "autumn", "autumn": "spring"}


def season_for(month: int, hemisphere: str = "north") -> str:
	season = _NORTHERN_SEASONS[month]
	if hemisphere == "south":
		return _SOUTHERN_FLIP[season]
	return season


def growing_season_status(region: Region, month: int) -> GrowingSeasonStatus:
	"""Whether ``month`` falls in the region's growing season, and how far to its edge."""
	if region.growing_season is None:
		return GrowingSeasonStatus()

	start = region.growing_season.start_month
	end = region.growing_season.end_month
	if start <= end:
		active = start <= month <= end
	else:
		active = month >= start or month <= end

	if active:
		months_to_end = end - month if month <= end else (12 - month) + end
		return GrowingSeasonStatus(is_active=True, months_to_end=months_to_end)
	months_to_start = start - month if month < start else (12 - month) + start
	return GrowingSeasonStatus(is_active=False, months_to_start=months_to_start)


class WeatherService:
	def __init__(self, store: ReferenceDataStore):
		self.store = store

	def get_regional_weather(
		self,
		country: str,
		region_id: str,
		today: date | None = None,
	) -> WeatherProfile:
		region = self.store.get_region(country, region_id)
		month = (today or date.today()).month
		season = season_for(month, region.hemisphere)

		baseline = _CLIMATE_BASELINES.get(region.climate_zone, _DEFAULT_BASELINE)
		is_winter = season == "winter"
		average, low, high = baseline.winter if is_winter else baseline.other
		rainfall = baseline.winter_rainfall if is_winter else baseline.other_rainfall
		humidity = baseline.winter_humidity if is_winter else baseline.other_humidity

		band = region.average_temperatures.get(season)
		if band is not None:
			low, high = band.low, band.high
			average = (low + high) / 2

		logger.debug(
			"regional_weather_resolved",
			country=country,
			region_id=region_id,
			season=season,
			climate=region.climate_zone,
		)
		return WeatherProfile(
			country=country,
			region_id=region_id,
			region_climate=region.climate_zone,
			current_conditions=CurrentConditions(
				temperature=average,
				humidity=_HUMIDITY_PERCENT.get(humidity, 50),
				rainfall=_RAINFALL_MM.get(rainfall, 50),
				season=season,
			),
			temperature=TemperatureProfile(average=average, min=low, max=high),
			growing_season=growing_season_status(region, month),
		)
