from __future__ import annotations

from datetime import date

import pytest
from httpx import AsyncClient

from homegrow.schemas.reference import MonthSpan, Region
from homegrow.services.reference_data import ReferenceDataStore, ReferenceNotFoundError
from homegrow.services.weather_service import WeatherService, growing_season_status, season_for


def test_season_for_flips_in_southern_hemisphere() -> None:
	assert season_for(1) == "winter"
	assert season_for(7) == "summer"
	assert season_for(1, "south") == "summer"
	assert season_for(4, "south") == "autumn"


def test_growing_season_status_inside_wrapping_season() -> None:
	region = Region(
		id="victoria",
		name="Victoria",
		climate_zone="temperate",
		growing_season=MonthSpan(start_month=9, end_month=4),
	)

	inside = growing_season_status(region, 1)
	outside = growing_season_status(region, 6)

	assert inside.is_active is True
	assert inside.months_to_end == 3
	assert outside.is_active is False
	assert outside.months_to_start == 3


def test_growing_season_status_without_season_data() -> None:
	region = Region(id="x", name="X", climate_zone="arid")
	status = growing_season_status(region, 5)
	assert status.is_active is False
	assert status.months_to_start is None


def test_regional_weather_uses_region_temperature_bands(store: ReferenceDataStore) -> None:
	profile = WeatherService(store).get_regional_weather("usa", "west-coast", today=date(2026, 7, 15))

	assert profile.region_climate == "mediterranean"
	assert profile.current_conditions.season == "summer"
	assert profile.temperature.min == 15
	assert profile.temperature.max == 28
	assert profile.temperature.average == 21.5
	assert profile.growing_season.is_active is True
	assert profile.growing_season.months_to_end == 3


def test_regional_weather_falls_back_to_climate_baseline(store: ReferenceDataStore) -> None:
	profile = WeatherService(store).get_regional_weather("usa", "southwest", today=date(2026, 1, 10))

	assert profile.current_conditions.season == "winter"
	assert profile.temperature.average == 10
	assert profile.current_conditions.humidity == 20


def test_regional_weather_unknown_region(store: ReferenceDataStore) -> None:
	with pytest.raises(ReferenceNotFoundError):
		WeatherService(store).get_regional_weather("usa", "atlantis")


@pytest.mark.asyncio
async def test_weather_endpoint(client: AsyncClient) -> None:
	response = await client.get("/api/v1/forecast/weather/australia/queensland")

	assert response.status_code == 200
	body = response.json()
	assert body["region_climate"] == "subtropical"
	assert body["current_conditions"]["season"] in {"summer", "autumn", "winter", "spring"}


@pytest.mark.asyncio
async def test_weather_endpoint_unknown_country(client: AsyncClient) -> None:
	response = await client.get("/api/v1/forecast/weather/atlantis/west-coast")
	assert response.status_code == 404
	assert response.json()["detail"] == "Country data not found for atlantis"
