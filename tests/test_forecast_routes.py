from __future__ import annotations

import pytest
from httpx import AsyncClient

from homegrow.services.forecast_service import ForecastService


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
	response = await client.get("/health")
	assert response.status_code == 200
	assert response.json()["service"] == "homegrow"


@pytest.mark.asyncio
async def test_request_id_is_echoed_or_generated(client: AsyncClient) -> None:
	echoed = await client.get("/health", headers={"X-Request-ID": "req-42"})
	generated = await client.get("/health")

	assert echoed.headers["x-request-id"] == "req-42"
	assert len(generated.headers["x-request-id"]) == 36


@pytest.mark.asyncio
async def test_generate_forecast(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/forecast",
		json={
			"climate": "mediterranean",
			"environment": "protected",
			"area": 10,
			"crops": ["tomatoes"],
			"experience": "intermediate",
		},
	)

	assert response.status_code == 200
	body = response.json()
	assert body["meta"]["params"]["climate"] == "mediterranean"
	assert body["meta"]["weather"] is None

	forecast = body["crops"]["tomatoes"]["forecast"]
	assert forecast["crop_profile"]["yield_per_square_meter"] == {"min": 5.5, "max": 10.9}
	assert forecast["production_metrics"]["total_yield"] == {"min": 55.0, "max": 109.0}
	assert [entry["month"] for entry in forecast["planting_calendar"]] == list(range(1, 13))
	assert forecast["planting_calendar"][6]["suitability"] == "suitable"
	assert body["crops"]["tomatoes"]["error"] is None


@pytest.mark.asyncio
async def test_generate_forecast_isolates_unknown_crop(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/forecast",
		json={"climate": "tropical", "environment": "open", "area": 4, "crops": ["kale", "eggplant"]},
	)

	assert response.status_code == 200
	crops = response.json()["crops"]
	assert crops["kale"]["forecast"] is None
	assert crops["kale"]["error"]["error"] == "crop_not_found"
	assert crops["eggplant"]["forecast"] is not None


@pytest.mark.asyncio
async def test_generate_forecast_unknown_climate_is_404(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/forecast",
		json={"climate": "arctic", "environment": "open", "area": 4, "crops": ["tomatoes"]},
	)
	assert response.status_code == 404
	assert response.json()["detail"] == "Climate data not found for arctic"


@pytest.mark.asyncio
@pytest.mark.parametrize(
	"payload",
	[
		{"environment": "open", "area": 4},
		{"climate": "tropical", "environment": "hydroponic", "area": 4},
		{"climate": "tropical", "environment": "open", "area": 0},
		{"climate": "tropical", "environment": "open", "area": 4, "crops": []},
	],
)
async def test_generate_forecast_rejects_invalid_parameters(client: AsyncClient, payload: dict) -> None:
	response = await client.post("/api/v1/forecast", json=payload)
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_generate_forecast_unexpected_error_is_500(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	def broken(self: ForecastService, _request: object) -> object:
		raise RuntimeError("boom")

	monkeypatch.setattr(ForecastService, "generate", broken)

	response = await client.post(
		"/api/v1/forecast",
		json={"climate": "tropical", "environment": "open", "area": 4},
	)
	assert response.status_code == 500
	assert response.json()["detail"] == "forecast failure"


@pytest.mark.asyncio
async def test_list_and_get_crops(client: AsyncClient) -> None:
	listing = await client.get("/api/v1/forecast/crops")
	detail = await client.get("/api/v1/forecast/crops/bellPeppers")
	missing = await client.get("/api/v1/forecast/crops/kale")

	assert listing.status_code == 200
	assert {"id": "tomatoes", "name": "Tomatoes", "image": "/images/crops/tomato.jpg"} in listing.json()["items"]
	assert detail.status_code == 200
	assert detail.json()["scientific_name"] == "Capsicum annuum"
	assert sorted(detail.json()["planting_months"]["mediterranean"]["optimal"]) == [4, 5]
	assert missing.status_code == 404


@pytest.mark.asyncio
async def test_list_and_get_climate_zones(client: AsyncClient) -> None:
	listing = await client.get("/api/v1/forecast/climate-zones")
	detail = await client.get("/api/v1/forecast/climate-zones/arid")
	missing = await client.get("/api/v1/forecast/climate-zones/arctic")

	assert len(listing.json()["items"]) == 8
	assert detail.json()["characteristics"]["max_temp"] == 45
	assert missing.status_code == 404


@pytest.mark.asyncio
async def test_region_endpoints(client: AsyncClient) -> None:
	regions = await client.get("/api/v1/forecast/regions/uk")
	region = await client.get("/api/v1/forecast/regions/uk/south-england")
	subregions = await client.get("/api/v1/forecast/regions/uk/south-england/subregions")
	subregion = await client.get("/api/v1/forecast/regions/uk/south-england/subregions/london")

	assert {item["id"] for item in regions.json()["items"]} == {"south-england", "scotland"}
	assert region.json()["climate_zone"] == "oceanic"
	assert subregions.json()["region_id"] == "south-england"
	assert len(subregions.json()["items"]) == 2
	assert subregion.json()["name"] == "Greater London"


@pytest.mark.asyncio
async def test_region_endpoints_unknown_ids(client: AsyncClient) -> None:
	empty = await client.get("/api/v1/forecast/regions/atlantis")
	missing_region = await client.get("/api/v1/forecast/regions/uk/wales")
	missing_subregion = await client.get("/api/v1/forecast/regions/uk/scotland/subregions/highlands")

	assert empty.status_code == 200
	assert empty.json() == {"country": "atlantis", "items": []}
	assert missing_region.status_code == 404
	assert missing_subregion.status_code == 404
