"""Forecast generation and reference data routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from homegrow.schemas.forecast import ForecastRequest, ForecastResponse
from homegrow.schemas.reference import (
	ClimateZoneListRead,
	ClimateZoneProfile,
	ClimateZoneSummaryRead,
	CropListRead,
	CropProfile,
	CropSummaryRead,
	Region,
	RegionListRead,
	RegionSummaryRead,
	Subregion,
	SubregionListRead,
)
from homegrow.schemas.weather import WeatherProfile
from homegrow.services.forecast_service import ForecastService
from homegrow.services.reference_data import ReferenceDataStore, get_reference_store
from homegrow.services.weather_service import WeatherService

router = APIRouter(prefix="/forecast", tags=["forecast"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="forecast failure")


@router.post("", response_model=ForecastResponse)
async def generate_forecast(
	payload: ForecastRequest,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> ForecastResponse:
	try:
		return ForecastService(store).generate(payload)
	except Exception as exc:
		raise _map_error(exc) from exc


# ── Crops ───────────────────────────────────────────────────────────────────


@router.get("/crops", response_model=CropListRead)
async def list_crops(store: ReferenceDataStore = Depends(get_reference_store)) -> CropListRead:
	return CropListRead(
		items=[CropSummaryRead(id=crop.id, name=crop.name, image=crop.image) for crop in store.list_crops()]
	)


@router.get("/crops/{crop_id}", response_model=CropProfile)
async def get_crop(crop_id: str, store: ReferenceDataStore = Depends(get_reference_store)) -> CropProfile:
	try:
		return store.get_crop(crop_id)
	except Exception as exc:
		raise _map_error(exc) from exc


# ── Climate zones ───────────────────────────────────────────────────────────


@router.get("/climate-zones", response_model=ClimateZoneListRead)
async def list_climate_zones(store: ReferenceDataStore = Depends(get_reference_store)) -> ClimateZoneListRead:
	return ClimateZoneListRead(
		items=[
			ClimateZoneSummaryRead(id=zone.id, name=zone.name, description=zone.description)
			for zone in store.list_climate_zones()
		]
	)


@router.get("/climate-zones/{climate_id}", response_model=ClimateZoneProfile)
async def get_climate_zone(
	climate_id: str,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> ClimateZoneProfile:
	try:
		return store.get_climate_zone(climate_id)
	except Exception as exc:
		raise _map_error(exc) from exc


# ── Regions ─────────────────────────────────────────────────────────────────


@router.get("/regions/{country}", response_model=RegionListRead)
async def list_regions(country: str, store: ReferenceDataStore = Depends(get_reference_store)) -> RegionListRead:
	return RegionListRead(
		country=country,
		items=[
			RegionSummaryRead(id=region.id, name=region.name, climate_zone=region.climate_zone)
			for region in store.list_regions(country)
		],
	)


@router.get("/regions/{country}/{region_id}", response_model=Region)
async def get_region(
	country: str,
	region_id: str,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> Region:
	try:
		return store.get_region(country, region_id)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/regions/{country}/{region_id}/subregions", response_model=SubregionListRead)
async def list_subregions(
	country: str,
	region_id: str,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> SubregionListRead:
	try:
		region = store.get_region(country, region_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return SubregionListRead(country=country, region_id=region_id, items=list(region.subregions))


@router.get("/regions/{country}/{region_id}/subregions/{subregion_id}", response_model=Subregion)
async def get_subregion(
	country: str,
	region_id: str,
	subregion_id: str,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> Subregion:
	try:
		return store.get_subregion(country, region_id, subregion_id)
	except Exception as exc:
		raise _map_error(exc) from exc


# ── Weather ─────────────────────────────────────────────────────────────────


@router.get("/weather/{country}/{region_id}", response_model=WeatherProfile)
async def get_regional_weather(
	country: str,
	region_id: str,
	store: ReferenceDataStore = Depends(get_reference_store),
) -> WeatherProfile:
	try:
		return WeatherService(store).get_regional_weather(country, region_id)
	except Exception as exc:
		raise _map_error(exc) from exc
