"""In-memory reference data store — crops, climate zones, regions, yield factors.

The JSON files under ``settings.reference_data_dir`` are parsed and validated
once per process (``get_reference_store`` is cached) and then served
read-only.  Redeploying is the only way to change them.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog
from pydantic import TypeAdapter

from homegrow.config import get_settings
from homegrow.schemas.reference import (
	ClimateZoneProfile,
	Country,
	CropProfile,
	Region,
	Subregion,
	YieldFactorTable,
)

logger = structlog.get_logger("homegrow.reference_data")

CROPS_FILE = "crops.json"
CLIMATES_FILE = "climates.json"
REGIONS_FILE = "regions.json"
YIELD_FACTORS_FILE = "yield_factors.json"

_crops_adapter = TypeAdapter(list[CropProfile])
_climates_adapter = TypeAdapter(list[ClimateZoneProfile])
_countries_adapter = TypeAdapter(list[Country])


class ReferenceNotFoundError(LookupError):
	"""A crop, climate zone, region or subregion id is not in the store."""

	def __init__(self, kind: str, key: str) -> None:
		self.kind = kind
		self.key = key
		super().__init__(f"{kind.capitalize()} data not found for {key}")


def _index_unique(items: list[Any], key_attr: str, kind: str) -> dict[str, Any]:
	index: dict[str, Any] = {}
	for item in items:
		key = getattr(item, key_attr)
		if key in index:
			raise ValueError(f"duplicate {kind} id {key!r} in reference data")
		index[key] = item
	return index


class ReferenceDataStore:
	"""Read-only lookup over validated reference data."""

	def __init__(
		self,
		crops: list[CropProfile],
		climates: list[ClimateZoneProfile],
		countries: list[Country],
		yield_factors: YieldFactorTable,
	) -> None:
		self._crops: dict[str, CropProfile] = _index_unique(crops, "id", "crop")
		self._climates: dict[str, ClimateZoneProfile] = _index_unique(climates, "id", "climate")
		self._countries: dict[str, Country] = _index_unique(countries, "code", "country")
		self._yield_factors = yield_factors

	@classmethod
	def from_directory(cls, directory: Path) -> ReferenceDataStore:
		def _read(name: str) -> Any:
			with (directory / name).open(encoding="utf-8") as handle:
				return json.load(handle)

		store = cls(
			crops=_crops_adapter.validate_python(_read(CROPS_FILE)),
			climates=_climates_adapter.validate_python(_read(CLIMATES_FILE)),
			countries=_countries_adapter.validate_python(_read(REGIONS_FILE)),
			yield_factors=YieldFactorTable.model_validate(_read(YIELD_FACTORS_FILE)),
		)
		logger.info(
			"reference_data_loaded",
			directory=str(directory),
			crops=len(store._crops),
			climates=len(store._climates),
			countries=len(store._countries),
		)
		return store

	# ── Crops ───────────────────────────────────────────────────────────────

	def get_crop(self, crop_id: str) -> CropProfile:
		crop = self._crops.get(crop_id)
		if crop is None:
			raise ReferenceNotFoundError("crop", crop_id)
		return crop

	def list_crops(self) -> list[CropProfile]:
		return list(self._crops.values())

	# ── Climate zones ───────────────────────────────────────────────────────

	def get_climate_zone(self, climate_id: str) -> ClimateZoneProfile:
		climate = self._climates.get(climate_id)
		if climate is None:
			raise ReferenceNotFoundError("climate", climate_id)
		return climate

	def list_climate_zones(self) -> list[ClimateZoneProfile]:
		return list(self._climates.values())

	# ── Yield factors ───────────────────────────────────────────────────────

	def get_yield_factors(self) -> YieldFactorTable:
		return self._yield_factors

	# ── Regions ─────────────────────────────────────────────────────────────

	def list_regions(self, country_code: str) -> list[Region]:
		"""Regions of a country; an unknown country yields an empty list."""
		country = self._countries.get(country_code)
		if country is None:
			return []
		return list(country.regions)

	def get_region(self, country_code: str, region_id: str) -> Region:
		country = self._countries.get(country_code)
		if country is None:
			raise ReferenceNotFoundError("country", country_code)
		for region in country.regions:
			if region.id == region_id:
				return region
		raise ReferenceNotFoundError("region", region_id)

	def get_subregion(self, country_code: str, region_id: str, subregion_id: str) -> Subregion:
		region = self.get_region(country_code, region_id)
		for subregion in region.subregions:
			if subregion.id == subregion_id:
				return subregion
		raise ReferenceNotFoundError("subregion", subregion_id)


@lru_cache
def get_reference_store() -> ReferenceDataStore:
	"""Process-wide store, loaded on first use (warmed during app startup)."""
	return ReferenceDataStore.from_directory(get_settings().reference_data_dir)
