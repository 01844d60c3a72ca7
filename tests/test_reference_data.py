from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from homegrow.services.reference_data import ReferenceDataStore, ReferenceNotFoundError


def test_packaged_reference_data_loads(store: ReferenceDataStore) -> None:
	crop_ids = {crop.id for crop in store.list_crops()}
	climate_ids = {zone.id for zone in store.list_climate_zones()}

	assert {"tomatoes", "cucumbers", "bellPeppers", "eggplant", "hotPeppers"} <= crop_ids
	assert climate_ids == {
		"tropical",
		"subtropical",
		"mediterranean",
		"continental",
		"temperate",
		"oceanic",
		"arid",
		"semiarid",
	}


def test_every_crop_planting_climate_is_a_known_zone(store: ReferenceDataStore) -> None:
	climate_ids = {zone.id for zone in store.list_climate_zones()}
	for crop in store.list_crops():
		assert set(crop.planting_months) <= climate_ids, crop.id


def test_unknown_crop_raises_not_found(store: ReferenceDataStore) -> None:
	with pytest.raises(ReferenceNotFoundError) as excinfo:
		store.get_crop("kale")

	assert excinfo.value.kind == "crop"
	assert excinfo.value.key == "kale"
	assert str(excinfo.value) == "Crop data not found for kale"
	assert isinstance(excinfo.value, LookupError)


def test_unknown_climate_raises_not_found(store: ReferenceDataStore) -> None:
	with pytest.raises(ReferenceNotFoundError) as excinfo:
		store.get_climate_zone("arctic")
	assert excinfo.value.kind == "climate"


def test_yield_factors_follow_per_crop_shape(store: ReferenceDataStore) -> None:
	factors = store.get_yield_factors()
	assert factors.climate_factor("mediterranean", "tomatoes") == 1.2
	assert factors.environment_factor("protected", "tomatoes") == 1.3
	assert factors.experience_factor("intermediate", "tomatoes") == 1.0


def test_regions_and_subregions(store: ReferenceDataStore) -> None:
	regions = store.list_regions("usa")
	assert "west-coast" in {region.id for region in regions}

	region = store.get_region("usa", "west-coast")
	assert region.climate_zone == "mediterranean"

	subregion = store.get_subregion("usa", "west-coast", "pacific-northwest")
	assert subregion.climate_zone == "oceanic"


def test_unknown_country_lists_no_regions(store: ReferenceDataStore) -> None:
	assert store.list_regions("atlantis") == []


def test_region_lookups_raise_not_found(store: ReferenceDataStore) -> None:
	with pytest.raises(ReferenceNotFoundError) as country:
		store.get_region("atlantis", "west-coast")
	with pytest.raises(ReferenceNotFoundError) as region:
		store.get_region("usa", "midwest")
	with pytest.raises(ReferenceNotFoundError) as subregion:
		store.get_subregion("usa", "west-coast", "hawaii")

	assert (country.value.kind, region.value.kind, subregion.value.kind) == ("country", "region", "subregion")


def _write_dataset(directory: Path, crops: list[dict], yield_factors: dict | None = None) -> None:
	(directory / "crops.json").write_text(json.dumps(crops), encoding="utf-8")
	(directory / "climates.json").write_text("[]", encoding="utf-8")
	(directory / "regions.json").write_text("[]", encoding="utf-8")
	(directory / "yield_factors.json").write_text(json.dumps(yield_factors or {}), encoding="utf-8")


def _crop(crop_id: str, **overrides: object) -> dict:
	crop = {
		"id": crop_id,
		"name": crop_id.title(),
		"scientific_name": "Brassica oleracea",
		"life_cycle": "Biennial",
		"growth_pattern": "Rosette",
		"base_yield": {"min": 1.0, "max": 2.0},
		"time_to_harvest": {"min": 55, "max": 75},
		"harvest_duration": {"min": 6, "max": 12},
		"maintenance_level": "Low",
		"key_requirements": "Cool weather and rich soil.",
		"spacing": {"min": 30, "max": 45},
		"seed_start_weeks": 4,
		"protected_extension_weeks": 6,
	}
	crop.update(overrides)
	return crop


def test_out_of_range_planting_month_rejected_at_load(tmp_path: Path) -> None:
	_write_dataset(tmp_path, [_crop("kale", planting_months={"temperate": {"optimal": [0, 4]}})])

	with pytest.raises(ValidationError):
		ReferenceDataStore.from_directory(tmp_path)


def test_inverted_base_yield_rejected_at_load(tmp_path: Path) -> None:
	_write_dataset(tmp_path, [_crop("kale", base_yield={"min": 3.0, "max": 1.0})])

	with pytest.raises(ValidationError):
		ReferenceDataStore.from_directory(tmp_path)


def test_duplicate_crop_ids_rejected(tmp_path: Path) -> None:
	_write_dataset(tmp_path, [_crop("kale"), _crop("kale")])

	with pytest.raises(ValueError, match="duplicate crop id"):
		ReferenceDataStore.from_directory(tmp_path)


def test_legacy_yield_factor_file_loads(tmp_path: Path) -> None:
	_write_dataset(
		tmp_path,
		[_crop("kale")],
		yield_factors={
			"climate": {"temperate": {"kale": 1.1}},
			"environment": {"protected": {"factor": 1.3, "variability": 0.1}},
			"experience": {"advanced": 1.2},
		},
	)

	factors = ReferenceDataStore.from_directory(tmp_path).get_yield_factors()

	assert factors.climate_factor("temperate", "kale") == 1.1
	assert factors.environment_factor("protected", "kale") == 1.3
	assert factors.experience_factor("advanced", "kale") == 1.2
