"""Presentation helpers — response envelope and human-readable planting windows."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from homegrow.models.enums import SuitabilityEnum
from homegrow.schemas.forecast import (
	CalendarEntry,
	CropForecastOutcome,
	ForecastMeta,
	ForecastResponse,
	PlantingWindows,
)
from homegrow.schemas.weather import WeatherProfile

# English regardless of LC_TIME.
MONTH_NAMES = (
	"January",
	"February",
	"March",
	"April",
	"May",
	"June",
	"July",
	"August",
	"September",
	"October",
	"November",
	"December",
)


def find_periods(entries: Sequence[CalendarEntry], suitability: SuitabilityEnum) -> list[tuple[int, int]]:
	"""Runs of consecutive months with ``suitability`` as (start, end) pairs.

	A run touching both December and January is merged into one period that
	wraps the year boundary, e.g. ``(11, 2)``.
	"""
	periods: list[tuple[int, int]] = []
	start: int | None = None
	previous: int | None = None
	for entry in entries:
		if entry.suitability == suitability:
			if start is None:
				start = entry.month
			previous = entry.month
		elif start is not None and previous is not None:
			periods.append((start, previous))
			start = None
	if start is not None and previous is not None:
		periods.append((start, previous))

	if len(periods) > 1 and periods[0][0] == 1 and periods[-1][1] == 12:
		first = periods.pop(0)
		last = periods.pop()
		periods.append((last[0], first[1]))
	return periods


def describe_period(period: tuple[int, int]) -> str:
	start, end = period
	if start == end:
		return MONTH_NAMES[start - 1]
	return f"{MONTH_NAMES[start - 1]} to {MONTH_NAMES[end - 1]}"


def summarize_planting_windows(entries: Sequence[CalendarEntry]) -> PlantingWindows:
	return PlantingWindows(
		optimal=[describe_period(p) for p in find_periods(entries, SuitabilityEnum.optimal)],
		suitable=[describe_period(p) for p in find_periods(entries, SuitabilityEnum.suitable)],
		risky=[describe_period(p) for p in find_periods(entries, SuitabilityEnum.risky)],
	)


def format_forecast_response(
	outcomes: dict[str, CropForecastOutcome],
	params: dict[str, Any],
	weather: WeatherProfile | None = None,
) -> ForecastResponse:
	return ForecastResponse(
		meta=ForecastMeta(generated=datetime.now(UTC), params=params, weather=weather),
		crops=outcomes,
	)
