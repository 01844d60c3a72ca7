"""Forecast orchestration — runs the calculation core for one crop or a batch."""

from __future__ import annotations

import structlog

from homegrow.config import get_settings
from homegrow.models.enums import ExperienceEnum
from homegrow.schemas.forecast import (
	CropForecastOutcome,
	CropProfileSummary,
	ForecastError,
	ForecastParams,
	ForecastRequest,
	ForecastResponse,
	ForecastResult,
	ProductionMetrics,
)
from homegrow.schemas.weather import WeatherProfile
from homegrow.services import calculations
from homegrow.services.formatters import format_forecast_response, summarize_planting_windows
from homegrow.services.reference_data import ReferenceDataStore, ReferenceNotFoundError
from homegrow.services.weather_service import WeatherService

logger = structlog.get_logger("homegrow.forecast")


class ForecastService:
	def __init__(self, store: ReferenceDataStore):
		self.store = store
		self.settings = get_settings()

	def calculate_forecast(self, params: ForecastParams) -> ForecastResult:
		"""Full forecast for a single crop.

		Raises ``ReferenceNotFoundError`` when the crop or climate id is unknown;
		nothing is retried and no partial result is returned.
		"""
		crop = self.store.get_crop(params.crop)
		climate = self.store.get_climate_zone(params.climate)
		yield_factors = self.store.get_yield_factors()

		per_square_meter = calculations.calculate_yield(
			crop.base_yield,
			climate.id,
			params.environment,
			yield_factors,
			crop.id,
			params.experience,
		)
		total_yield = calculations.scale_yield(per_square_meter, params.area)

		planting_calendar = calculations.calculate_planting_calendar(
			crop.planting_months,
			climate.id,
			params.environment,
			params.weather_data,
		)
		risk_factors = calculations.assess_risk_factors(
			crop.risks,
			climate.id,
			params.environment,
			params.weather_data,
		)
		recommendations = calculations.generate_recommendations(
			crop,
			climate,
			params.environment,
			risk_factors,
			params.experience,
		)

		return ForecastResult(
			crop_profile=CropProfileSummary(
				name=crop.name,
				scientific_name=crop.scientific_name,
				life_cycle=crop.life_cycle,
				growth_pattern=crop.growth_pattern,
				yield_per_square_meter=per_square_meter,
				key_requirements=crop.key_requirements,
			),
			planting_calendar=planting_calendar,
			planting_windows=summarize_planting_windows(planting_calendar),
			production_metrics=ProductionMetrics(
				total_yield=total_yield,
				time_to_harvest=crop.time_to_harvest,
				harvest_duration=crop.harvest_duration,
				maintenance_level=crop.maintenance_level,
			),
			risk_factors=risk_factors,
			recommendations=recommendations,
		)

	def forecast_crops(
		self,
		request: ForecastRequest,
		weather_data: WeatherProfile | None = None,
	) -> dict[str, CropForecastOutcome]:
		"""Forecast every requested crop independently.

		A crop that cannot be forecast (unknown id, bad reference values) is
		reported in its own ``error`` field while the others still compute.
		An unknown climate raises, since every crop would fail the same way.
		"""
		self.store.get_climate_zone(request.climate)
		experience = request.experience or ExperienceEnum(self.settings.default_experience)
		crop_ids = request.crops or list(self.settings.default_crops)

		outcomes: dict[str, CropForecastOutcome] = {}
		for crop_id in crop_ids:
			params = ForecastParams(
				crop=crop_id,
				climate=request.climate,
				environment=request.environment,
				area=request.area,
				experience=experience,
				weather_data=weather_data,
			)
			try:
				outcomes[crop_id] = CropForecastOutcome(forecast=self.calculate_forecast(params))
			except (LookupError, ValueError) as exc:
				logger.warning("crop_forecast_failed", crop=crop_id, error=str(exc))
				code = f"{exc.kind}_not_found" if isinstance(exc, ReferenceNotFoundError) else "forecast_failed"
				outcomes[crop_id] = CropForecastOutcome(error=ForecastError(error=code, message=str(exc)))
		return outcomes

	def generate(self, request: ForecastRequest) -> ForecastResponse:
		"""Resolve regional weather (best effort), forecast all crops, wrap in the envelope."""
		weather: WeatherProfile | None = None
		if request.country and request.region:
			try:
				weather = WeatherService(self.store).get_regional_weather(request.country, request.region)
			except LookupError as exc:
				logger.info(
					"weather_unavailable",
					country=request.country,
					region=request.region,
					error=str(exc),
				)

		outcomes = self.forecast_crops(request, weather)
		failed = [crop_id for crop_id, outcome in outcomes.items() if outcome.error is not None]
		logger.info(
			"forecast_generated",
			climate=request.climate,
			environment=request.environment.value,
			crops=len(outcomes),
			failed=failed,
		)
		params = request.model_dump(mode="json", exclude={"crops"})
		params["crops"] = list(outcomes)
		params["experience"] = str(request.experience or self.settings.default_experience)
		return format_forecast_response(outcomes, params, weather)
