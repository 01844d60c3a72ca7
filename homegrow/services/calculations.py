"""Forecast calculation core — yield, planting calendar, risk and recommendation rules.

Every function here is pure: inputs are immutable reference rows plus request
parameters, outputs are fresh schema objects.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from homegrow.models.enums import (
	EnvironmentEnum,
	ExperienceEnum,
	RiskCategoryEnum,
	SeverityEnum,
	SuitabilityEnum,
)
from homegrow.schemas.forecast import CalendarEntry, Recommendation, YieldRange
from homegrow.schemas.reference import (
	ClimateZoneProfile,
	CropProfile,
	PlantingWindow,
	Risk,
	ValueRange,
	YieldFactorTable,
)

MONTHS = tuple(range(1, 13))
PROTECTED_ENVIRONMENTS = frozenset({EnvironmentEnum.protected, EnvironmentEnum.cooled})
SEVERITY_ORDER: tuple[SeverityEnum, ...] = (SeverityEnum.low, SeverityEnum.medium, SeverityEnum.high)


def round1(value: float) -> float:
	"""Round half-up to one decimal place."""
	return math.floor(value * 10 + 0.5) / 10


# ── Yield ───────────────────────────────────────────────────────────────────


def calculate_yield(
	base_yield: ValueRange,
	climate_id: str,
	environment_id: str,
	yield_factors: YieldFactorTable,
	crop_id: str,
	experience_id: str | None,
) -> YieldRange:
	"""Scale the crop's base yield (kg/m²) by climate, environment and experience factors.

	A factor missing from the table counts as 1.0.
	"""
	multiplier = (
		yield_factors.climate_factor(climate_id, crop_id)
		* yield_factors.environment_factor(environment_id, crop_id)
		* yield_factors.experience_factor(experience_id, crop_id)
	)
	return YieldRange(
		min=round1(base_yield.min * multiplier),
		max=round1(base_yield.max * multiplier),
	)


def scale_yield(per_square_meter: YieldRange, area: float) -> YieldRange:
	return YieldRange(
		min=round1(per_square_meter.min * area),
		max=round1(per_square_meter.max * area),
	)


# ── Planting calendar ───────────────────────────────────────────────────────


def _neighbours(month: int) -> tuple[int, int]:
	previous = 12 if month == 1 else month - 1
	following = 1 if month == 12 else month + 1
	return previous, following


def relax_for_protection(window: PlantingWindow) -> PlantingWindow:
	"""Widen a planting window for protected growing.

	Risky months become suitable, then every remaining month next to an
	optimal or suitable month becomes the new risky fringe.
	"""
	suitable = window.suitable | (window.risky - window.optimal)
	plantable = window.optimal | suitable
	fringe = frozenset(
		month
		for month in MONTHS
		if month not in plantable and any(n in plantable for n in _neighbours(month))
	)
	return PlantingWindow(optimal=window.optimal, suitable=suitable, risky=fringe)


def _classify(month: int, window: PlantingWindow) -> SuitabilityEnum:
	if month in window.optimal:
		return SuitabilityEnum.optimal
	if month in window.suitable:
		return SuitabilityEnum.suitable
	if month in window.risky:
		return SuitabilityEnum.risky
	return SuitabilityEnum.not_recommended


def calculate_planting_calendar(
	planting_months: Mapping[str, PlantingWindow],
	climate_id: str,
	environment: str,
	weather_data: Any = None,
) -> list[CalendarEntry]:
	"""Month-by-month suitability (January first) for one crop in one climate.

	A climate with no planting data marks every month ``not_recommended``.
	``weather_data`` is accepted for future regional refinement and is not
	used yet.
	"""
	window = planting_months.get(climate_id) or PlantingWindow()
	if environment in PROTECTED_ENVIRONMENTS:
		window = relax_for_protection(window)
	return [CalendarEntry(month=month, suitability=_classify(month, window)) for month in MONTHS]


# ── Risk assessment ─────────────────────────────────────────────────────────

RISK_CATEGORY_ALIASES: dict[str, RiskCategoryEnum] = {
	"Temperature Extremes": RiskCategoryEnum.temperature,
	"Cold Sensitivity": RiskCategoryEnum.temperature,
	"Disease Pressure": RiskCategoryEnum.disease,
	"Pest Challenges": RiskCategoryEnum.pest,
	"Pest Vulnerability": RiskCategoryEnum.pest,
	"Pest Issues": RiskCategoryEnum.pest,
	"Moisture Balance": RiskCategoryEnum.moisture,
	"Water Scarcity": RiskCategoryEnum.moisture,
}


@dataclass(frozen=True, slots=True)
class ClimateRule:
	climates: frozenset[str] | None
	delta: int
	description_keywords: tuple[str, ...] = ()

	def matches(self, climate_id: str, description: str) -> bool:
		if self.climates is not None and climate_id not in self.climates:
			return False
		if not self.description_keywords:
			return True
		lowered = description.lower()
		return any(keyword in lowered for keyword in self.description_keywords)


def _rule(climates: Iterable[str] | None, delta: int, *keywords: str) -> ClimateRule:
	"""``climates=None`` matches every climate zone."""
	return ClimateRule(
		climates=None if climates is None else frozenset(climates),
		delta=delta,
		description_keywords=keywords,
	)


# First matching rule per category wins.
CLIMATE_RULES: dict[RiskCategoryEnum, tuple[ClimateRule, ...]] = {
	RiskCategoryEnum.temperature: (
		_rule(["tropical", "subtropical"], -1),
		_rule(["continental", "temperate", "oceanic"], +1),
	),
	RiskCategoryEnum.disease: (
		_rule(["tropical", "subtropical", "oceanic"], +1),
		_rule(["arid", "semiarid"], -1),
	),
	RiskCategoryEnum.pest: (
		_rule(["tropical", "subtropical"], +1),
		_rule(["continental", "temperate"], -1, "aphid"),
		_rule(None, -1, "mite"),
	),
	RiskCategoryEnum.moisture: (
		_rule(["arid", "semiarid"], +1),
		_rule(["oceanic", "tropical"], -1),
	),
}


def categorize_risk(category: str) -> RiskCategoryEnum:
	return RISK_CATEGORY_ALIASES.get(category, RiskCategoryEnum.other)


def shift_severity(severity: SeverityEnum, delta: int) -> SeverityEnum:
	"""Move ``delta`` steps along low → medium → high, saturating at both ends."""
	index = SEVERITY_ORDER.index(SeverityEnum(severity)) + delta
	return SEVERITY_ORDER[max(0, min(len(SEVERITY_ORDER) - 1, index))]


def climate_delta(risk: Risk, climate_id: str) -> int:
	for rule in CLIMATE_RULES.get(categorize_risk(risk.category), ()):
		if rule.matches(climate_id, risk.description):
			return rule.delta
	return 0


def environment_delta(risk: Risk, environment: str) -> int:
	"""Shelter lowers weather-driven risks; a closed greenhouse traps humidity."""
	if environment not in PROTECTED_ENVIRONMENTS:
		return 0
	names_disease = "Disease" in risk.category
	names_pest = "Pest" in risk.category
	if not names_disease and not names_pest:
		return -1
	if names_disease and environment == EnvironmentEnum.protected:
		return +1
	return 0


def assess_risk_factors(
	crop_risks: Iterable[Risk],
	climate_id: str,
	environment: str,
	weather_data: Any = None,
) -> list[Risk]:
	"""Adjust each risk's severity for climate, then environment.

	Returns copies; the reference risks are never modified.  ``weather_data``
	is reserved for regional refinement and not used yet.
	"""
	assessed: list[Risk] = []
	for risk in crop_risks:
		severity = shift_severity(risk.severity, climate_delta(risk, climate_id))
		severity = shift_severity(severity, environment_delta(risk, environment))
		assessed.append(risk.model_copy(update={"severity": severity}))
	return assessed


# ── Recommendations ─────────────────────────────────────────────────────────

BEGINNER_FALLBACK = "Start with a smaller growing area and focus on proper watering and pest monitoring."
ADVANCED_FALLBACK = "Consider succession planting every 2-3 weeks for continuous harvest."


def _format_number(value: float) -> str:
	return f"{value:g}"


def generate_recommendations(
	crop: CropProfile,
	climate: ClimateZoneProfile,
	environment: str,
	risk_factors: Iterable[Risk],
	experience: str | None,
) -> list[Recommendation]:
	recommendations: list[Recommendation] = []

	varieties = crop.recommended_varieties.get(climate.id)
	if varieties:
		recommendations.append(
			Recommendation(
				category="Variety Selection",
				text=f"Consider {climate.name}-appropriate varieties like {', '.join(varieties)}.",
			)
		)

	if environment == EnvironmentEnum.open:
		recommendations.append(
			Recommendation(
				category="Planting Strategy",
				text=(
					f"Start seeds indoors {crop.seed_start_weeks} weeks before outdoor "
					"planting date for stronger transplants."
				),
			)
		)
	elif environment in PROTECTED_ENVIRONMENTS:
		recommendations.append(
			Recommendation(
				category="Planting Strategy",
				text=(
					f"In your {environment} environment, you can extend growing seasons "
					f"by {crop.protected_extension_weeks} weeks."
				),
			)
		)

	recommendations.append(
		Recommendation(
			category="Spacing",
			text=(
				f"Plant {_format_number(crop.spacing.min)}-{_format_number(crop.spacing.max)} cm "
				"apart for optimal growth and air circulation."
			),
		)
	)

	if experience == ExperienceEnum.beginner:
		recommendations.append(
			Recommendation(category="Beginner Tips", text=crop.beginner_tips or BEGINNER_FALLBACK)
		)
	elif experience == ExperienceEnum.advanced:
		recommendations.append(
			Recommendation(category="Advanced Techniques", text=crop.advanced_tips or ADVANCED_FALLBACK)
		)

	for risk in risk_factors:
		if risk.mitigation:
			recommendations.append(
				Recommendation(category=f"{risk.category} Mitigation", text=risk.mitigation)
			)

	return recommendations
