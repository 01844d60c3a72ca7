"""Per-user forecast history persistence."""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homegrow.models.forecast import SavedForecast
from homegrow.schemas.forecast import SavedForecastCreate

logger = structlog.get_logger("homegrow.history")


class HistoryService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def save_forecast(self, user_id: uuid.UUID, payload: SavedForecastCreate) -> SavedForecast:
		record = SavedForecast(
			user_id=user_id,
			name=payload.name,
			params=payload.params.model_dump(mode="json"),
			results=payload.results,
		)
		self.db.add(record)
		await self.db.flush()
		await self.db.refresh(record)
		logger.info("forecast_saved", user_id=str(user_id), forecast_id=str(record.id))
		return record

	async def list_forecasts(self, user_id: uuid.UUID) -> list[SavedForecast]:
		rows = await self.db.execute(
			select(SavedForecast)
			.where(SavedForecast.user_id == user_id)
			.order_by(SavedForecast.created_at.desc())
		)
		return list(rows.scalars().all())

	async def get_forecast(self, user_id: uuid.UUID, forecast_id: uuid.UUID) -> SavedForecast:
		row = await self.db.execute(select(SavedForecast).where(SavedForecast.id == forecast_id))
		record = row.scalar_one_or_none()
		if record is None or record.user_id != user_id:
			raise LookupError(f"Forecast {forecast_id} not found")
		return record

	async def delete_forecast(self, user_id: uuid.UUID, forecast_id: uuid.UUID) -> None:
		record = await self.get_forecast(user_id, forecast_id)
		await self.db.delete(record)
		await self.db.flush()
		logger.info("forecast_deleted", user_id=str(user_id), forecast_id=str(forecast_id))
