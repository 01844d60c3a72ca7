"""Saved forecast history routes (authenticated)."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from homegrow.auth.dependencies import get_current_user, require_role
from homegrow.database import get_db
from homegrow.models.enums import UserRoleEnum
from homegrow.models.user import User
from homegrow.schemas.forecast import (
	SavedForecastCreate,
	SavedForecastListRead,
	SavedForecastRead,
	SavedForecastSummaryRead,
)
from homegrow.services.history_service import HistoryService

router = APIRouter(prefix="/forecast/history", tags=["history"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="history failure")


@router.get("", response_model=SavedForecastListRead)
async def list_history(
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> SavedForecastListRead:
	records = await HistoryService(db).list_forecasts(user.id)
	return SavedForecastListRead(items=[SavedForecastSummaryRead.model_validate(r) for r in records])


@router.post("", response_model=SavedForecastRead, status_code=status.HTTP_201_CREATED)
async def save_forecast(
	payload: SavedForecastCreate,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> SavedForecastRead:
	try:
		record = await HistoryService(db).save_forecast(user.id, payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return SavedForecastRead.model_validate(record)


@router.get("/users/{user_id}", response_model=SavedForecastListRead)
async def list_user_history(
	user_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	_admin: User = Depends(require_role(UserRoleEnum.admin)),
) -> SavedForecastListRead:
	records = await HistoryService(db).list_forecasts(user_id)
	return SavedForecastListRead(items=[SavedForecastSummaryRead.model_validate(r) for r in records])


@router.get("/{forecast_id}", response_model=SavedForecastRead)
async def get_saved_forecast(
	forecast_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> SavedForecastRead:
	try:
		record = await HistoryService(db).get_forecast(user.id, forecast_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return SavedForecastRead.model_validate(record)


@router.delete("/{forecast_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_forecast(
	forecast_id: uuid.UUID,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> Response:
	try:
		await HistoryService(db).delete_forecast(user.id, forecast_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
