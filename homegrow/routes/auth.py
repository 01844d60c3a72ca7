"""Account routes — register, login, token refresh, profile and preferences."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from homegrow.auth.dependencies import auth_http_error, get_current_user
from homegrow.auth.jwt import AuthError
from homegrow.database import get_db
from homegrow.models.user import User
from homegrow.schemas.auth import (
	LoginRequest,
	RefreshRequest,
	RegisterRequest,
	TokenResponse,
	UserPreferences,
	UserRead,
)
from homegrow.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, HTTPException):
		return exc
	if isinstance(exc, AuthError):
		return auth_http_error(exc)
	if isinstance(exc, ValueError):
		return HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail={"error": "invalid_request", "message": str(exc)},
		)
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="auth failure")


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
	try:
		return await AuthService(db).register(payload)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
	try:
		return await AuthService(db).login(payload)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/refresh", response_model=TokenResponse)
async def refresh(payload: RefreshRequest, db: AsyncSession = Depends(get_db)) -> TokenResponse:
	try:
		return await AuthService(db).refresh(payload.refresh_token)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/me", response_model=UserRead)
async def me(user: User = Depends(get_current_user)) -> UserRead:
	return UserRead.model_validate(user)


@router.post("/logout")
async def logout(_user: User = Depends(get_current_user)) -> dict[str, str]:
	# Tokens are stateless; the client discards them.
	return {"status": "logged_out"}


@router.put("/preferences", response_model=UserRead)
async def update_preferences(
	payload: UserPreferences,
	db: AsyncSession = Depends(get_db),
	user: User = Depends(get_current_user),
) -> UserRead:
	try:
		updated = await AuthService(db).update_preferences(user, payload)
	except Exception as exc:
		raise _map_error(exc) from exc
	return UserRead.model_validate(updated)
