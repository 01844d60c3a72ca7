"""Account registration, credential checks, token issuing and preference updates."""

from __future__ import annotations

import uuid

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from homegrow.auth.dependencies import hash_password, resolve_user, verify_password
from homegrow.auth.jwt import AuthError, create_access_token, create_refresh_token, decode_token
from homegrow.models.user import User
from homegrow.schemas.auth import (
	LoginRequest,
	RegisterRequest,
	TokenResponse,
	UserPreferences,
	UserRead,
)

logger = structlog.get_logger("homegrow.auth")


class AuthService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def register(self, payload: RegisterRequest) -> TokenResponse:
		existing = await self.db.execute(select(User).where(User.email == payload.email))
		if existing.scalar_one_or_none() is not None:
			raise ValueError("Email already in use")

		user = User(
			name=payload.name,
			email=payload.email,
			hashed_password=hash_password(payload.password),
			preferences=UserPreferences().model_dump(mode="json"),
		)
		self.db.add(user)
		try:
			await self.db.flush()
		except IntegrityError as exc:
			# Lost a race with a concurrent registration for the same email.
			await self.db.rollback()
			raise ValueError("Email already in use") from exc
		await self.db.refresh(user)
		logger.info("user_registered", user_id=str(user.id))
		return self.issue_tokens(user)

	async def login(self, payload: LoginRequest) -> TokenResponse:
		row = await self.db.execute(select(User).where(User.email == payload.email))
		user = row.scalar_one_or_none()
		if user is None or not user.is_active or not verify_password(payload.password, user.hashed_password):
			logger.info("login_rejected", email=payload.email)
			raise AuthError(code="invalid_credentials", detail="Invalid credentials")
		return self.issue_tokens(user)

	async def refresh(self, refresh_token: str) -> TokenResponse:
		claims = decode_token(refresh_token, expected_type="refresh")
		try:
			user_id = uuid.UUID(str(claims["sub"]))
		except ValueError as exc:
			raise AuthError(code="token_invalid", detail="Token subject is invalid") from exc
		user = await resolve_user(self.db, user_id)
		return self.issue_tokens(user)

	async def update_preferences(self, user: User, preferences: UserPreferences) -> User:
		user.preferences = preferences.model_dump(mode="json")
		await self.db.flush()
		await self.db.refresh(user)
		return user

	@staticmethod
	def issue_tokens(user: User) -> TokenResponse:
		subject = str(user.id)
		role = str(user.role)
		return TokenResponse(
			access_token=create_access_token(subject, role),
			refresh_token=create_refresh_token(subject, role),
			user=UserRead.model_validate(user),
		)
