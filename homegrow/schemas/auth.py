"""Pydantic schemas for registration, login, tokens and user preferences."""

from __future__ import annotations

import re
import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from homegrow.models.enums import EnvironmentEnum, UserRoleEnum

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _normalize_email(value: str) -> str:
	value = value.strip().lower()
	if not _EMAIL_PATTERN.match(value):
		raise ValueError("Email is invalid")
	return value


class UserPreferences(BaseModel):
	default_country: str | None = None
	default_region: str | None = None
	default_climate: str | None = None
	default_environment: EnvironmentEnum | None = None
	default_area: float | None = Field(default=None, gt=0)
	preferred_crops: list[str] = Field(default_factory=list)


class RegisterRequest(BaseModel):
	name: str = Field(min_length=2, max_length=50)
	email: str = Field(max_length=320)
	password: str = Field(min_length=6, max_length=72)

	@field_validator("email")
	@classmethod
	def _validate_email(cls, value: str) -> str:
		return _normalize_email(value)

	@field_validator("password")
	@classmethod
	def _validate_password(cls, value: str) -> str:
		if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
			raise ValueError("Password must contain at least one letter and one number")
		return value


class LoginRequest(BaseModel):
	email: str = Field(max_length=320)
	password: str = Field(min_length=1, max_length=72)

	@field_validator("email")
	@classmethod
	def _validate_email(cls, value: str) -> str:
		return _normalize_email(value)


class RefreshRequest(BaseModel):
	refresh_token: str = Field(min_length=1)


class UserRead(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: uuid.UUID
	name: str
	email: str
	role: UserRoleEnum
	preferences: UserPreferences = Field(default_factory=UserPreferences)
	created_at: datetime

	@field_validator("preferences", mode="before")
	@classmethod
	def _default_preferences(cls, value: object) -> object:
		return {} if value is None else value


class TokenResponse(BaseModel):
	access_token: str
	refresh_token: str
	token_type: str = "bearer"
	user: UserRead
