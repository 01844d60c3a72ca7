"""JWT access/refresh token issuing and validation for gardener accounts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Literal

from jose import ExpiredSignatureError, JWTError, jwt

from homegrow.config import get_settings

TokenType = Literal["access", "refresh"]


@dataclass(slots=True)
class AuthError(Exception):
	"""Structured authentication error for consistent mapping at the edge."""

	code: str
	detail: str
	status_code: int = 401


def _encode(user_id: str, role: str, token_type: TokenType, ttl: timedelta) -> str:
	settings = get_settings()
	issued = datetime.now(UTC)
	claims: dict[str, Any] = {
		"sub": user_id,
		"role": role,
		"typ": token_type,
		"iat": int(issued.timestamp()),
		"exp": int((issued + ttl).timestamp()),
	}
	return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_access_token(user_id: str, role: str = "user", expires_minutes: int | None = None) -> str:
	minutes = expires_minutes or get_settings().jwt_access_token_expire_minutes
	return _encode(user_id, role, "access", timedelta(minutes=minutes))


def create_refresh_token(user_id: str, role: str = "user", expires_minutes: int | None = None) -> str:
	minutes = expires_minutes or get_settings().jwt_refresh_token_expire_minutes
	return _encode(user_id, role, "refresh", timedelta(minutes=minutes))


def decode_token(token: str, expected_type: TokenType | None = None) -> dict[str, Any]:
	"""Verify signature, expiry, subject and token type; return the claims."""
	settings = get_settings()
	try:
		claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
	except ExpiredSignatureError as exc:
		raise AuthError(code="token_expired", detail="Token expired") from exc
	except JWTError as exc:
		raise AuthError(code="token_invalid", detail="Invalid token") from exc

	user_id = claims.get("sub")
	if not isinstance(user_id, str) or not user_id:
		raise AuthError(code="token_invalid", detail="Token subject is missing")

	if expected_type is not None and claims.get("typ") != expected_type:
		raise AuthError(code="token_type_invalid", detail=f"Expected {expected_type} token")

	return claims
