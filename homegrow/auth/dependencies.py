"""Authentication dependencies — get_current_user, require_role, password hashing."""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Callable

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from homegrow.auth.jwt import AuthError, decode_token
from homegrow.database import get_db
from homegrow.models.enums import UserRoleEnum
from homegrow.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def auth_http_error(exc: AuthError) -> HTTPException:
	return HTTPException(
		status_code=exc.status_code,
		detail={"error": exc.code, "message": exc.detail},
	)


def hash_password(plaintext: str) -> str:
	return pwd_context.hash(plaintext)


def verify_password(plaintext: str, hashed: str) -> bool:
	try:
		return pwd_context.verify(plaintext, hashed)
	except ValueError:
		return False


def client_address(request: Request, trusted_proxies: Iterable[str] = ()) -> str:
	"""Peer address of the request.

	``X-Forwarded-For`` is only read when the direct peer is a configured
	proxy; the right-most hop that is not itself a trusted proxy is the client.
	"""
	peer = request.client.host if request.client is not None else "unknown"
	trusted = set(trusted_proxies)
	if peer not in trusted:
		return peer
	forwarded = request.headers.get("x-forwarded-for", "")
	hops = [hop.strip() for hop in forwarded.split(",") if hop.strip()]
	for hop in reversed(hops):
		if hop not in trusted:
			return hop
	return peer


def extract_identity_hint(request: Request) -> str:
	auth_header = request.headers.get("authorization", "")
	if auth_header.lower().startswith("bearer "):
		return "jwt"
	return "anonymous"


async def resolve_user(db: AsyncSession, user_id: uuid.UUID) -> User:
	row = await db.execute(select(User).where(User.id == user_id))
	user = row.scalar_one_or_none()
	if user is None or not user.is_active:
		raise auth_http_error(AuthError(code="user_invalid", detail="User is not active"))
	return user


async def _resolve_user_from_token(
	db: AsyncSession,
	credentials: HTTPAuthorizationCredentials | None,
) -> User:
	if credentials is None or credentials.scheme.lower() != "bearer":
		raise auth_http_error(AuthError(code="auth_required", detail="Not authorized to access this route"))

	try:
		claims = decode_token(credentials.credentials, expected_type="access")
		user_id = uuid.UUID(str(claims["sub"]))
	except AuthError as exc:
		raise auth_http_error(exc) from exc
	except (ValueError, KeyError) as exc:
		raise auth_http_error(AuthError(code="token_invalid", detail="Token subject is invalid")) from exc

	return await resolve_user(db, user_id)


async def get_current_user(
	request: Request,
	db: AsyncSession = Depends(get_db),
) -> User:
	credentials = await bearer_scheme(request)
	return await _resolve_user_from_token(db, credentials)


def require_role(*allowed: UserRoleEnum) -> Callable[[User], User]:
	allowed_set = set(allowed)

	async def dependency(current_user: User = Depends(get_current_user)) -> User:
		if current_user.role not in allowed_set:
			raise HTTPException(
				status_code=status.HTTP_403_FORBIDDEN,
				detail={"error": "forbidden", "message": "Insufficient role"},
			)
		return current_user

	return dependency
