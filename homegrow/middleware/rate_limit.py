"""Redis-backed fixed-window rate limiting per client address."""

from __future__ import annotations

import time

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from homegrow.auth.dependencies import client_address, extract_identity_hint
from homegrow.config import get_settings

AUTH_PATH_PREFIX = "/api/v1/auth"

logger = structlog.get_logger("homegrow.rate_limit")


class RateLimitMiddleware(BaseHTTPMiddleware):
	"""Counts requests per address and window in Redis.

	Auth endpoints get a separate, stricter quota. Once an address exceeds a
	quota it is blocked for ``rate_limit_block_seconds`` regardless of window.
	Without a Redis client on ``app.state`` every request passes through.
	"""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		path = request.url.path
		if self._is_bypass_path(path):
			return await call_next(request)

		redis_client = getattr(request.app.state, "redis", None)
		if redis_client is None:
			return await call_next(request)

		settings = get_settings()
		scope = "auth" if path.startswith(AUTH_PATH_PREFIX) else "api"
		quota = settings.rate_limit_auth_max_requests if scope == "auth" else settings.rate_limit_max_requests
		window = settings.rate_limit_window_seconds
		address = client_address(request, settings.trusted_proxies)

		block_key = f"ratelimit:block:{scope}:{address}"
		if await redis_client.get(block_key) is not None:
			return self._limited_response(scope, quota, window)

		identity = extract_identity_hint(request)
		bucket = int(time.time()) // window
		key = f"ratelimit:{scope}:{address}:{identity}:{bucket}"
		current = await redis_client.incr(key)
		if current == 1:
			await redis_client.expire(key, window + 5)

		if current > quota:
			await redis_client.setex(block_key, settings.rate_limit_block_seconds, "1")
			logger.warning("rate_limited", scope=scope, client=address, count=current, quota=quota)
			return self._limited_response(scope, quota, window)

		return await call_next(request)

	@staticmethod
	def _limited_response(scope: str, quota: int, window: int) -> JSONResponse:
		message = (
			"Too many authentication attempts, please try again later"
			if scope == "auth"
			else "Too many requests, please try again later"
		)
		return JSONResponse(
			status_code=429,
			content={
				"detail": {
					"error": "rate_limited",
					"message": message,
					"scope": scope,
					"quota": quota,
					"window_seconds": window,
				}
			},
		)

	@staticmethod
	def _is_bypass_path(path: str) -> bool:
		return path.startswith("/docs") or path.startswith("/redoc") or path.startswith("/openapi") or path.startswith("/health")
