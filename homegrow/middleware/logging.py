"""structlog setup for the API process and the per-request access log."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from homegrow.auth.dependencies import client_address
from homegrow.config import LogFormat, Settings, get_settings

REQUEST_ID_HEADER = "x-request-id"

_configured = False


def _renderer(settings: Settings, log_level: int) -> Any:
	if settings.log_format == LogFormat.console:
		logging.basicConfig(level=log_level)
		return structlog.dev.ConsoleRenderer()
	logging.basicConfig(level=log_level, format="%(message)s")
	return structlog.processors.JSONRenderer()


def configure_structured_logging() -> None:
	"""Route structlog events through the configured renderer at ``settings.log_level``.

	Called from the lifespan; repeated calls are ignored.
	"""
	global _configured
	if _configured:
		return

	settings = get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	structlog.configure(
		processors=[
			structlog.contextvars.merge_contextvars,
			structlog.processors.add_log_level,
			structlog.processors.TimeStamper(fmt="iso", utc=True),
			structlog.processors.format_exc_info,
			_renderer(settings, log_level),
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""One ``http_request`` event per request, tagged with a request ID.

	The ID is taken from the incoming header when present and echoed back on
	the response so gardeners' bug reports can be matched to log lines.
	"""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
		request.state.request_id = request_id
		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id)

		log = structlog.get_logger("homegrow.request").bind(
			method=request.method,
			path=request.url.path,
			client=client_address(request, get_settings().trusted_proxies),
		)
		started = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			log.exception("http_request_failed", duration_ms=_elapsed_ms(started), error=str(exc))
			raise

		response.headers[REQUEST_ID_HEADER] = request_id
		log.info("http_request", status_code=response.status_code, duration_ms=_elapsed_ms(started))
		return response


def _elapsed_ms(started: float) -> float:
	return round((time.perf_counter() - started) * 1000.0, 2)
