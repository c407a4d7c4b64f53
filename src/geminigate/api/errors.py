"""Client-facing errors and their envelope rendering.

Every error raised while handling a request ends up as an
:class:`~geminigate.api.models.Envelope` with ``success=False`` and
``data=None``.  :func:`register_error_handlers` wires the handlers into the
FastAPI application:

- :class:`GatewayError` subclasses keep their own status and message.
- :class:`~geminigate.core.provider.ProviderError` is a 500 with the generic
  message; the provider has already logged the detail.
- Anything else (disk errors while storing an upload, for instance) is
  logged with its traceback and rendered as the generic 500 envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from geminigate.api.models import SERVER_ERROR_MESSAGE, Envelope
from geminigate.core.errors import GatewayError
from geminigate.core.provider import ProviderError

logger = logging.getLogger(__name__)

__all__ = [
    "GatewayError",
    "MissingUploadError",
    "PromptValidationError",
    "register_error_handlers",
]


class PromptValidationError(GatewayError):
    """The ``prompt`` field is missing, empty, or not a string."""

    status_code = 400


class MissingUploadError(GatewayError):
    """A multipart route was called without its file field."""

    status_code = 400


def _envelope_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=Envelope.failure(message).model_dump(),
    )


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return _envelope_response(exc.status_code, exc.message)


async def provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    # Details were already logged by the provider; the client only gets the
    # generic message.
    return _envelope_response(exc.status_code, SERVER_ERROR_MESSAGE)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    return _envelope_response(500, SERVER_ERROR_MESSAGE)


def register_error_handlers(app: FastAPI) -> None:
    """Attach the envelope-rendering exception handlers to *app*."""
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(ProviderError, provider_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
