"""Gemini Gateway — FastAPI Application.

This module is the single entry point for the web application.  It defines
the FastAPI ``app`` instance, the three generation routes, and the
``main()`` CLI function that launches the uvicorn server.

Architecture
------------
The application is a stateless pass-through to the Gemini API:

- **Configuration** is read once from the environment (see
  :mod:`geminigate.core.config`).
- **Generation** is delegated to :class:`~geminigate.core.provider.GeminiProvider`,
  created by the lifespan handler and injected into every route through
  the :func:`get_provider` dependency.
- **Uploads** are written to a per-request temporary file that is removed
  when the request ends (:mod:`geminigate.api.uploads`).
- **Errors** are rendered as ``{success: false, message, data: null}``
  envelopes by the handlers in :mod:`geminigate.api.errors`.

Endpoints
---------
========  ============================  ====================================
Method    Path                          Purpose
========  ============================  ====================================
POST      ``/generate-text``            Reply to a text prompt
POST      ``/generate-from-image``      Describe an uploaded image
POST      ``/generate-from-document``   Describe an uploaded document
========  ============================  ====================================

Usage
-----
CLI (installed entry point)::

    geminigate

Direct invocation::

    python -m geminigate.api.main
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from geminigate import __version__
from geminigate.api.errors import MissingUploadError, register_error_handlers
from geminigate.api.models import Envelope, OutputResponse
from geminigate.api.payloads import (
    DEFAULT_DOCUMENT_PROMPT,
    DEFAULT_IMAGE_PROMPT,
    build_document_part,
    extract_text_prompt,
    resolve_prompt,
)
from geminigate.api.uploads import stored_upload
from geminigate.core.config import GatewayConfig, config
from geminigate.core.provider import GeminiProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Application lifecycle — provider setup.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the shared :class:`GeminiProvider` on startup.

    The SDK client inside the provider is built lazily, so startup does not
    need credentials.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.provider = GeminiProvider(config)
    logger.info(f"Server running in port {config.app_port} (model: {config.gemini_model})")

    yield


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Gemini Gateway",
    description="Forwards text prompts, images and documents to Gemini.",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# ---------------------------------------------------------------------------
# Dependencies.
# ---------------------------------------------------------------------------


def get_config() -> GatewayConfig:
    """Return the application configuration."""
    return config


def get_provider(request: Request) -> GeminiProvider:
    """Return the provider created by :func:`lifespan`."""
    return request.app.state.provider


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.post("/generate-text", response_model=Envelope)
async def generate_text(
    request: Request,
    provider: GeminiProvider = Depends(get_provider),
) -> Envelope:
    """Reply to a text prompt.

    The body is read as raw JSON rather than through a Pydantic model so that
    a missing or non-string ``prompt`` yields the 400 envelope instead of a
    422 validation error.

    Args:
        request: Incoming request; its body must be ``{"prompt": "<text>"}``.
        provider: Injected Gemini provider.

    Returns:
        Success envelope whose ``data`` is the model's text.

    Raises:
        PromptValidationError: 400 for a missing, empty or non-string prompt.
        ProviderError: 500 when the Gemini call fails.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        payload = None

    prompt = extract_text_prompt(payload)
    text = await provider.generate_text(prompt)
    return Envelope.ok(text)


@app.post("/generate-from-image", response_model=OutputResponse)
async def generate_from_image(
    image: UploadFile | None = File(default=None),
    prompt: str | None = Form(default=None),
    provider: GeminiProvider = Depends(get_provider),
    settings: GatewayConfig = Depends(get_config),
) -> OutputResponse:
    """Describe an uploaded image via the Gemini file store.

    Args:
        image: Multipart file field ``image``.
        prompt: Optional instruction; defaults to ``"Describe this uploaded image"``.
        provider: Injected Gemini provider.
        settings: Injected configuration (uploads directory).

    Returns:
        ``{"output": <text>}``.

    Raises:
        MissingUploadError: 400 when no ``image`` field was sent.
        ProviderError: 500 when the upload or the generation fails.
    """
    if image is None:
        raise MissingUploadError("File image wajib diunggah!")

    prompt = resolve_prompt(prompt, DEFAULT_IMAGE_PROMPT)

    async with stored_upload(image, settings.uploads_dir) as stored:
        text = await provider.generate_from_file(stored.path, stored.mime_type, prompt)

    return OutputResponse(output=text)


@app.post("/generate-from-document", response_model=OutputResponse)
async def generate_from_document(
    document: UploadFile | None = File(default=None),
    prompt: str | None = Form(default=None),
    provider: GeminiProvider = Depends(get_provider),
    settings: GatewayConfig = Depends(get_config),
) -> OutputResponse:
    """Describe an uploaded document sent inline to Gemini.

    Args:
        document: Multipart file field ``document``.
        prompt: Optional instruction; defaults to ``"Describe this uploaded document"``.
        provider: Injected Gemini provider.
        settings: Injected configuration (uploads directory).

    Returns:
        ``{"output": <text>}``.

    Raises:
        MissingUploadError: 400 when no ``document`` field was sent.
        ProviderError: 500 when the generation fails.
    """
    if document is None:
        raise MissingUploadError("File document wajib diunggah!")

    prompt = resolve_prompt(prompt, DEFAULT_DOCUMENT_PROMPT)

    async with stored_upload(document, settings.uploads_dir) as stored:
        data = await stored.read_bytes()
        part = build_document_part(data, stored.mime_type)
        text = await provider.generate_from_inline(part, prompt)

    return OutputResponse(output=text)


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~geminigate.core.config.config` (which
    loads ``APP_HOST`` and ``APP_PORT``).  Defaults to ``0.0.0.0:3001``.

    This function is registered as the ``geminigate`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    uvicorn.run(
        "geminigate.api.main:app",
        host=config.app_host,
        port=config.app_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
