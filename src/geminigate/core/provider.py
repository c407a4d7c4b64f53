"""Gemini provider client for the Gemini Gateway.

This module provides :class:`GeminiProvider`, the single point of contact
with the Google Gemini API.  Route handlers never touch the SDK directly;
they receive a provider instance through FastAPI dependency injection and
call one of its three coroutine methods.

Key Responsibilities
--------------------
- **Lazy client creation** — the ``google-genai`` client is only built on
  first use, so the application starts (and tests run) without credentials.
- **Text generation** — a prompt plus the configured system instruction.
- **File-store generation** — upload a local file to the Gemini file store,
  then generate with a reference to the uploaded file.
- **Inline generation** — send raw document bytes inline with the prompt.
- **Error wrapping** — every SDK or network failure is logged with its
  traceback and re-raised as :class:`ProviderError`.

Usage
-----
::

    from geminigate.core.config import config
    from geminigate.core.provider import GeminiProvider

    provider = GeminiProvider(config)
    text = await provider.generate_text("hello")
"""

from __future__ import annotations

import logging
from pathlib import Path

from google import genai
from google.genai import types

from geminigate.core.config import GatewayConfig
from geminigate.core.errors import GatewayError

logger = logging.getLogger(__name__)


class ProviderError(GatewayError):
    """Raised when the Gemini API call fails for any reason.

    Maps to HTTP 500.  The original exception is chained as ``__cause__``.
    No distinction is made between transient and permanent failures.
    """

    status_code = 500


class GeminiProvider:
    """Async wrapper around the ``google-genai`` client.

    Attributes:
        _config (GatewayConfig):
            Application configuration — model identifier, API key and system
            instruction are read from it.
        _client (genai.Client | None):
            The SDK client, or ``None`` until first use.
    """

    def __init__(self, config: GatewayConfig, client: genai.Client | None = None) -> None:
        """Initialise the provider.

        Args:
            config: Application configuration instance.
            client: Optional pre-built SDK client.  When omitted, one is
                created lazily from ``config.gemini_api_key``.
        """
        self._config = config
        self._client = client

    # -- Properties ---------------------------------------------------------

    @property
    def client(self) -> genai.Client:
        """Return the SDK client, creating it on first access."""
        if self._client is None:
            logger.info(f"Creating Gemini client for model {self._config.gemini_model}")
            self._client = genai.Client(api_key=self._config.gemini_api_key)
        return self._client

    @property
    def model(self) -> str:
        """Gemini model identifier used for every call."""
        return self._config.gemini_model

    # -- Public interface ---------------------------------------------------

    async def generate_text(self, prompt: str) -> str | None:
        """Generate a reply to a plain text prompt.

        The configured system instruction is attached to the request.

        Args:
            prompt: User prompt.

        Returns:
            The model's text output (``None`` if the model returned no text
            part, e.g. a blocked response).

        Raises:
            ProviderError: If the API call fails.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=self._config.system_instruction,
                ),
            )
        except Exception as e:
            logger.error(f"Error generating text: {e}", exc_info=True)
            raise ProviderError(str(e)) from e
        return response.text

    async def generate_from_file(self, path: Path, mime_type: str, prompt: str) -> str | None:
        """Upload a local file to the Gemini file store and describe it.

        Args:
            path: Path to the file on local disk.
            mime_type: MIME type reported by the client for the upload.
            prompt: Instruction sent together with the file reference.

        Returns:
            The model's text output.

        Raises:
            ProviderError: If either the upload or the generation fails.
        """
        try:
            uploaded = await self.client.aio.files.upload(
                file=str(path),
                config=types.UploadFileConfig(mime_type=mime_type),
            )
            logger.info(f"Uploaded {path.name} to Gemini file store as {uploaded.uri}")

            file_part = types.Part.from_uri(
                file_uri=uploaded.uri,
                mime_type=uploaded.mime_type or mime_type,
            )
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[_user_content(prompt, file_part)],
            )
        except Exception as e:
            logger.error(f"Error generating content from uploaded file: {e}", exc_info=True)
            raise ProviderError(str(e)) from e
        return response.text

    async def generate_from_inline(self, part: types.Part, prompt: str) -> str | None:
        """Describe a document sent inline with the request.

        Args:
            part: Inline-data part built by
                :func:`geminigate.api.payloads.build_document_part`.
            prompt: Instruction sent together with the document.

        Returns:
            The model's text output.

        Raises:
            ProviderError: If the generation fails.
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=[_user_content(prompt, part)],
            )
        except Exception as e:
            logger.error(f"Error generating content from inline document: {e}", exc_info=True)
            raise ProviderError(str(e)) from e
        return response.text


def _user_content(prompt: str, part: types.Part) -> types.Content:
    """Build a single user turn holding the prompt text followed by *part*."""
    return types.Content(
        role="user",
        parts=[types.Part.from_text(text=prompt), part],
    )
