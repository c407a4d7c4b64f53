"""Request payload adaptation for the Gemini Gateway.

Turns what arrives over HTTP into what the provider expects:

- :func:`extract_text_prompt` — validate the JSON body of ``/generate-text``.
- :func:`resolve_prompt` — apply the per-route default prompt for the
  multipart routes.
- :func:`build_document_part` — wrap raw document bytes as an inline-data
  part.  The SDK base64-encodes ``inline_data`` on the wire, so no remote
  file store is involved.
"""

from __future__ import annotations

from typing import Any

from google.genai import types

from geminigate.api.errors import PromptValidationError

PROMPT_ERROR_MESSAGE = "Prompt harus berupa string!"

DEFAULT_IMAGE_PROMPT = "Describe this uploaded image"
DEFAULT_DOCUMENT_PROMPT = "Describe this uploaded document"

DEFAULT_MIME_TYPE = "application/octet-stream"


def extract_text_prompt(payload: Any) -> str:
    """Return the ``prompt`` string from a decoded JSON body.

    Args:
        payload: The decoded request body.  Anything other than a JSON object
            is treated as a body without a prompt.

    Returns:
        The prompt, unchanged.

    Raises:
        PromptValidationError: If the prompt is missing, empty, or not a
            string.
    """
    prompt = payload.get("prompt") if isinstance(payload, dict) else None
    if not prompt or not isinstance(prompt, str):
        raise PromptValidationError(PROMPT_ERROR_MESSAGE)
    return prompt


def resolve_prompt(prompt: str | None, default: str) -> str:
    """Return *prompt*, or *default* when the form field was not sent."""
    if prompt is None:
        return default
    return prompt


def build_document_part(data: bytes, mime_type: str | None) -> types.Part:
    """Wrap document bytes in an inline-data part.

    Args:
        data: Raw file contents.
        mime_type: MIME type reported by the client; falls back to
            ``application/octet-stream``.

    Returns:
        A ``types.Part`` with ``inline_data`` set.
    """
    return types.Part.from_bytes(data=data, mime_type=mime_type or DEFAULT_MIME_TYPE)
