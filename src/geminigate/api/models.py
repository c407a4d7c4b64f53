"""Pydantic response models for the Gemini Gateway API.

FastAPI uses these for serialisation and OpenAPI documentation.  Request
bodies are not modelled here: the text route validates its raw JSON body
by hand (see :mod:`geminigate.api.payloads`) so that bad prompts get the
envelope below instead of FastAPI's default 422 response.

Models
------
Envelope
    Uniform ``{success, message, data}`` wrapper used by ``/generate-text``
    and by every failure response.
OutputResponse
    ``{output}`` body returned on success by the image and document routes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

SUCCESS_MESSAGE = "Berhasil direspon sama Gemini nih!"
SERVER_ERROR_MESSAGE = "Gagal, kayaknya server lagi bermasalah!"


class Envelope(BaseModel):
    """Uniform JSON response wrapper.

    Attributes:
        success: ``True`` when the provider produced a result.
        message: Human-readable status message.
        data: Provider text output on success; always ``None`` on failure.
    """

    success: bool = Field(
        ...,
        description="Whether the request succeeded.",
    )
    message: str = Field(
        ...,
        description="Human-readable status message.",
    )
    data: str | None = Field(
        default=None,
        description="Generated text, or null on failure.",
    )

    @classmethod
    def ok(cls, data: str | None) -> Envelope:
        """Build a success envelope carrying *data*."""
        return cls(success=True, message=SUCCESS_MESSAGE, data=data)

    @classmethod
    def failure(cls, message: str = SERVER_ERROR_MESSAGE) -> Envelope:
        """Build a failure envelope.  ``data`` is always ``None``."""
        return cls(success=False, message=message, data=None)


class OutputResponse(BaseModel):
    """Success body for the image and document routes.

    Attributes:
        output: Text generated by the provider.
    """

    output: str | None = Field(
        ...,
        description="Generated text.",
    )
