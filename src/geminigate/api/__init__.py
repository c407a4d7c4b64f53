"""Gemini Gateway — FastAPI REST API layer.

Modules
-------
main
    FastAPI application with the three generation routes and the ``main()``
    CLI entry point.
models
    Pydantic models for the response envelope and the ``{output}`` body.
errors
    Client-facing errors and the handlers that render them as envelopes.
payloads
    Prompt validation, default prompts and inline document parts.
uploads
    Scoped temporary storage for multipart uploads.
"""
