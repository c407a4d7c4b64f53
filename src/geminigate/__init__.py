"""Gemini Gateway - HTTP gateway for Gemini text, image and document prompts."""

__version__ = "0.1.0"

from geminigate.core.config import GatewayConfig, config

__all__ = [
    "GatewayConfig",
    "config",
]
