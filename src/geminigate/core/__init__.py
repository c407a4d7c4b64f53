"""Core functionality for the Gemini Gateway.

- **GatewayConfig**: Configuration management using Pydantic Settings
- **config**: Global configuration instance (loads from environment variables)
- **GeminiProvider**: Async client wrapper for the Gemini API
- **GatewayError**: Base error carrying the HTTP status it maps to
- **ProviderError**: Raised when a Gemini API call fails (HTTP 500)

Route handlers in :mod:`geminigate.api` depend on these names and never
create an SDK client themselves.
"""

from geminigate.core.config import GatewayConfig, config
from geminigate.core.errors import GatewayError
from geminigate.core.provider import GeminiProvider, ProviderError

__all__ = [
    "GatewayConfig",
    "config",
    "GatewayError",
    "GeminiProvider",
    "ProviderError",
]
