"""Configuration management for the Gemini Gateway.

This module provides centralized configuration management using Pydantic Settings.
Configuration is loaded from environment variables (and an optional ``.env``
file) once, when the module is first imported.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (no prefix, case-insensitive)
2. .env file in the working directory
3. Default values defined in GatewayConfig

Example .env file:
    APP_PORT=3001
    GEMINI_MODEL=gemini-2.5-flash
    GEMINI_API_KEY=your-key-here
    UPLOADS_DIR=uploads

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
Route handlers reach it through the ``get_config`` dependency in
:mod:`geminigate.api.main`, so tests can substitute their own instance.

Usage Example
-------------
    from geminigate.core.config import config

    print(config.app_port)
    print(config.gemini_model)
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GatewayConfig(BaseSettings):
    """Main configuration for the Gemini Gateway.

    Attributes
    ----------
    Server Settings:
        app_host : str
            Server bind address
        app_port : int
            Server port (1-65535)
        cors_allow_origins : list[str]
            Origins allowed by the CORS middleware

    Provider Settings:
        gemini_model : str
            Gemini model identifier used for every generation call
        gemini_api_key : str | None
            API key passed to the SDK client.  When unset the SDK falls back
            to its own ``GEMINI_API_KEY`` / ``GOOGLE_API_KEY`` lookup.
        system_instruction : str
            System instruction attached to ``/generate-text`` requests

    Paths:
        uploads_dir : Path
            Directory holding temporary multipart uploads
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    app_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    app_port: int = Field(
        default=3001,
        description="Server port",
        ge=1,
        le=65535,
    )
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )

    # Provider settings
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model identifier",
    )
    gemini_api_key: str | None = Field(
        default=None,
        description="Gemini API key (optional, the SDK also reads it from the environment)",
    )
    system_instruction: str = Field(
        default="Harus dibalas dalam bahasa Jawa.",
        description="System instruction for text generation",
    )

    # Paths
    uploads_dir: Path = Field(
        default=Path("uploads"),
        description="Directory for temporary multipart uploads",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the uploads directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.uploads_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance, read once at import time.
config = GatewayConfig()
