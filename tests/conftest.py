"""Shared pytest fixtures for Gemini Gateway tests."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from geminigate.api.main import app, get_config, get_provider
from geminigate.core.config import GatewayConfig
from geminigate.core.provider import ProviderError


class FakeProvider:
    """In-memory stand-in for :class:`GeminiProvider`.

    Records every call and, for file-backed calls, whether the temporary
    upload existed on disk while the provider was using it.

    Attributes:
        reply: Text returned by every generation method.
        error: When set, every method raises :class:`ProviderError` instead.
        calls: List of ``(method_name, kwargs)`` tuples in call order.
        seen_paths: Paths handed to ``generate_from_file``.
        existed_during_call: ``path.exists()`` observed inside each call.
    """

    def __init__(self, reply: str | None = "hi", error: str | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.seen_paths: list[Path] = []
        self.existed_during_call: list[bool] = []

    def _finish(self) -> str | None:
        if self.error is not None:
            raise ProviderError(self.error)
        return self.reply

    async def generate_text(self, prompt: str) -> str | None:
        self.calls.append(("generate_text", {"prompt": prompt}))
        return self._finish()

    async def generate_from_file(self, path: Path, mime_type: str, prompt: str) -> str | None:
        self.calls.append(
            ("generate_from_file", {"path": path, "mime_type": mime_type, "prompt": prompt})
        )
        self.seen_paths.append(path)
        self.existed_during_call.append(path.exists())
        return self._finish()

    async def generate_from_inline(self, part, prompt: str) -> str | None:
        self.calls.append(("generate_from_inline", {"part": part, "prompt": prompt}))
        return self._finish()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config(temp_dir: Path) -> GatewayConfig:
    """Create a test configuration with a temporary uploads directory.

    Args:
        temp_dir: Temporary directory from fixture

    Returns:
        GatewayConfig instance for testing
    """
    return GatewayConfig(
        _env_file=None,
        uploads_dir=str(temp_dir / "uploads"),
        gemini_model="gemini-test-model",
        gemini_api_key="test-key",
    )


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider that answers ``"hi"`` to everything."""
    return FakeProvider()


@pytest.fixture
def test_client(
    test_config: GatewayConfig, fake_provider: FakeProvider
) -> Generator[TestClient, None, None]:
    """TestClient with the provider and configuration overridden.

    The lifespan handler is not run, so no real Gemini client is created.
    """
    app.dependency_overrides[get_provider] = lambda: fake_provider
    app.dependency_overrides[get_config] = lambda: test_config
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def uploads_dir(test_config: GatewayConfig) -> Path:
    """The uploads directory used by ``test_client``."""
    return test_config.uploads_dir
