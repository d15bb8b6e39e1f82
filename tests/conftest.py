"""Shared test fixtures and factories."""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from PIL import Image

from facefortune.config.models import FortuneConfig, HistoryConfig
from facefortune.generation.types import GenerationRequest, GenerationResult
from facefortune.history import HistoryStore, LocalStorage
from facefortune.server.app import create_app

SAMPLE_READING = """## 🔮 전체 운세 요약
복이 많은 얼굴입니다.

## 👁️ 부위별 분석
### 눈
- **맑은** 눈빛은 총명함을 뜻합니다.
"""


# =============================================================================
# Environment
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep every test away from real keys, config files and home state."""
    home = tmp_path / "home"
    monkeypatch.setenv("FACEFORTUNE_HOME", str(home))
    for var in ("GEMINI_API_KEY", "OPENAI_API_KEY", "FACEFORTUNE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    # ./config.toml is part of the search path
    monkeypatch.chdir(tmp_path)
    return home


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path: Path) -> FortuneConfig:
    """Default configuration with history stored under tmp_path."""
    return FortuneConfig(history=HistoryConfig(path=tmp_path / "storage.json"))


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a temporary config file."""
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        """
[model]
provider = "openai"
analysis_model = "gpt-4o"
temperature = 0.4

[openai]
api_key = "sk-test-config-key-000000000000"

[server]
port = 9090
cors_origins = ["https://isw-seem.vercel.app"]

[history]
max_entries = 5
"""
    )
    return config_path


# =============================================================================
# Model provider mocks
# =============================================================================


class MockProvider:
    """Records requests and returns a canned reading, or raises."""

    def __init__(self, text: str = SAMPLE_READING, error: Exception | None = None):
        self.text = text
        self.error = error
        self.requests: list[GenerationRequest] = []

    @property
    def name(self) -> str:
        return "mock"

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return GenerationResult(text=self.text, provider=self.name, model=request.model)


class StatusError(Exception):
    """Upstream error carrying an HTTP status, like SDK API errors."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


# =============================================================================
# Server Fixtures
# =============================================================================


@pytest.fixture
def app(config: FortuneConfig, mock_provider: MockProvider) -> FastAPI:
    return create_app(config, provider=mock_provider)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


# =============================================================================
# History and images
# =============================================================================


@pytest.fixture
def history_store(tmp_path: Path) -> HistoryStore:
    return HistoryStore(LocalStorage(tmp_path / "storage.json"))


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory for encoded test images."""

    def _make(
        width: int = 64,
        height: int = 64,
        fmt: str = "PNG",
        mode: str = "RGB",
        color: Any = (200, 120, 80),
    ) -> bytes:
        buf = BytesIO()
        Image.new(mode, (width, height), color).save(buf, format=fmt)
        return buf.getvalue()

    return _make
