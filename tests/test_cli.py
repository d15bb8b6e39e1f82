from __future__ import annotations

from typing import Any

import httpx
import pytest
from typer.testing import CliRunner

from facefortune.cli.app import app
from facefortune.client.api import FortuneClient
from facefortune.config.paths import get_storage_path
from facefortune.history import SavedReading, open_history
from facefortune.server.app import create_app
from tests.conftest import SAMPLE_READING, MockProvider

runner = CliRunner()


def _seed(*results: str) -> list[SavedReading]:
    store = open_history(get_storage_path())
    readings = []
    for n, result in enumerate(results):
        reading = SavedReading(
            id=str(1_760_000_000_000 + n),
            date="2026. 10. 19. 오후 3:04:05",
            thumbnail="data:image/jpeg;base64,aGVsbG8=",
            result=result,
        )
        store.append(reading)
        readings.append(reading)
    return readings


@pytest.fixture(autouse=True)
def logging_calls(monkeypatch) -> list[dict[str, Any]]:
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(
        "facefortune.logging.configure_logging",
        lambda **kwargs: calls.append(kwargs),
    )
    return calls


@pytest.fixture
def api_server(monkeypatch) -> MockProvider:
    """Route CLI HTTP calls to an in-process app with a mock provider."""
    provider = MockProvider()
    fastapi_app = create_app(provider=provider)

    def client_factory(base_url: str, **kwargs: Any) -> FortuneClient:
        return FortuneClient(base_url, transport=httpx.ASGITransport(app=fastapi_app))

    monkeypatch.setattr("facefortune.client.FortuneClient", client_factory)
    return provider


def test_help_lists_commands() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("serve", "analyze", "ask", "history"):
        assert name in result.output


class TestHistoryCommands:
    def test_list_empty(self) -> None:
        result = runner.invoke(app, ["history", "list"])
        assert result.exit_code == 0
        assert "No saved readings" in result.output

    def test_list(self) -> None:
        first, second = _seed("## 첫번째\n좋음", "## 두번째\n매우 좋음")
        result = runner.invoke(app, ["history", "list"])
        assert result.exit_code == 0
        assert first.id in result.output
        assert second.id in result.output
        assert result.output.index(second.id) < result.output.index(first.id)

    def test_show(self) -> None:
        (reading,) = _seed(SAMPLE_READING)
        result = runner.invoke(app, ["history", "show", reading.id])
        assert result.exit_code == 0
        assert "복이 많은 얼굴입니다." in result.output

    def test_show_unknown(self) -> None:
        result = runner.invoke(app, ["history", "show", "missing"])
        assert result.exit_code == 1
        assert "Reading not found" in result.output

    def test_delete(self) -> None:
        (reading,) = _seed(SAMPLE_READING)
        result = runner.invoke(app, ["history", "delete", reading.id, "--force"])
        assert result.exit_code == 0
        assert open_history(get_storage_path()).list() == []

    def test_delete_cancelled(self) -> None:
        (reading,) = _seed(SAMPLE_READING)
        result = runner.invoke(app, ["history", "delete", reading.id], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(open_history(get_storage_path()).list()) == 1

    def test_missing_config_file(self, tmp_path) -> None:
        result = runner.invoke(
            app, ["history", "list", "--config", str(tmp_path / "nope.toml")]
        )
        assert result.exit_code == 1


class TestReadingCommands:
    def test_analyze_saves_reading(self, api_server, tmp_path, make_image) -> None:
        image = tmp_path / "face.png"
        image.write_bytes(make_image(1200, 1200))

        result = runner.invoke(app, ["analyze", str(image)])

        assert result.exit_code == 0, result.output
        assert "복이 많은 얼굴입니다." in result.output
        readings = open_history(get_storage_path()).list()
        assert len(readings) == 1
        assert readings[0].result == SAMPLE_READING
        assert api_server.requests[0].images

    def test_analyze_logs_warnings_only(
        self, api_server, logging_calls, tmp_path, make_image
    ) -> None:
        image = tmp_path / "face.png"
        image.write_bytes(make_image())

        result = runner.invoke(app, ["analyze", str(image)])

        assert result.exit_code == 0, result.output
        assert logging_calls == [{"level": "WARNING"}]

    def test_analyze_reports_server_error(
        self, api_server, tmp_path, make_image
    ) -> None:
        api_server.error = RuntimeError("429 Too Many Requests")
        image = tmp_path / "face.png"
        image.write_bytes(make_image())

        result = runner.invoke(app, ["analyze", str(image)])

        assert result.exit_code == 1
        assert open_history(get_storage_path()).list() == []

    def test_analyze_rejects_non_image(self, api_server, tmp_path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        result = runner.invoke(app, ["analyze", str(path)])
        assert result.exit_code == 1
        assert api_server.requests == []

    def test_ask(self, api_server) -> None:
        (reading,) = _seed(SAMPLE_READING)
        api_server.text = "올해는 재물운이 좋습니다."

        result = runner.invoke(app, ["ask", "재물운은?", "--reading", reading.id])

        assert result.exit_code == 0, result.output
        assert "재물운이 좋습니다" in result.output
        assert SAMPLE_READING.splitlines()[1] in api_server.requests[0].prompt

    def test_ask_logs_warnings_only(self, api_server, logging_calls) -> None:
        (reading,) = _seed(SAMPLE_READING)
        result = runner.invoke(app, ["ask", "재물운은?", "--reading", reading.id])
        assert result.exit_code == 0, result.output
        assert logging_calls == [{"level": "WARNING"}]

    def test_ask_unknown_reading(self, api_server) -> None:
        result = runner.invoke(app, ["ask", "재물운은?", "--reading", "missing"])
        assert result.exit_code == 1
        assert api_server.requests == []


class TestServeCommand:
    def test_serve_uses_config_defaults(self, monkeypatch) -> None:
        seen: dict[str, Any] = {}

        async def fake_run(self) -> None:
            seen["host"] = self._host
            seen["port"] = self._port

        monkeypatch.setattr("facefortune.server.runner.ServerRunner.run", fake_run)

        result = runner.invoke(app, ["serve", "--port", "9001"])

        assert result.exit_code == 0, result.output
        assert seen == {"host": "127.0.0.1", "port": 9001}
