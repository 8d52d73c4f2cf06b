from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import anyio
import httpx
import pytest
from typer.testing import CliRunner

from tgsend import __version__, cli
from tgsend.settings import TgsendSettings
from tgsend.telegram.client import TelegramClient


def _write_config(path: Path, *, chat_id: int | None = 123) -> Path:
    lines = ['bot_token = "123:abcDEF_ghij"']
    if chat_id is not None:
        lines.append(f"chat_id = {chat_id}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def sent(monkeypatch: pytest.MonkeyPatch) -> Iterator[list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if b'name="chat_id"\r\n\r\n404\r\n' in request.content:
            return httpx.Response(
                400,
                json={"ok": False, "description": "Bad Request: chat not found"},
                request=request,
            )
        return httpx.Response(
            200,
            json={"ok": True, "result": {"message_id": 42}},
            request=request,
        )

    http_clients: list[httpx.AsyncClient] = []

    def build_client(settings: TgsendSettings, token: str) -> TelegramClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        http_clients.append(http_client)
        return TelegramClient(
            token,
            base_url=settings.api_base_url,
            http_client=http_client,
        )

    monkeypatch.setattr(cli, "setup_logging", lambda **_kwargs: None)
    monkeypatch.setattr(cli, "_build_client", build_client)
    yield requests
    for http_client in http_clients:
        anyio.run(http_client.aclose)


def test_version() -> None:
    result = CliRunner().invoke(cli.create_app(), ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_send_audio_uses_config_chat_id(
    tmp_path: Path, sent: list[httpx.Request]
) -> None:
    config_path = _write_config(tmp_path / "tgsend.toml")
    audio = tmp_path / "sample.mp3"
    audio.write_bytes(b"ID3" + b"\x00" * 64)

    result = CliRunner().invoke(
        cli.create_app(),
        ["send-audio", str(audio), "--config-path", str(config_path)],
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-1] == "42"
    assert len(sent) == 1
    assert b'name="chat_id"\r\n\r\n123\r\n' in sent[0].content
    assert b'name="protect_content"\r\n\r\ntrue\r\n' in sent[0].content


def test_send_audio_chat_id_option_wins(
    tmp_path: Path, sent: list[httpx.Request]
) -> None:
    config_path = _write_config(tmp_path / "tgsend.toml", chat_id=None)
    audio = tmp_path / "sample.mp3"
    audio.write_bytes(b"ID3")

    result = CliRunner().invoke(
        cli.create_app(),
        [
            "send-audio",
            str(audio),
            "--chat-id",
            "555",
            "--config-path",
            str(config_path),
        ],
    )

    assert result.exit_code == 0, result.output
    assert b'name="chat_id"\r\n\r\n555\r\n' in sent[0].content


def test_send_audio_requires_chat_id(
    tmp_path: Path, sent: list[httpx.Request]
) -> None:
    config_path = _write_config(tmp_path / "tgsend.toml", chat_id=None)
    audio = tmp_path / "sample.mp3"
    audio.write_bytes(b"ID3")

    result = CliRunner().invoke(
        cli.create_app(),
        ["send-audio", str(audio), "--config-path", str(config_path)],
    )

    assert result.exit_code == 1
    assert "Missing chat_id" in result.output
    assert sent == []


def test_send_audio_missing_config(tmp_path: Path, sent: list[httpx.Request]) -> None:
    result = CliRunner().invoke(
        cli.create_app(),
        [
            "send-audio",
            str(tmp_path / "a.mp3"),
            "--config-path",
            str(tmp_path / "missing.toml"),
        ],
    )

    assert result.exit_code == 1
    assert "Missing config file" in result.output
    assert sent == []


def test_send_audio_reports_remote_error(
    tmp_path: Path, sent: list[httpx.Request]
) -> None:
    config_path = _write_config(tmp_path / "tgsend.toml", chat_id=404)
    audio = tmp_path / "sample.mp3"
    audio.write_bytes(b"ID3")

    result = CliRunner().invoke(
        cli.create_app(),
        ["send-audio", str(audio), "--config-path", str(config_path)],
    )

    assert result.exit_code == 1
    assert "error: Bad Request: chat not found" in result.output
    assert len(sent) == 1


def test_send_audio_missing_file_sends_nothing(
    tmp_path: Path, sent: list[httpx.Request]
) -> None:
    config_path = _write_config(tmp_path / "tgsend.toml")

    result = CliRunner().invoke(
        cli.create_app(),
        [
            "send-audio",
            str(tmp_path / "missing.mp3"),
            "--config-path",
            str(config_path),
        ],
    )

    assert result.exit_code == 1
    assert "error: failed to open audio file" in result.output
    assert sent == []
