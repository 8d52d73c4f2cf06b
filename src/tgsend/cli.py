from __future__ import annotations

from pathlib import Path

import anyio
import typer

from . import __version__
from .config import ConfigError
from .logging import setup_logging
from .settings import TgsendSettings, load_settings, require_bot
from .telegram.client import TelegramClient
from .telegram.errors import TelegramError


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _build_client(settings: TgsendSettings, token: str) -> TelegramClient:
    return TelegramClient(
        token,
        base_url=settings.api_base_url,
        timeout_s=settings.timeout_s,
    )


def send_audio(
    audio_path: Path = typer.Argument(..., help="Local audio file to upload."),
    chat_id: int | None = typer.Option(
        None,
        "--chat-id",
        help="Target chat id (defaults to chat_id from the config file).",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config-path",
        help="Path to tgsend.toml (defaults to ~/.tgsend/tgsend.toml).",
    ),
    debug: bool = typer.Option(False, "--debug", help="Log requests and responses."),
) -> None:
    """Send an audio file that recipients cannot forward."""
    setup_logging(debug=debug)
    try:
        settings, cfg_path = load_settings(config_path)
        token = require_bot(settings, cfg_path)
    except ConfigError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)

    target = chat_id if chat_id is not None else settings.chat_id
    if target is None:
        typer.echo(f"Missing chat_id; pass --chat-id or set it in {cfg_path}.", err=True)
        raise typer.Exit(code=1)

    client = _build_client(settings, token)
    try:
        message = anyio.run(client.send_protected_audio, target, audio_path)
    except TelegramError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(message.message_id))


def create_app() -> typer.Typer:
    app = typer.Typer(
        add_completion=False,
        no_args_is_help=True,
        help="Send protected audio through the Telegram Bot API.",
    )

    @app.callback()
    def app_main(
        version: bool = typer.Option(
            False,
            "--version",
            help="Show the version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ) -> None:
        """tgsend CLI."""

    app.command(name="send-audio")(send_audio)
    return app


app = create_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
