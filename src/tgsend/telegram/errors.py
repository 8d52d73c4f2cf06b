from __future__ import annotations

__all__ = [
    "LocalIOError",
    "RemoteError",
    "RequestBuildError",
    "ResponseDecodeError",
    "TelegramError",
    "TransportError",
]


class TelegramError(RuntimeError):
    stage = "telegram"


class LocalIOError(TelegramError):
    stage = "local_io"


class RequestBuildError(TelegramError):
    stage = "request_build"


class TransportError(TelegramError):
    stage = "transport"


class ResponseDecodeError(TelegramError):
    stage = "response_decode"


class RemoteError(TelegramError):
    """The API answered with ``ok: false``.

    ``str(exc)`` is the remote ``description`` verbatim.
    """

    stage = "remote"

    def __init__(self, description: str, *, error_code: int | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.error_code = error_code
