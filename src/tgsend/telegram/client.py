from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypeVar

import httpx
import msgspec

from ..logging import get_logger
from .api_schemas import Message, decode_envelope, decode_result
from .errors import (
    LocalIOError,
    RemoteError,
    RequestBuildError,
    ResponseDecodeError,
    TransportError,
)

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_API_BASE = "https://api.telegram.org"
# Sent as a literal form value; recipients cannot forward or save the audio.
PROTECT_CONTENT = "true"


class TelegramClient:
    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_BASE,
        timeout_s: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        if not token:
            raise ValueError("Telegram token is empty")
        self._base = f"{base_url.rstrip('/')}/bot{token}"
        self._timeout_s = timeout_s
        self._http_client = http_client

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._http_client is not None:
            yield self._http_client
            return
        async with httpx.AsyncClient(timeout=self._timeout_s) as client:
            yield client

    async def send_protected_audio(
        self,
        chat_id: int,
        audio_path: str | Path,
    ) -> Message:
        """Upload ``audio_path`` to ``chat_id`` with forwarding disabled.

        Raises a ``TelegramError`` subclass naming the stage that failed; no
        request is attempted when the file cannot be opened or read.
        """
        method = "sendAudio"
        path = Path(audio_path)
        data = {
            "chat_id": str(chat_id),
            "protect_content": PROTECT_CONTENT,
        }
        try:
            audio_file = path.open("rb")
        except OSError as exc:
            self._log_local_io_error(method=method, path=path, exc=exc)
            raise LocalIOError(f"failed to open audio file: {exc}") from exc

        with audio_file:
            try:
                audio_bytes = audio_file.read()
            except OSError as exc:
                self._log_local_io_error(method=method, path=path, exc=exc)
                raise LocalIOError(f"failed to copy audio file: {exc}") from exc

        async with self._session() as client:
            try:
                request = client.build_request(
                    "POST",
                    f"{self._base}/{method}",
                    data=data,
                    files={"audio": (path.name, audio_bytes)},
                )
            except (httpx.InvalidURL, TypeError, ValueError) as exc:
                logger.error(
                    "telegram.request_build_error",
                    method=method,
                    url=f"{self._base}/{method}",
                    error=str(exc),
                    error_type=exc.__class__.__name__,
                )
                raise RequestBuildError(f"failed to create request: {exc}") from exc

            logger.debug(
                "telegram.request",
                method=method,
                url=str(request.url),
                chat_id=chat_id,
                filename=path.name,
                size=len(audio_bytes),
            )
            try:
                resp = await client.send(request)
            except httpx.HTTPError as exc:
                logger.error(
                    "telegram.network_error",
                    method=method,
                    url=str(request.url),
                    error=str(exc),
                    error_type=exc.__class__.__name__,
                )
                raise TransportError(f"failed to send audio message: {exc}") from exc

        return self._decode_response(method=method, resp=resp, model=Message)

    def _log_local_io_error(self, *, method: str, path: Path, exc: OSError) -> None:
        logger.error(
            "telegram.local_io_error",
            method=method,
            path=str(path),
            error=str(exc),
            error_type=exc.__class__.__name__,
        )

    def _decode_response(
        self,
        *,
        method: str,
        resp: httpx.Response,
        model: type[T],
    ) -> T:
        try:
            envelope = decode_envelope(resp.content)
        except msgspec.DecodeError as exc:
            logger.error(
                "telegram.bad_response",
                method=method,
                status=resp.status_code,
                url=str(resp.request.url),
                error=str(exc),
                error_type=exc.__class__.__name__,
                body=resp.text,
            )
            raise ResponseDecodeError(f"failed to decode response: {exc}") from exc

        if not envelope.ok:
            description = envelope.description or ""
            logger.error(
                "telegram.api_error",
                method=method,
                status=resp.status_code,
                url=str(resp.request.url),
                error_code=envelope.error_code,
                description=description,
            )
            raise RemoteError(description, error_code=envelope.error_code)

        try:
            result = decode_result(envelope.result, model)
        except msgspec.DecodeError as exc:
            logger.error(
                "telegram.invalid_payload",
                method=method,
                url=str(resp.request.url),
                model=model.__name__,
                error=str(exc),
                body=resp.text,
            )
            raise ResponseDecodeError(f"failed to decode result: {exc}") from exc

        logger.debug(
            "telegram.response",
            method=method,
            status=resp.status_code,
        )
        return result
