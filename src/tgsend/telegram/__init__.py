"""Telegram Bot API client for protected audio uploads."""

from .api_schemas import ApiEnvelope, Audio, Chat, Message, User
from .client import PROTECT_CONTENT, TelegramClient
from .errors import (
    LocalIOError,
    RemoteError,
    RequestBuildError,
    ResponseDecodeError,
    TelegramError,
    TransportError,
)

__all__ = [
    "PROTECT_CONTENT",
    "ApiEnvelope",
    "Audio",
    "Chat",
    "LocalIOError",
    "Message",
    "RemoteError",
    "RequestBuildError",
    "ResponseDecodeError",
    "TelegramClient",
    "TelegramError",
    "TransportError",
    "User",
]
