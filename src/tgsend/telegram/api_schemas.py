"""Msgspec models for the Telegram Bot API payloads used by tgsend.

Responses are decoded in two stages: the envelope first, keeping ``result`` as
raw JSON, then the raw slot into the concrete model the method returns.
"""

from __future__ import annotations

from typing import TypeVar

import msgspec

__all__ = [
    "ApiEnvelope",
    "Audio",
    "Chat",
    "Message",
    "User",
    "decode_envelope",
    "decode_result",
]

T = TypeVar("T")


class User(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    is_bot: bool | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class Chat(msgspec.Struct, forbid_unknown_fields=False):
    id: int
    type: str
    title: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None


class Audio(msgspec.Struct, forbid_unknown_fields=False):
    file_id: str
    file_unique_id: str | None = None
    duration: int | None = None
    performer: str | None = None
    title: str | None = None
    file_name: str | None = None
    mime_type: str | None = None
    file_size: int | None = None


class Message(msgspec.Struct, forbid_unknown_fields=False):
    message_id: int
    date: int | None = None
    chat: Chat | None = None
    from_: User | None = msgspec.field(default=None, name="from")
    caption: str | None = None
    audio: Audio | None = None
    has_protected_content: bool | None = None


class ApiEnvelope(msgspec.Struct, forbid_unknown_fields=False):
    ok: bool
    result: msgspec.Raw = msgspec.field(default_factory=msgspec.Raw)
    description: str | None = None
    error_code: int | None = None


_ENVELOPE_DECODER = msgspec.json.Decoder(ApiEnvelope)


def decode_envelope(payload: str | bytes) -> ApiEnvelope:
    return _ENVELOPE_DECODER.decode(payload)


def decode_result(raw: msgspec.Raw, model: type[T]) -> T:
    return msgspec.json.decode(raw, type=model)
