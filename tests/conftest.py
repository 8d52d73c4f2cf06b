from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _clear_tgsend_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TGSEND__BOT_TOKEN",
        "TGSEND__CHAT_ID",
        "TGSEND__API_BASE_URL",
        "TGSEND__TIMEOUT_S",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()
