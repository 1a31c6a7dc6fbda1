from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

from page_summary.config import Settings


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    for name in ("ADDR", "TLSKEY", "TLSCERT", "FETCH_TIMEOUT_S", "USER_AGENT", "MAX_HEAD_BYTES", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return Settings.model_validate({})


@pytest.fixture()
def html_client() -> Callable[..., httpx.Client]:
    """
    Build an httpx.Client whose every GET answers with the given body and headers.
    """

    def _make(
        body: bytes,
        *,
        status_code: int = 200,
        content_type: str = "text/html; charset=utf-8",
    ) -> httpx.Client:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, headers={"content-type": content_type}, content=body)

        return httpx.Client(transport=httpx.MockTransport(handler))

    return _make
