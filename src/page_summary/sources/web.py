from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

import httpx

from page_summary.errors import FetchError, TokenizeError

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html"


@dataclass(frozen=True)
class WebDocument:
    url: str
    content_type: str
    charset: str | None
    response: httpx.Response = field(repr=False)

    def iter_bytes(self, chunk_size: int = 8192) -> Iterator[bytes]:
        try:
            yield from self.response.iter_bytes(chunk_size)
        except (httpx.HTTPError, httpx.StreamError) as e:
            raise TokenizeError(f"error reading {self.url}: {e}") from e


@contextmanager
def fetch_html(
    url: str,
    *,
    timeout_s: float = 20.0,
    user_agent: str | None = None,
    client: httpx.Client | None = None,
) -> Iterator[WebDocument]:
    """
    Open a streamed GET of `url` and yield it as a WebDocument.

    Raises FetchError if the request fails, the status is >= 400, or the response
    is not `text/html`. The response is closed when the block exits.
    """
    headers: dict[str, str] = {}
    if user_agent:
        headers["User-Agent"] = user_agent

    own_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout_s, follow_redirects=True)
    try:
        try:
            r = client.send(client.build_request("GET", url, headers=headers), stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Failed to fetch %s: %s", url, e)
            raise FetchError(f"error fetching {url}: {e}", url=url) from e

        try:
            if r.status_code >= 400:
                logger.warning("Failed to fetch %s: status %d", url, r.status_code)
                raise FetchError(
                    f"response status code was {r.status_code}", url=url, status_code=r.status_code
                )
            ct = r.headers.get("content-type", "")
            if not ct.lower().startswith(HTML_CONTENT_TYPE):
                logger.warning("Failed to fetch %s: content type %r", url, ct)
                raise FetchError(
                    f"response content type was {ct}, not {HTML_CONTENT_TYPE}",
                    url=url,
                    status_code=r.status_code,
                )
            yield WebDocument(url=str(r.url), content_type=ct, charset=r.charset_encoding, response=r)
        finally:
            r.close()
    finally:
        if own_client:
            client.close()
