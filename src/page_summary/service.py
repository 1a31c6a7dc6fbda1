from __future__ import annotations

import httpx

from page_summary.config import Settings, load_settings
from page_summary.html_head import extract_summary
from page_summary.models import PageSummary
from page_summary.sources.web import fetch_html


def summarize(
    url: str,
    *,
    settings: Settings | None = None,
    client: httpx.Client | None = None,
) -> PageSummary:
    """
    Fetch `url` and summarize its `<head>`.

    Relative references resolve against the requested `url`, even after redirects.
    Raises FetchError or TokenizeError.
    """
    settings = settings or load_settings()
    with fetch_html(
        url,
        timeout_s=settings.fetch_timeout_s,
        user_agent=settings.user_agent,
        client=client,
    ) as doc:
        return extract_summary(
            url,
            doc.iter_bytes(),
            encoding=doc.charset or "utf-8",
            max_bytes=settings.max_head_bytes,
        )
