from __future__ import annotations

from urllib.parse import urljoin


def resolve_url(base: str, ref: str) -> str:
    """
    Resolve `ref` against the page URL `base`.

    Absolute references come back unchanged. Unparseable input degrades to `ref` as given.
    """
    try:
        return urljoin(base, ref)
    except ValueError:
        return ref
