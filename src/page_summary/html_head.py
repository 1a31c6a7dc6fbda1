from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Iterator, Sequence
from typing import BinaryIO

from page_summary.errors import TokenizeError
from page_summary.models import PageSummary, PreviewImage
from page_summary.tokenizer import Token, TokenType, iter_tokens
from page_summary.util import resolve_url

logger = logging.getLogger(__name__)

OG_IMAGE = "og:image"

_INT_RE = re.compile(r"[+-]?[0-9]+")

_OG_FIELDS = {
    "og:type": "type",
    "og:url": "url",
    "og:title": "title",
    "og:site_name": "site_name",
}


def get_attr(attrs: Sequence[tuple[str, str]], name: str) -> str | None:
    """
    Value of the first attribute called `name`, or None if the tag has none.
    """
    for key, value in attrs:
        if key == name:
            return value
    return None


def _parse_int(s: str) -> int:
    if not _INT_RE.fullmatch(s):
        return 0
    return int(s)


def build_image(prop: str, page_url: str, image: PreviewImage, content: str) -> PreviewImage:
    if prop == OG_IMAGE:
        image.url = resolve_url(page_url, content)
    elif prop == "og:image:secure_url":
        image.secure_url = resolve_url(page_url, content)
    elif prop == "og:image:type":
        image.type = content
    elif prop == "og:image:width":
        image.width = _parse_int(content)
    elif prop == "og:image:height":
        image.height = _parse_int(content)
    elif prop == "og:image:alt":
        image.alt = content
    return image


def is_icon_link(attrs: Sequence[tuple[str, str]]) -> bool:
    return get_attr(attrs, "rel") == "icon"


def build_icon(attrs: Sequence[tuple[str, str]], page_url: str) -> PreviewImage:
    """
    Build a PreviewImage from the attributes of a `<link rel="icon">` tag.

    Any other `rel` yields an empty image. `sizes="AxB"` is read as height A, width B.
    """
    icon = PreviewImage()
    if not is_icon_link(attrs):
        return icon

    href = get_attr(attrs, "href")
    if href:
        icon.url = resolve_url(page_url, href)
    icon.type = get_attr(attrs, "type") or ""
    icon.alt = get_attr(attrs, "alt") or ""

    sizes = get_attr(attrs, "sizes") or ""
    if sizes and sizes != "any":
        parts = sizes.split("x")
        if len(parts) >= 2:
            icon.height = _parse_int(parts[0])
            icon.width = _parse_int(parts[1])
    return icon


def _split_keywords(content: str) -> list[str]:
    if "," in content:
        return content.replace(" ", "").split(",")
    return [content]


def _apply_meta(summary: PageSummary, attrs: Sequence[tuple[str, str]], page_url: str) -> None:
    prop = get_attr(attrs, "property") or ""
    name = get_attr(attrs, "name") or ""
    content = get_attr(attrs, "content") or ""

    og_field = _OG_FIELDS.get(prop)
    if og_field:
        setattr(summary, og_field, content)

    if prop == "og:description":
        summary.description = content
    elif name == "description" and not summary.description:
        summary.description = content

    if name == "author":
        summary.author = content
    if name == "keywords":
        summary.keywords = _split_keywords(content)

    if prop == OG_IMAGE:
        summary.images.append(build_image(prop, page_url, PreviewImage(), content))
    elif prop.startswith(OG_IMAGE + ":"):
        if not summary.images:
            logger.debug("ignoring %s before any %s", prop, OG_IMAGE)
            return
        build_image(prop, page_url, summary.images[-1], content)


def extract_summary_from_tokens(page_url: str, tokens: Iterable[Token]) -> PageSummary:
    """
    Accumulate a PageSummary from `tokens` until `</head>` or the end of the stream.

    Relative URLs are resolved against `page_url`. A TokenizeError raised by the
    token stream propagates with the summary accumulated so far attached as
    `partial` (None if no token had been read).
    """
    summary = PageSummary()
    it: Iterator[Token] = iter(tokens)
    seen_any = False

    try:
        for token in it:
            seen_any = True
            if token.type is TokenType.END_TAG:
                if token.data == "head":
                    break
                continue
            if token.type not in (TokenType.START_TAG, TokenType.SELF_CLOSING_TAG):
                continue

            if token.data == "meta":
                _apply_meta(summary, token.attrs, page_url)
            elif token.data == "title" and not summary.title:
                # Only the immediately following token may supply the title.
                nxt = next(it, None)
                if nxt is not None and nxt.type is TokenType.TEXT:
                    summary.title = nxt.data
            elif token.data == "link" and is_icon_link(token.attrs):
                summary.icon = build_icon(token.attrs, page_url)
    except TokenizeError as e:
        if seen_any and e.partial is None:
            e.partial = summary
        raise

    return summary


def extract_summary(
    page_url: str,
    stream: BinaryIO | Iterable[bytes],
    *,
    encoding: str = "utf-8",
    max_bytes: int = 0,
) -> PageSummary:
    """
    Summarize the `<head>` of the HTML document read from `stream`.

    The caller owns `stream` and is responsible for closing it.
    """
    return extract_summary_from_tokens(
        page_url, iter_tokens(stream, encoding=encoding, max_bytes=max_bytes)
    )
