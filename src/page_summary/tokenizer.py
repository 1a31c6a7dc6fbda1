"""
Incremental HTML tokenizer producing a lazy, forward-only stream of tokens.

Built on `html.parser.HTMLParser`: bytes are decoded and fed chunk by chunk, and
tokens are handed out as soon as they are complete, so a consumer that stops
early (e.g. at `</head>`) never reads the rest of the document.
"""

from __future__ import annotations

import codecs
import html
import logging
from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from html.parser import HTMLParser
from typing import BinaryIO

from page_summary.errors import TokenizeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192

# Newer HTMLParser releases already treat <title> as escapable raw text.
_NATIVE_RCDATA_TITLE = "title" in getattr(HTMLParser, "RCDATA_CONTENT_ELEMENTS", ())


class TokenType(Enum):
    START_TAG = "start_tag"
    SELF_CLOSING_TAG = "self_closing_tag"
    END_TAG = "end_tag"
    TEXT = "text"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass(frozen=True)
class Token:
    type: TokenType
    data: str
    attrs: tuple[tuple[str, str], ...] = ()


class _TokenCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.tokens: deque[Token] = deque()
        self._text: list[str] = []
        self._raw_title = False

    def _flush_text(self) -> None:
        # Adjacent data callbacks (split by chunk boundaries) become one TEXT token.
        if self._text:
            self.tokens.append(Token(TokenType.TEXT, "".join(self._text)))
            self._text = []

    def _emit(self, token_type: TokenType, data: str, attrs=()) -> None:  # noqa: ANN001
        self._flush_text()
        self.tokens.append(Token(token_type, data, tuple((k, v or "") for k, v in attrs)))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._emit(TokenType.START_TAG, tag, attrs)
        if tag == "title" and not _NATIVE_RCDATA_TITLE:
            # Markup inside <title> is text up to </title>.
            self.set_cdata_mode("title")
            self._raw_title = True

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._emit(TokenType.SELF_CLOSING_TAG, tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        if tag == "title":
            self._raw_title = False
        self._emit(TokenType.END_TAG, tag)

    def handle_data(self, data: str) -> None:
        if self._raw_title:
            # cdata mode skips charref conversion; titles still decode entities.
            data = html.unescape(data)
        self._text.append(data)

    def handle_comment(self, data: str) -> None:
        self._emit(TokenType.COMMENT, data)

    def handle_decl(self, decl: str) -> None:
        self._emit(TokenType.DOCTYPE, decl)

    def close(self) -> None:
        super().close()
        self._flush_text()


def _iter_chunks(source: BinaryIO | Iterable[bytes]) -> Iterator[bytes]:
    if hasattr(source, "read"):
        return iter(lambda: source.read(CHUNK_SIZE), b"")  # type: ignore[union-attr]
    return iter(source)  # type: ignore[arg-type]


def _decoder(encoding: str) -> codecs.IncrementalDecoder:
    try:
        return codecs.getincrementaldecoder(encoding)(errors="replace")
    except LookupError:
        logger.debug("unknown charset %r, decoding as utf-8", encoding)
        return codecs.getincrementaldecoder("utf-8")(errors="replace")


def iter_tokens(
    source: BinaryIO | Iterable[bytes],
    *,
    encoding: str = "utf-8",
    max_bytes: int = 0,
) -> Iterator[Token]:
    """
    Tokenize an HTML byte stream.

    `source` is a binary file-like object or an iterable of byte chunks. End of
    stream ends the iteration; reaching `max_bytes` (when > 0) is treated the same
    way. Undecodable bytes are replaced with U+FFFD; read failures and parser
    failures raise TokenizeError.
    """
    decoder = _decoder(encoding)
    collector = _TokenCollector()
    chunks = _iter_chunks(source)
    consumed = 0

    while True:
        try:
            chunk = next(chunks, None)
        except OSError as e:
            raise TokenizeError(f"error reading HTML stream: {e}") from e
        capped = False
        if chunk and max_bytes > 0:
            chunk = chunk[: max_bytes - consumed]
            consumed += len(chunk)
            capped = consumed >= max_bytes
            if capped:
                logger.debug("stopped reading HTML after %d bytes", consumed)
        final = chunk is None or capped

        # A multi-byte sequence cut by the byte cap is dropped.
        text = decoder.decode(chunk or b"", final=chunk is None)

        try:
            if text:
                collector.feed(text)
            if final:
                collector.close()
        except Exception as e:  # noqa: BLE001
            raise TokenizeError(f"error tokenizing HTML: {e}") from e

        while collector.tokens:
            yield collector.tokens.popleft()
        if final:
            return
