from __future__ import annotations

import io

import pytest

from page_summary.errors import TokenizeError
from page_summary.tokenizer import Token, TokenType, iter_tokens


def _tags(tokens: list[Token]) -> list[tuple[TokenType, str]]:
    return [(t.type, t.data) for t in tokens if t.type is not TokenType.TEXT]


def test_iter_tokens_basic_stream() -> None:
    html = b'<!DOCTYPE html><html><head><!-- c --><META Property="og:title" content="A &amp; B"/></head>'
    tokens = list(iter_tokens(io.BytesIO(html)))
    assert _tags(tokens) == [
        (TokenType.DOCTYPE, "DOCTYPE html"),
        (TokenType.START_TAG, "html"),
        (TokenType.START_TAG, "head"),
        (TokenType.COMMENT, " c "),
        (TokenType.SELF_CLOSING_TAG, "meta"),
        (TokenType.END_TAG, "head"),
    ]
    meta = tokens[4]
    assert meta.attrs == (("property", "og:title"), ("content", "A & B"))


def test_iter_tokens_valueless_attribute_is_empty_string() -> None:
    (token,) = list(iter_tokens([b"<link rel=icon sizes>"]))
    assert token.attrs == (("rel", "icon"), ("sizes", ""))


def test_iter_tokens_joins_text_split_across_chunks() -> None:
    chunks = [b"<title>Hel", b"lo Wor", b"ld</title>"]
    tokens = list(iter_tokens(chunks))
    assert [(t.type, t.data) for t in tokens] == [
        (TokenType.START_TAG, "title"),
        (TokenType.TEXT, "Hello World"),
        (TokenType.END_TAG, "title"),
    ]


def test_iter_tokens_decodes_multibyte_characters_split_across_chunks() -> None:
    data = "<title>Café</title>".encode("utf-8")
    cut = data.index(b"\xa9")
    tokens = list(iter_tokens([data[:cut], data[cut:]]))
    assert tokens[1] == Token(TokenType.TEXT, "Café")


def test_iter_tokens_uses_given_encoding() -> None:
    tokens = list(iter_tokens([b"<title>\xe9t\xe9</title>"], encoding="latin-1"))
    assert tokens[1].data == "été"


def test_iter_tokens_unknown_encoding_falls_back_to_utf8() -> None:
    tokens = list(iter_tokens(["<title>ok</title>".encode()], encoding="x-not-a-charset"))
    assert tokens[1].data == "ok"


def test_iter_tokens_is_lazy() -> None:
    read: list[bytes] = []

    def chunks():
        for chunk in (b"<head>", b"</head>", b"<body>"):
            read.append(chunk)
            yield chunk

    it = iter_tokens(chunks())
    assert next(it) == Token(TokenType.START_TAG, "head")
    assert read == [b"<head>"]


def test_iter_tokens_stops_at_max_bytes() -> None:
    first = b'<meta property="og:title" content="T">'
    html = first + b'<meta property="og:type" content="website">'
    tokens = list(iter_tokens([html], max_bytes=len(first) + 10))
    tags = [t for t in tokens if t.type is TokenType.START_TAG]
    assert len(tags) == 1
    assert tags[0].attrs[0] == ("property", "og:title")


def test_iter_tokens_replaces_undecodable_bytes() -> None:
    tokens = list(iter_tokens([b"<title>caf\xe9</title>"]))
    assert tokens[1] == Token(TokenType.TEXT, "caf\ufffd")


def test_iter_tokens_failure_after_first_chunk_keeps_earlier_tokens() -> None:
    def chunks():
        yield b"<head>"
        raise OSError("stream closed")

    it = iter_tokens(chunks())
    assert next(it).data == "head"
    with pytest.raises(TokenizeError, match="stream closed"):
        next(it)


def test_iter_tokens_title_content_is_raw_text() -> None:
    tokens = list(iter_tokens([b"<title>A <b>bold</b> &amp; title</title><meta name=x>"]))
    assert [(t.type, t.data) for t in tokens] == [
        (TokenType.START_TAG, "title"),
        (TokenType.TEXT, "A <b>bold</b> & title"),
        (TokenType.END_TAG, "title"),
        (TokenType.START_TAG, "meta"),
    ]


def test_iter_tokens_read_failure_raises_tokenize_error() -> None:
    class Broken(io.RawIOBase):
        def readable(self) -> bool:
            return True

        def read(self, size: int = -1) -> bytes:
            raise OSError("connection reset")

    with pytest.raises(TokenizeError, match="connection reset"):
        list(iter_tokens(Broken()))


def test_iter_tokens_empty_stream() -> None:
    assert list(iter_tokens(io.BytesIO(b""))) == []
