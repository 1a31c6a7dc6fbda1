from page_summary.errors import FetchError, SummaryError, TokenizeError
from page_summary.html_head import (
    build_icon,
    build_image,
    extract_summary,
    extract_summary_from_tokens,
    get_attr,
)
from page_summary.models import PageSummary, PreviewImage
from page_summary.tokenizer import Token, TokenType, iter_tokens
from page_summary.util import resolve_url

__all__ = [
    "__version__",
    "FetchError",
    "PageSummary",
    "PreviewImage",
    "SummaryError",
    "Token",
    "TokenType",
    "TokenizeError",
    "build_icon",
    "build_image",
    "extract_summary",
    "extract_summary_from_tokens",
    "get_attr",
    "iter_tokens",
    "resolve_url",
]

__version__ = "0.1.0"
