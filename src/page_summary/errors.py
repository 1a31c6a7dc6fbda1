from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from page_summary.models import PageSummary


class SummaryError(RuntimeError):
    pass


class FetchError(SummaryError):
    """The document could not be fetched, or is not an HTML page."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class TokenizeError(SummaryError):
    """
    The HTML byte stream could not be tokenized.

    `partial` holds the summary accumulated before the failure, or None when
    nothing had been read yet.
    """

    def __init__(self, message: str, *, partial: PageSummary | None = None) -> None:
        super().__init__(message)
        self.partial = partial
