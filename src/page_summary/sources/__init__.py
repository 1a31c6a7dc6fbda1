from page_summary.sources.web import WebDocument, fetch_html

__all__ = ["WebDocument", "fetch_html"]
