"""HTTP surface: a single summary endpoint plus a health check."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from page_summary import __version__
from page_summary.config import Settings, load_settings
from page_summary.errors import FetchError, TokenizeError
from page_summary.service import summarize

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    app = FastAPI(title="page-summary", version=__version__)
    app.state.settings = settings or load_settings()
    # Cross-origin callers get Access-Control-Allow-Origin: *.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/v1/summary")
    def get_summary(request: Request, url: str = Query(default="")):
        """Summarize the page at `url` as JSON."""
        if not url:
            raise HTTPException(status_code=400, detail="No query found in the requested url")
        try:
            summary = summarize(url, settings=request.app.state.settings)
        except FetchError as e:
            logger.warning("summary of %s failed: %s", url, e)
            raise HTTPException(status_code=502, detail=f"error fetching URL: {e}") from e
        except TokenizeError as e:
            logger.warning("summary of %s failed: %s", url, e)
            raise HTTPException(status_code=400, detail=f"error extracting summary: {e}") from e
        return JSONResponse(summary.to_dict())

    return app
