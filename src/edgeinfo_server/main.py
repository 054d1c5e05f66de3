from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from .extract import extract_full, extract_minimal
from .logging_config import get_logger, log_request, set_level
from .render import build_jinja_env, render_html
from .responses import PrettyJSONResponse
from .settings import Settings

logger = get_logger(__name__)

VERSION = "0.1.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()  # reads env
    set_level(settings.log_level)
    jinja_env = build_jinja_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting edgeinfo server", extra={"metadata_scope_key": settings.metadata_scope_key})
        app.state.settings = settings
        yield
        logger.info("Shutting down edgeinfo server")

    app = FastAPI(
        title="edgeinfo",
        description="Edge-hosted request inspection: client IP, geolocation, network and TLS details",
        version=VERSION,
        lifespan=lifespan,
        # Every path other than /ip and /api serves the page.
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    def _metadata(request: Request):
        return request.scope.get(settings.metadata_scope_key)

    @app.get("/ip", tags=["Lookup"], response_class=PrettyJSONResponse)
    async def ip_info(request: Request):
        """Client IP with ASN and coarse location."""
        info = extract_minimal(request.headers, _metadata(request))
        log_request(logger, "ip", info.ip, info.error is None)
        return PrettyJSONResponse(info.to_payload(), allow_origin=settings.cors_allow_origin)

    @app.get("/api", tags=["Lookup"], response_class=PrettyJSONResponse)
    async def api_info(request: Request):
        """Everything known about the request, as JSON."""
        record = extract_full(request.headers, _metadata(request))
        log_request(logger, "api", record.ip.address, record.metadata_available)
        return PrettyJSONResponse(record.to_payload(), allow_origin=settings.cors_allow_origin)

    @app.get("/{page_path:path}", tags=["Page"], response_class=HTMLResponse)
    async def page(request: Request, page_path: str):
        """Human-readable page for any other path."""
        record = extract_full(request.headers, _metadata(request))
        log_request(logger, "html", record.ip.address, record.metadata_available)
        return HTMLResponse(render_html(record.to_payload(), settings, jinja_env))

    return app


app = create_app()
