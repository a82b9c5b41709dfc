"""
HTML interface routes for the Uploadcare Gallery.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Query, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import HTMLResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Config
from logging_utils import Phase, PhaseLogger
from models import GroupRejection
from services.demo import DEMO_GROUP_ID, DEMO_HOST, get_demo_file_infos
from services.file_metadata import build_group_base_url, fetch_file_infos
from services.group_validation import validate_group_url
from services.presentation import build_error_context, build_gallery_context, parse_timestamp

from .app_state import app, get_config, logger, templates


def render_error_page(request: Request, cfg: Config, error: str, status_code: int) -> HTMLResponse:
    """Render the branded error page with the given reason."""
    return templates.TemplateResponse(
        request,
        "error.html",
        build_error_context(cfg, error),
        status_code=status_code,
    )


@app.exception_handler(StarletteHTTPException)
async def html_not_found_handler(request: Request, exc: StarletteHTTPException):
    """Render 404s as the branded error page; other errors keep the JSON body."""
    if exc.status_code == 404:
        config_provider = request.app.dependency_overrides.get(get_config, get_config)
        return render_error_page(request, config_provider(), str(exc.detail), 404)
    return await http_exception_handler(request, exc)


@app.get("/", response_class=HTMLResponse)
async def gallery_page(
    request: Request,
    url: Optional[str] = Query(default=None, description="Uploadcare group URL"),
    page_slug: Optional[str] = Query(default=None, alias="from", description="Page the upload came from"),
    ts: Optional[str] = Query(default=None, description="Upload time (Unix seconds)"),
    cfg: Config = Depends(get_config),
):
    """Serve the gallery for a group URL, or an error page when it is refused"""
    raw_url = url or ""
    phase_logger = PhaseLogger(request_label=raw_url[:120] or "<no url>", logger=logger)

    with phase_logger.phase(Phase.VALIDATION):
        result = validate_group_url(
            raw_url,
            cfg.GROUPS.allowed_hosts(),
            cfg.GROUPS.max_group_file_count,
        )

    if isinstance(result, GroupRejection):
        phase_logger.log_decision(False, result.error)
        return render_error_page(request, cfg, result.error, 400)

    phase_logger.log_decision(True)

    with phase_logger.phase(Phase.METADATA):
        file_infos = await fetch_file_infos(
            result.host,
            result.group_id,
            result.count,
            concurrency=cfg.GROUPS.head_request_concurrency,
            timeout_seconds=cfg.GROUPS.head_request_timeout_seconds,
        )
        phase_logger.info(f"Resolved {len(file_infos)} file(s)")

    with phase_logger.phase(Phase.RENDER):
        context = build_gallery_context(
            cfg,
            base_url=result.base_url,
            group_id=result.group_id,
            count=result.count,
            original_url=raw_url,
            page_slug=page_slug or "",
            timestamp=parse_timestamp(ts),
            file_infos=file_infos,
        )
        response = templates.TemplateResponse(request, "gallery.html", context)
        response.headers["Cache-Control"] = f"public, max-age={cfg.CACHE.gallery_seconds}"

    phase_logger.log_timing_summary()
    return response


@app.get("/demo", response_class=HTMLResponse)
async def demo_page(request: Request, cfg: Config = Depends(get_config)):
    """Serve a gallery of sample files for checking branding (opt-in)"""
    if not cfg.FEATURES.enable_demo:
        raise HTTPException(status_code=404, detail="Demo mode is disabled")

    file_infos = get_demo_file_infos()
    count = len(file_infos)
    context = build_gallery_context(
        cfg,
        base_url=build_group_base_url(DEMO_HOST, DEMO_GROUP_ID, count),
        group_id=DEMO_GROUP_ID,
        count=count,
        original_url=f"https://{DEMO_HOST}/{DEMO_GROUP_ID}~{count}/",
        page_slug="demo",
        timestamp=None,
        file_infos=file_infos,
        demo_mode=True,
    )
    response = templates.TemplateResponse(request, "gallery.html", context)
    response.headers["Cache-Control"] = "no-cache"
    return response
