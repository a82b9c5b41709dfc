"""
Connector script route.

Serves the small script uploader pages include to turn Uploadcare group
URLs into gallery URLs before their forms submit.
"""

from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.responses import Response

from config import Config
from services.connector_script import compute_etag, etag_matches, render_connector_script

from .app_state import app, get_config, templates

SCRIPT_MEDIA_TYPE = "application/javascript; charset=UTF-8"


@app.get("/uc-gallery-connect.js")
@app.get("/uploader.js", include_in_schema=False)
async def connector_script(
    request: Request,
    debug: Optional[str] = Query(default=None, description="'true' enables console logging"),
    cfg: Config = Depends(get_config),
):
    body = render_connector_script(templates.env, cfg.BRANDING.worker_url, debug=debug == "true")
    etag = compute_etag(body)
    headers = {
        "Cache-Control": (
            f"public, max-age={cfg.CACHE.script_browser_seconds}, "
            f"s-maxage={cfg.CACHE.script_cdn_seconds}"
        ),
        "Access-Control-Allow-Origin": "*",
        "ETag": etag,
    }

    if etag_matches(request.headers.get("if-none-match"), etag):
        return Response(status_code=304, headers=headers)

    return Response(content=body, media_type=SCRIPT_MEDIA_TYPE, headers=headers)
