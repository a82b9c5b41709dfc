"""
Security headers for the Uploadcare Gallery service.
====================================================

Builds the Content-Security-Policy from configuration and attaches it,
together with a few hardening headers, to every response.

Usage:
    from core.security import SecurityHeadersMiddleware
    app.add_middleware(SecurityHeadersMiddleware)
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from config import Config, get_config, get_host_from_url
from services.presentation import jszip_hosts

logger = logging.getLogger(__name__)

# =============================================================================
# CONFIGURATION
# =============================================================================

GOOGLE_FONTS_CSS_HOST = "fonts.googleapis.com"
GOOGLE_FONTS_FILE_HOST = "fonts.gstatic.com"

STATIC_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def build_content_security_policy(cfg: Config) -> str:
    """
    Build the Content-Security-Policy header value.

    Inline scripts and styles are allowed (the pages are self-contained);
    external scripts are limited to the JSZip hosts and stylesheets/fonts to
    the configured font host or Google Fonts.
    """
    script_sources: List[str] = ["'self'", "'unsafe-inline'"]
    script_sources.extend(jszip_hosts(cfg))

    style_sources: List[str] = ["'self'", "'unsafe-inline'"]
    font_sources: List[str] = ["'self'"]
    font_css_host: Optional[str] = get_host_from_url(cfg.BRANDING.font_css_url)
    if cfg.BRANDING.font_css_url:
        # Custom fonts are assumed to be served from the stylesheet host
        if font_css_host:
            style_sources.append(font_css_host)
            font_sources.append(font_css_host)
    else:
        style_sources.append(GOOGLE_FONTS_CSS_HOST)
        font_sources.append(GOOGLE_FONTS_FILE_HOST)

    directives = [
        "default-src 'self'",
        f"script-src {' '.join(script_sources)}",
        f"style-src {' '.join(style_sources)}",
        f"font-src {' '.join(font_sources)}",
        "img-src 'self' data: blob: https:",
        "media-src https:",
        "frame-src https:",
        "connect-src 'self' https:",
        "base-uri 'self'",
        "form-action 'self'",
    ]
    return "; ".join(directives)


# =============================================================================
# MIDDLEWARE
# =============================================================================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds the CSP and hardening headers to HTML responses
    and the nosniff/referrer headers to everything else.

    The policy is rebuilt per response from the same configuration the
    routes receive, including any `get_config` dependency override.
    """

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        for name, value in STATIC_SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        content_type = response.headers.get("content-type", "")
        if content_type.startswith("text/html"):
            cfg = request.app.dependency_overrides.get(get_config, get_config)()
            response.headers["Content-Security-Policy"] = build_content_security_policy(cfg)

        return response
