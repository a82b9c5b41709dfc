"""
Uploadcare Gallery - Branded Attachment Viewer
==============================================

Renders a branded gallery page for an Uploadcare file group URL and serves
the connector script that rewrites group URLs into gallery URLs on the
uploader's page.

Features:
- Allow-listed CDN hosts with a file-count ceiling
- Concurrency-limited HEAD lookups for real filenames
- Lightbox previews for images, native video, PDF and audio
- Configurable branding, theme colors and feature toggles
"""

from pathlib import Path
import logging

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from starlette.middleware.gzip import GZipMiddleware

import json_utils as json
from config import VERSION, config, get_config  # noqa: F401

# Setup logging
logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
    ]
)

# Silence low-level HTTP connection logs from the HEAD lookups
_noisy_loggers = [
    'httpcore',
    'httpcore.connection',
    'httpcore.http11',
    'httpcore.http2',
    'httpx',
]
for _logger_name in _noisy_loggers:
    logging.getLogger(_logger_name).setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

app = FastAPI(
    title="Uploadcare Gallery",
    description="Branded gallery view for Uploadcare file groups",
    version=VERSION,
    docs_url=None,
    redoc_url=None,
)

# Add GZip compression middleware (compresses responses > 1000 bytes)
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Content-Security-Policy and related headers on every response
from .security import SecurityHeadersMiddleware
app.add_middleware(SecurityHeadersMiddleware)

# Templates
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["script_json"] = json.dumps_for_script
