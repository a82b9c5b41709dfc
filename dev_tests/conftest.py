"""Shared pytest fixtures for Uploadcare Gallery tests."""

import pytest
from unittest.mock import patch
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


GROUP_ID = "11111111-1111-1111-1111-111111111111"
CDN_HOST = "abc123.ucarecdn.com"

# Every variable Config reads; cleared so a developer's .env cannot leak into tests
CONFIG_ENV_VARS = [
    "ALLOWED_CDN_HOSTS", "MAX_GROUP_FILE_COUNT", "HEAD_REQUEST_CONCURRENCY",
    "HEAD_REQUEST_TIMEOUT_SECONDS", "COMPANY_NAME", "COMPANY_URL", "WORKER_URL",
    "BRAND_COLOR", "LOGO_SVG", "LOGO_URL", "FAVICON_URL", "FONT_BODY", "FONT_DISPLAY",
    "FONT_CSS_URL", "HEADER_TITLE", "SUCCESS_COLOR", "LINK_HOVER_COLOR", "BG_COLOR",
    "PANEL_COLOR", "SURFACE_COLOR", "BORDER_COLOR", "TEXT_COLOR", "TEXT_SECONDARY_COLOR",
    "TEXT_MUTED_COLOR", "HEADER_BG", "ENABLE_ZIP_DOWNLOAD", "ENABLE_OPEN_ALL",
    "ENABLE_SHARE_BUTTON", "ENABLE_LIGHTBOX", "ENABLE_PDF_PREVIEW", "ENABLE_AUDIO_PREVIEW",
    "ENABLE_DEMO", "VIDEO_AUTOPLAY", "MAIN_ACTION", "DEFAULT_GRID_COLUMNS", "IMAGE_FIT",
    "CACHE_GALLERY_SECONDS", "CACHE_SCRIPT_BROWSER_SECONDS", "CACHE_SCRIPT_CDN_SECONDS",
    "JSZIP_URL", "JSZIP_FALLBACK_URL", "JSZIP_INTEGRITY", "APP_HOST", "APP_PORT",
    "APP_RELOAD", "APP_WORKERS", "LOG_LEVEL",
]


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture
def clean_env():
    """Provide an environment without any gallery configuration."""
    with patch.dict(os.environ, {}, clear=False):
        for key in CONFIG_ENV_VARS:
            os.environ.pop(key, None)
        yield


@pytest.fixture
def make_config(clean_env):
    """Build a Config from the given environment overrides."""
    def _make(**env):
        from config import Config
        with patch.dict(os.environ, env, clear=False):
            return Config()
    return _make


@pytest.fixture
def test_config(make_config):
    """Config allowing the test CDN host with default limits."""
    return make_config(
        ALLOWED_CDN_HOSTS=CDN_HOST,
        COMPANY_NAME="Acme",
        COMPANY_URL="https://acme.example/",
        WORKER_URL="https://gallery.acme.example/",
    )


# ============================================================================
# Model Fixtures
# ============================================================================

@pytest.fixture
def group_base_url():
    return f"https://{CDN_HOST}/{GROUP_ID}~3"


@pytest.fixture
def sample_file_infos(group_base_url):
    """Three resolved files: an image, a PDF and an unresolved placeholder."""
    from models import FileInfo
    return [
        FileInfo(index=0, url=f"{group_base_url}/nth/0/", filename="photo.jpg", extension="jpg"),
        FileInfo(index=1, url=f"{group_base_url}/nth/1/", filename="report.pdf", extension="pdf"),
        FileInfo(index=2, url=f"{group_base_url}/nth/2/", filename="File 3", extension=""),
    ]

