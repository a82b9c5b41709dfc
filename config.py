"""
Configuration for the Uploadcare Gallery service
================================================

Central configuration management for CDN access limits, branding, theme
colors, feature toggles and cache lifetimes. Values are read once from the
environment (and an optional .env file) when the module is imported.

The validation and metadata layers never read this module directly; the
HTTP layer hands them the values they need as plain parameters.
"""

import os
from typing import Dict, Optional, Set
from urllib.parse import urlparse

from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


# Version constant (used in the footer, /health and script ETags)
VERSION = "1.8.0"

DEFAULT_MAX_GROUP_FILE_COUNT = 50
HEAD_REQUEST_CONCURRENCY = 20

DEFAULT_JSZIP_URL = "https://cdnjs.cloudflare.com/ajax/libs/jszip/3.10.1/jszip.min.js"
DEFAULT_JSZIP_INTEGRITY = (
    "sha512-XMVd28F1oH/O71fzwBnV7HucLxVwtxf26XV8P4wPk26EDxuGZ91N8bsOttmnomcCD3CS5ZMRL50H0GgOHvegtg=="
)

MAIN_ACTIONS = ("lightbox", "download", "open")
GRID_COLUMN_CHOICES = (1, 2, 3, 4)


def _env_flag(name: str, default_enabled: bool = True) -> bool:
    """Read a "true"/"false" feature toggle.

    Default-on toggles are only disabled by the literal "false"; opt-in
    toggles are only enabled by the literal "true".
    """
    value = os.getenv(name)
    if default_enabled:
        return value != "false"
    return value == "true"


def _env_int(name: str, default: int, minimum: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        parsed = int(raw)
    except ValueError:
        return default
    if minimum is not None and parsed < minimum:
        return default
    return parsed


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


class GroupSettings(BaseModel):
    """Limits that gate which CDN groups may be rendered and how they are fetched."""

    model_config = {"frozen": True}

    allowed_cdn_hosts: str = Field(
        default="",
        description="Comma-separated CDN hostnames allowed as group origins",
    )
    max_group_file_count: int = Field(
        default=DEFAULT_MAX_GROUP_FILE_COUNT,
        ge=1,
        description="Maximum number of files accepted in a group URL",
    )
    head_request_concurrency: int = Field(
        default=HEAD_REQUEST_CONCURRENCY,
        ge=1,
        description="Maximum HEAD requests in flight while resolving filenames",
    )
    head_request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout applied to each HEAD request",
    )

    def allowed_hosts(self) -> Set[str]:
        """Return the trimmed allow-list as a set, ignoring blank entries."""
        return {host.strip() for host in self.allowed_cdn_hosts.split(",") if host.strip()}


class BrandingSettings(BaseModel):
    """Company identity shown in the gallery header and footer."""

    company_name: str = Field(default="Company", description="Display name in UI")
    company_url: str = Field(default="https://example.com", description="Link destination for logo")
    worker_url: str = Field(default="http://localhost:8000/", description="Public URL of this service")
    brand_color: str = Field(default="#2563eb", description="Primary brand color (hex)")
    logo_svg: Optional[str] = Field(default=None, description="Inline SVG logo (preferred)")
    logo_url: Optional[str] = Field(default=None, description="Alternative logo image URL")
    favicon_url: str = Field(default="/favicon.ico", description="Favicon URL")
    font_body: str = Field(default="Inter", description="Body text font family")
    font_display: str = Field(default="JetBrains Mono", description="Heading font family")
    font_css_url: Optional[str] = Field(default=None, description="Custom font CSS URL (skips Google Fonts)")
    header_title: str = Field(default="Attachments", description="Title shown next to the logo")


class ThemeSettings(BaseModel):
    """Theme colors with light-theme defaults."""

    success_color: str = "#16a34a"
    link_hover_color: str = "inherit"
    bg_color: str = "#ffffff"
    panel_color: str = "#f9fafb"
    surface_color: str = "#f3f4f6"
    border_color: str = "#e5e7eb"
    text_color: str = "#111827"
    text_secondary_color: str = "#6b7280"
    text_muted_color: str = "#9ca3af"
    header_bg: str = "#ffffffcc"


class FeatureSettings(BaseModel):
    """Feature toggles and gallery layout options."""

    enable_zip_download: bool = True
    enable_open_all: bool = True
    enable_share_button: bool = True
    enable_lightbox: bool = True
    enable_pdf_preview: bool = True
    enable_audio_preview: bool = True
    enable_demo: bool = False
    video_autoplay: bool = False
    main_action: str = Field(default="lightbox", description="lightbox, download or open")
    default_grid_columns: int = Field(default=2, description="Initial grid columns (1-4)")
    image_fit: str = Field(default="contain", description="Thumbnail fit: contain or cover")


class CacheSettings(BaseModel):
    """Cache lifetimes in seconds."""

    gallery_seconds: int = Field(default=3600, ge=0)
    script_browser_seconds: int = Field(default=60, ge=0)
    script_cdn_seconds: int = Field(default=604800, ge=0)


class JsZipSettings(BaseModel):
    """Where the gallery loads JSZip from for the ZIP download button."""

    url: Optional[str] = None
    fallback_url: Optional[str] = None
    integrity: Optional[str] = None


class Config(BaseModel):
    """Main configuration class"""

    model_config = {"populate_by_name": True}

    GROUPS: GroupSettings = Field(default_factory=GroupSettings, description="CDN group limits")
    BRANDING: BrandingSettings = Field(default_factory=BrandingSettings, description="Branding settings")
    THEME: ThemeSettings = Field(default_factory=ThemeSettings, description="Theme colors")
    FEATURES: FeatureSettings = Field(default_factory=FeatureSettings, description="Feature toggles")
    CACHE: CacheSettings = Field(default_factory=CacheSettings, description="Cache lifetimes")
    JSZIP: JsZipSettings = Field(default_factory=JsZipSettings, description="JSZip loader settings")

    # FastAPI Configuration
    APP_HOST: str = Field(default="0.0.0.0", description="FastAPI host")
    APP_PORT: int = Field(default=8000, description="FastAPI port")
    APP_RELOAD: bool = Field(default=False, description="FastAPI reload mode")
    APP_WORKERS: int = Field(default=2, description="Gunicorn worker processes")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    def __init__(self, **data):
        super().__init__(**data)
        self.load_from_environment()

    def load_from_environment(self):
        """Load configuration from environment variables."""
        # GroupSettings is frozen, so it is rebuilt rather than mutated
        self.GROUPS = GroupSettings(
            allowed_cdn_hosts=os.getenv("ALLOWED_CDN_HOSTS", self.GROUPS.allowed_cdn_hosts),
            max_group_file_count=_env_int(
                "MAX_GROUP_FILE_COUNT", self.GROUPS.max_group_file_count, minimum=1
            ),
            head_request_concurrency=_env_int(
                "HEAD_REQUEST_CONCURRENCY", self.GROUPS.head_request_concurrency, minimum=1
            ),
            head_request_timeout_seconds=_env_float(
                "HEAD_REQUEST_TIMEOUT_SECONDS", self.GROUPS.head_request_timeout_seconds
            ),
        )

        branding = self.BRANDING
        branding.company_name = os.getenv("COMPANY_NAME", branding.company_name)
        branding.company_url = os.getenv("COMPANY_URL", branding.company_url)
        branding.worker_url = os.getenv("WORKER_URL", branding.worker_url)
        branding.brand_color = os.getenv("BRAND_COLOR", branding.brand_color)
        branding.logo_svg = os.getenv("LOGO_SVG") or branding.logo_svg
        branding.logo_url = os.getenv("LOGO_URL") or branding.logo_url
        branding.favicon_url = os.getenv("FAVICON_URL", branding.favicon_url)
        branding.font_body = os.getenv("FONT_BODY", branding.font_body)
        branding.font_display = os.getenv("FONT_DISPLAY", branding.font_display)
        branding.font_css_url = os.getenv("FONT_CSS_URL") or branding.font_css_url
        branding.header_title = os.getenv("HEADER_TITLE") or branding.header_title

        theme = self.THEME
        theme.success_color = os.getenv("SUCCESS_COLOR") or theme.success_color
        theme.link_hover_color = os.getenv("LINK_HOVER_COLOR") or theme.link_hover_color
        theme.bg_color = os.getenv("BG_COLOR") or theme.bg_color
        theme.panel_color = os.getenv("PANEL_COLOR") or theme.panel_color
        theme.surface_color = os.getenv("SURFACE_COLOR") or theme.surface_color
        theme.border_color = os.getenv("BORDER_COLOR") or theme.border_color
        theme.text_color = os.getenv("TEXT_COLOR") or theme.text_color
        theme.text_secondary_color = os.getenv("TEXT_SECONDARY_COLOR") or theme.text_secondary_color
        theme.text_muted_color = os.getenv("TEXT_MUTED_COLOR") or theme.text_muted_color
        theme.header_bg = os.getenv("HEADER_BG") or theme.header_bg

        features = self.FEATURES
        features.enable_zip_download = _env_flag("ENABLE_ZIP_DOWNLOAD")
        features.enable_open_all = _env_flag("ENABLE_OPEN_ALL")
        features.enable_share_button = _env_flag("ENABLE_SHARE_BUTTON")
        features.enable_lightbox = _env_flag("ENABLE_LIGHTBOX")
        features.enable_pdf_preview = _env_flag("ENABLE_PDF_PREVIEW")
        features.enable_audio_preview = _env_flag("ENABLE_AUDIO_PREVIEW")
        features.enable_demo = _env_flag("ENABLE_DEMO", default_enabled=False)
        features.video_autoplay = _env_flag("VIDEO_AUTOPLAY", default_enabled=False)
        features.main_action = os.getenv("MAIN_ACTION") or features.main_action

        grid_columns = _env_int("DEFAULT_GRID_COLUMNS", features.default_grid_columns)
        features.default_grid_columns = grid_columns if grid_columns in GRID_COLUMN_CHOICES else 2
        features.image_fit = "cover" if os.getenv("IMAGE_FIT") == "cover" else "contain"

        cache = self.CACHE
        cache.gallery_seconds = _env_int("CACHE_GALLERY_SECONDS", cache.gallery_seconds, minimum=0)
        cache.script_browser_seconds = _env_int(
            "CACHE_SCRIPT_BROWSER_SECONDS", cache.script_browser_seconds, minimum=0
        )
        cache.script_cdn_seconds = _env_int("CACHE_SCRIPT_CDN_SECONDS", cache.script_cdn_seconds, minimum=0)

        self.JSZIP.url = os.getenv("JSZIP_URL") or self.JSZIP.url
        self.JSZIP.fallback_url = os.getenv("JSZIP_FALLBACK_URL") or self.JSZIP.fallback_url
        # An explicitly empty JSZIP_INTEGRITY disables SRI for a custom URL
        self.JSZIP.integrity = os.getenv("JSZIP_INTEGRITY", self.JSZIP.integrity or "") or None

        # FastAPI Configuration
        self.APP_HOST = os.getenv("APP_HOST", self.APP_HOST)
        self.APP_PORT = _env_int("APP_PORT", self.APP_PORT, minimum=1)
        self.APP_RELOAD = os.getenv("APP_RELOAD", "false").lower() == "true"
        self.APP_WORKERS = _env_int("APP_WORKERS", self.APP_WORKERS, minimum=1)
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", self.LOG_LEVEL).upper()

    def get_main_action(self) -> str:
        """
        Resolve the effective card click action.

        Returns "lightbox" (default when enabled), "download" or "open". A
        lightbox request with the lightbox disabled falls back to download.
        """
        action = self.FEATURES.main_action or "lightbox"
        lightbox_enabled = self.FEATURES.enable_lightbox

        if action == "lightbox" and not lightbox_enabled:
            return "download"
        if action in MAIN_ACTIONS:
            return action
        return "lightbox" if lightbox_enabled else "download"

    def get_jszip_config(self) -> Dict[str, Optional[str]]:
        """
        Return the JSZip primary URL, fallback URL and SRI integrity.

        The default URL always uses the default integrity. A custom URL uses
        the custom integrity when one is configured and skips SRI otherwise.
        """
        is_custom_url = bool(self.JSZIP.url)
        primary = self.JSZIP.url or DEFAULT_JSZIP_URL
        fallback = self.JSZIP.fallback_url or DEFAULT_JSZIP_URL

        if not is_custom_url:
            integrity = DEFAULT_JSZIP_INTEGRITY
        else:
            integrity = self.JSZIP.integrity or None

        return {"primary": primary, "fallback": fallback, "integrity": integrity}

    def company_domain(self) -> str:
        """Company URL without scheme and trailing slash, for display."""
        url = self.BRANDING.company_url
        for prefix in ("https://", "http://"):
            if url.startswith(prefix):
                url = url[len(prefix):]
                break
        return url.rstrip("/")


def get_host_from_url(url: Optional[str]) -> Optional[str]:
    """Return the host[:port] part of a URL, or None when it has none."""
    if not url:
        return None
    try:
        netloc = urlparse(url).netloc
    except ValueError:
        return None
    return netloc or None


# Global configuration instance
config = Config()


def get_config() -> Config:
    """FastAPI dependency returning the process-wide configuration."""
    return config
