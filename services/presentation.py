"""
Template context assembly for the gallery and error pages.

Turns a validated group, its resolved file metadata and the service
configuration into plain dictionaries consumed by the Jinja2 templates.
HTML escaping is left to template autoescaping.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote, quote_plus

from config import VERSION, Config, get_host_from_url
from models import FileCard, FileInfo
from services.file_types import (
    get_icon_name,
    get_preview_type,
    is_image_extension,
    is_pdf_extension,
    is_video_extension,
)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

IMAGE_PREVIEW_TRANSFORM = "-/preview/1200x750/-/quality/smart/-/format/auto/"
FRAME_PREVIEW_TRANSFORM = "-/preview/1200x750/-/format/jpeg/"
DOWNLOAD_SUFFIX = "-/inline/no/"


def parse_timestamp(raw: Optional[str]) -> Optional[int]:
    """Parse the ``ts`` query value; junk after the leading digits is ignored."""
    if not raw:
        return None
    match = _LEADING_INT.match(raw)
    if not match:
        return None
    value = int(match.group(1))
    try:
        datetime.fromtimestamp(value, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return value


def _hour_12(hour: int) -> tuple:
    ampm = "PM" if hour >= 12 else "AM"
    return (hour % 12 or 12), ampm


def format_timestamp(ts: int) -> str:
    """Long UTC form, e.g. ``Jan 5, 2024 at 3:07 PM UTC``."""
    date = datetime.fromtimestamp(ts, tz=timezone.utc)
    hours, ampm = _hour_12(date.hour)
    return f"{_MONTHS[date.month - 1]} {date.day}, {date.year} at {hours}:{date.minute:02d} {ampm} UTC"


def format_timestamp_short(ts: int) -> str:
    """Short UTC form, e.g. ``1/5/24 3:07 PM``."""
    date = datetime.fromtimestamp(ts, tz=timezone.utc)
    hours, ampm = _hour_12(date.hour)
    return f"{date.month}/{date.day}/{str(date.year)[-2:]} {hours}:{date.minute:02d} {ampm}"


def font_stylesheet_urls(cfg: Config) -> List[str]:
    """Stylesheets to load: the custom font CSS, or Google Fonts for both families."""
    branding = cfg.BRANDING
    if branding.font_css_url:
        return [branding.font_css_url]
    body = quote_plus(branding.font_body)
    display = quote_plus(branding.font_display)
    return [
        "https://fonts.googleapis.com/css2?family="
        f"{body}:wght@300;400;500;600&family={display}:wght@400;500;700&display=swap"
    ]


def build_file_cards(
    cfg: Config,
    base_url: str,
    file_infos: Sequence[FileInfo],
    demo_mode: bool = False,
) -> List[FileCard]:
    features = cfg.FEATURES
    main_action = cfg.get_main_action()
    cards: List[FileCard] = []

    for position, info in enumerate(file_infos):
        ext = info.extension
        file_url = info.url
        download_url = file_url if demo_mode else f"{file_url}{DOWNLOAD_SUFFIX}"

        thumbnail_url: Optional[str] = None
        if demo_mode:
            if is_image_extension(ext):
                thumbnail_url = file_url
        elif is_image_extension(ext):
            thumbnail_url = f"{base_url}/nth/{position}/{IMAGE_PREVIEW_TRANSFORM}"
        elif is_video_extension(ext) or is_pdf_extension(ext):
            # The CDN renders the first video frame / first PDF page as an image
            thumbnail_url = f"{base_url}/nth/{position}/{FRAME_PREVIEW_TRANSFORM}"

        preview_type = get_preview_type(ext, features.enable_pdf_preview, features.enable_audio_preview)

        effective_action = main_action
        if main_action == "lightbox" and preview_type == "icon":
            effective_action = "download"

        cards.append(
            FileCard(
                index=position,
                url=file_url,
                filename=info.filename,
                extension=ext,
                download_url=download_url,
                thumbnail_url=thumbnail_url,
                icon=get_icon_name(ext),
                preview_type=preview_type,
                main_href=file_url if effective_action == "open" else download_url,
                opens_new_tab=effective_action == "open",
                lightbox=features.enable_lightbox,
            )
        )
    return cards


def _common_context(cfg: Config) -> Dict[str, Any]:
    return {
        "version": VERSION,
        "branding": cfg.BRANDING,
        "theme": cfg.THEME,
        "features": cfg.FEATURES,
        "company_domain": cfg.company_domain(),
        "font_stylesheets": font_stylesheet_urls(cfg),
        "uses_google_fonts": not cfg.BRANDING.font_css_url,
    }


def build_gallery_context(
    cfg: Config,
    *,
    base_url: str,
    group_id: str,
    count: int,
    original_url: str,
    page_slug: str,
    timestamp: Optional[int],
    file_infos: Sequence[FileInfo],
    demo_mode: bool = False,
) -> Dict[str, Any]:
    cards = build_file_cards(cfg, base_url, file_infos, demo_mode=demo_mode)
    main_action = cfg.get_main_action()
    jszip = cfg.get_jszip_config()

    context = _common_context(cfg)
    context.update(
        {
            "count": count,
            "cards": cards,
            "original_url": original_url,
            "page_slug": page_slug,
            "page_slug_url": f"{cfg.BRANDING.company_url.rstrip('/')}/{quote(page_slug, safe='/')}",
            "timestamp": timestamp,
            "timestamp_long": format_timestamp(timestamp) if timestamp else None,
            "timestamp_short": format_timestamp_short(timestamp) if timestamp else None,
            "main_action": main_action,
            "grid_columns": cfg.FEATURES.default_grid_columns,
            "jszip": jszip,
            "demo_mode": demo_mode,
            "script_data": {
                "groupId": group_id,
                "count": count,
                "fileUrls": [card.url for card in cards],
                "downloadUrls": [card.download_url for card in cards],
                "filenames": [card.filename for card in cards],
                "pageSlug": page_slug,
                "timestamp": timestamp,
                "mainAction": main_action,
                "videoAutoplay": cfg.FEATURES.video_autoplay,
                "lightbox": cfg.FEATURES.enable_lightbox,
            },
        }
    )
    return context


def build_error_context(cfg: Config, error: str) -> Dict[str, Any]:
    context = _common_context(cfg)
    context["error"] = error
    return context


def jszip_hosts(cfg: Config) -> List[str]:
    """Distinct hosts JSZip may be loaded from, primary first."""
    jszip = cfg.get_jszip_config()
    hosts: List[str] = []
    for url in (jszip["primary"], jszip["fallback"]):
        host = get_host_from_url(url)
        if host and host not in hosts:
            hosts.append(host)
    return hosts
