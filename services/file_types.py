"""
File type classification by extension.

A single table drives the category checks, the lightbox preview selection
and the icon picker, so the extension lists live in exactly one place.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet

from models import PreviewKind

EXTENSION_CATEGORIES: Dict[str, FrozenSet[str]] = {
    "image": frozenset({"jpg", "jpeg", "png", "gif", "webp", "svg", "bmp", "ico"}),
    "video": frozenset({"mp4", "mov", "avi", "webm", "mkv", "flv", "wmv", "m4v", "3gp"}),
    "audio": frozenset({"mp3", "wav", "flac", "aac", "ogg", "m4a", "wma", "aiff"}),
    "pdf": frozenset({"pdf"}),
    "document": frozenset({"doc", "docx", "rtf", "odt"}),
    "spreadsheet": frozenset({"xls", "xlsx", "csv", "ods", "numbers"}),
    "presentation": frozenset({"ppt", "pptx", "key", "odp"}),
    "archive": frozenset({"zip", "rar", "7z", "tar", "gz", "bz2", "xz", "tgz"}),
    "code": frozenset({
        "txt", "md", "json", "xml", "html", "css", "js", "ts", "py", "rb", "java",
        "c", "cpp", "h", "sh", "yaml", "yml", "toml", "ini", "log",
    }),
}

# Formats browsers play natively in a <video> element
NATIVE_VIDEO_EXTENSIONS: FrozenSet[str] = frozenset({"mp4", "webm", "mov"})

# Icon lookup order; the first family containing the extension wins
ICON_FAMILIES = ("video", "pdf", "document", "spreadsheet", "presentation", "archive", "audio", "code")

_URL_EXTENSION_PATTERN = re.compile(r"\.([a-zA-Z0-9]+)(?:\?|$)")


def _in_category(ext: str, category: str) -> bool:
    return ext in EXTENSION_CATEGORIES[category]


def is_image_extension(ext: str) -> bool:
    return _in_category(ext, "image")


def is_video_extension(ext: str) -> bool:
    return _in_category(ext, "video")


def is_pdf_extension(ext: str) -> bool:
    return _in_category(ext, "pdf")


def is_audio_extension(ext: str) -> bool:
    return _in_category(ext, "audio")


def is_lightbox_previewable(ext: str) -> bool:
    """Images and browser-native video can be shown inline in the lightbox."""
    return is_image_extension(ext) or ext in NATIVE_VIDEO_EXTENSIONS


def get_preview_type(ext: str, pdf_preview_enabled: bool, audio_preview_enabled: bool) -> PreviewKind:
    """
    Pick the lightbox rendering strategy for an extension.

    Video files outside the browser-native subset (e.g. avi) are classified
    as video but still degrade to "icon", as do PDF and audio files when
    their preview toggle is off.
    """
    if is_image_extension(ext):
        return "image"
    if ext in NATIVE_VIDEO_EXTENSIONS:
        return "video"
    if is_pdf_extension(ext) and pdf_preview_enabled:
        return "pdf"
    if is_audio_extension(ext) and audio_preview_enabled:
        return "audio"
    return "icon"


def get_icon_name(ext: str) -> str:
    """Name of the icon family drawn for files without a thumbnail."""
    for family in ICON_FAMILIES:
        if _in_category(ext, family):
            return family
    return "file"


def get_file_extension_from_url(url: str) -> str:
    match = _URL_EXTENSION_PATTERN.search(url)
    return match.group(1).lower() if match else ""
