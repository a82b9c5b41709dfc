"""Mock group contents for previewing branding without real CDN files."""

from __future__ import annotations

from typing import List

from models import FileInfo

# Not real Uploadcare values
DEMO_GROUP_ID = "demo-gallery"
DEMO_HOST = "demo.example.com"


def get_demo_file_infos() -> List[FileInfo]:
    """
    Return a fixed set of files covering every preview kind.

    Images come from picsum.photos, video and audio are MDN CC0 samples and
    the PDF is a W3C test file. The docx and zip entries use placeholder
    URLs and only ever show icons.
    """
    entries = [
        ("https://picsum.photos/id/1015/800/600", "mountain-landscape.jpg", "jpg"),
        ("https://picsum.photos/id/1025/800/600", "dog-portrait.png", "png"),
        ("https://picsum.photos/id/1035/800/600", "waterfall-scenic.webp", "webp"),
        (
            "https://interactive-examples.mdn.mozilla.net/media/cc0-videos/flower.mp4",
            "flower-timelapse.mp4",
            "mp4",
        ),
        (
            "https://interactive-examples.mdn.mozilla.net/media/cc0-audio/t-rex-roar.mp3",
            "t-rex-roar.mp3",
            "mp3",
        ),
        (
            "https://www.w3.org/WAI/ER/tests/xhtml/testfiles/resources/pdf/dummy.pdf",
            "sample-document.pdf",
            "pdf",
        ),
        (f"https://{DEMO_HOST}/files/meeting-notes.docx", "meeting-notes.docx", "docx"),
        (f"https://{DEMO_HOST}/files/project-assets.zip", "project-assets.zip", "zip"),
    ]
    return [
        FileInfo(index=index, url=url, filename=filename, extension=extension)
        for index, (url, filename, extension) in enumerate(entries)
    ]
