"""Filename lookup for the files of a CDN group via HEAD requests."""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import List, Optional

import httpx

from models import FileInfo

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 20
DEFAULT_TIMEOUT_SECONDS = 10.0

# Parses: inline; filename="somefile.png"
_FILENAME_PATTERN = re.compile(r'filename="([^"]+)"')
_EXTENSION_PATTERN = re.compile(r"\.([a-zA-Z0-9]+)$")


def build_group_base_url(host: str, group_id: str, count: int) -> str:
    return f"https://{host}/{group_id}~{count}"


def build_file_url(base_url: str, index: int) -> str:
    return f"{base_url}/nth/{index}/"


def placeholder_filename(index: int) -> str:
    return f"File {index + 1}"


def parse_content_disposition_filename(header: Optional[str]) -> Optional[str]:
    """Return the quoted filename of a Content-Disposition header, if any."""
    if not header:
        return None
    match = _FILENAME_PATTERN.search(header)
    return match.group(1) if match else None


def get_extension_from_filename(filename: str) -> str:
    match = _EXTENSION_PATTERN.search(filename)
    return match.group(1).lower() if match else ""


async def fetch_single_file_info(client: httpx.AsyncClient, base_url: str, index: int) -> FileInfo:
    """
    Resolve one file's display name with a HEAD request.

    Any failure (network error, timeout, missing or malformed header) yields
    a "File N" placeholder for this index only.
    """
    file_url = build_file_url(base_url, index)
    try:
        response = await client.head(file_url)
        filename = parse_content_disposition_filename(response.headers.get("content-disposition"))
    except Exception as exc:
        logger.warning("HEAD %s failed: %s", file_url, exc)
        return FileInfo(index=index, url=file_url, filename=placeholder_filename(index), extension="")

    if filename is None:
        logger.debug("No filename in Content-Disposition for %s", file_url)
        filename = placeholder_filename(index)

    return FileInfo(
        index=index,
        url=file_url,
        filename=filename,
        extension=get_extension_from_filename(filename),
    )


async def fetch_file_infos(
    host: str,
    group_id: str,
    count: int,
    *,
    concurrency: int = DEFAULT_CONCURRENCY,
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    client: Optional[httpx.AsyncClient] = None,
) -> List[FileInfo]:
    """
    Fetch display metadata for every file of a group.

    At most ``concurrency`` HEAD requests are in flight at any moment. The
    result always has ``count`` entries ordered by index, whatever order the
    requests complete in. Never raises for per-file failures.

    Args:
        host: Allow-listed CDN host
        group_id: Group UUID
        count: Number of files in the group
        concurrency: Maximum simultaneous HEAD requests
        timeout_seconds: Per-request timeout when this function owns the client
        client: Optional shared client (used as-is, not closed)
    """
    if count <= 0:
        return []

    width = max(1, concurrency)
    base_url = build_group_base_url(host, group_id, count)
    semaphore = asyncio.Semaphore(width)

    async def _bounded(http: httpx.AsyncClient, index: int) -> FileInfo:
        async with semaphore:
            return await fetch_single_file_info(http, base_url, index)

    started = time.perf_counter()
    if client is not None:
        results = await asyncio.gather(*(_bounded(client, i) for i in range(count)))
    else:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            limits=httpx.Limits(max_connections=width, max_keepalive_connections=width),
        ) as owned_client:
            results = await asyncio.gather(*(_bounded(owned_client, i) for i in range(count)))

    ordered = sorted(results, key=lambda info: info.index)
    placeholders = sum(1 for info in ordered if info.is_placeholder)
    logger.info(
        "Resolved %d file(s) for group %s in %.2fs (%d placeholder(s))",
        len(ordered),
        group_id,
        time.perf_counter() - started,
        placeholders,
    )
    return ordered
