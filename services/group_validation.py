"""Validation of Uploadcare group URLs against the CDN allow-list."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Set, Union

from models import GroupDescriptor, GroupRejection, ValidationResult

logger = logging.getLogger(__name__)

# Matches group URLs (uuid~N) including single-file groups (uuid~1); some
# uploader integrations always append ~1 even for one file.
GROUP_URL_PATTERN = re.compile(r"https://([^/]+)/([a-f0-9-]{36})~([0-9]+)/?")

NO_URL_ERROR = "No URL provided"
INVALID_FORMAT_ERROR = "Invalid URL format"
UNAUTHORIZED_HOST_ERROR = "Unauthorized CDN host"
INVALID_COUNT_ERROR = "Invalid file count"


def parse_allowed_hosts(allowed_hosts: Union[str, Iterable[str]]) -> Set[str]:
    """Normalize a comma-separated string or an iterable of hosts into a set."""
    if isinstance(allowed_hosts, str):
        candidates = allowed_hosts.split(",")
    else:
        candidates = allowed_hosts
    return {host.strip() for host in candidates if host and host.strip()}


def validate_group_url(
    raw_url: Optional[str],
    allowed_hosts: Union[str, Iterable[str]],
    max_count: int,
) -> ValidationResult:
    """
    Parse and authorize a group URL.

    Host matching is exact and case-sensitive: no wildcard or suffix matches,
    so look-alike hosts such as ``x.ucarecdn.com.attacker.com`` never pass.

    Args:
        raw_url: Candidate URL, e.g. ``https://x.ucarecdn.com/<uuid>~3/``
        allowed_hosts: Comma-separated string or iterable of CDN hostnames
        max_count: Largest file count accepted

    Returns:
        GroupDescriptor when the URL is valid and authorized, otherwise a
        GroupRejection carrying the reason. Never raises.
    """
    if not raw_url:
        return _reject(NO_URL_ERROR, raw_url)

    match = GROUP_URL_PATTERN.fullmatch(raw_url)
    if not match:
        return _reject(INVALID_FORMAT_ERROR, raw_url)

    host, group_id, count_str = match.groups()

    if host not in parse_allowed_hosts(allowed_hosts):
        return _reject(UNAUTHORIZED_HOST_ERROR, raw_url)

    digits = count_str.lstrip("0")
    if not digits:
        return _reject(INVALID_COUNT_ERROR, raw_url)

    # Compare lengths first so huge digit strings never reach int()
    if len(digits) > len(str(max_count)) or int(digits) > max_count:
        return _reject(f"File count exceeds maximum ({max_count})", raw_url)

    count = int(digits)
    return GroupDescriptor(host=host, group_id=group_id, count=count)


def _reject(reason: str, raw_url: Optional[str]) -> GroupRejection:
    logger.info("Rejected group URL %r: %s", (raw_url or "")[:200], reason)
    return GroupRejection(error=reason)
