"""Rendering of the client-side connector script served to uploader pages."""

from __future__ import annotations

import hashlib
from typing import Iterable, Optional

from jinja2 import Environment

import json_utils as json

CONNECTOR_TEMPLATE = "uc-gallery-connect.js"


def render_connector_script(env: Environment, worker_url: str, debug: bool = False) -> str:
    """
    Render the connector script with the gallery URL baked in.

    The worker URL is emitted as a JSON string literal so quotes or
    ``</script>`` in configuration cannot break out of the script.
    """
    template = env.get_template(CONNECTOR_TEMPLATE)
    return template.render(
        worker_url_literal=json.dumps_for_script(worker_url),
        debug="true" if debug else "false",
    )


def compute_etag(body: str) -> str:
    """Strong ETag for a response body."""
    digest = hashlib.sha256(body.encode("utf-8")).hexdigest()
    return f'"{digest[:32]}"'


def etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    """True when an If-None-Match header covers the given ETag."""
    if not if_none_match:
        return False
    candidates: Iterable[str] = (item.strip() for item in if_none_match.split(","))
    for candidate in candidates:
        if candidate == "*":
            return True
        if candidate.startswith("W/"):
            candidate = candidate[2:]
        if candidate == etag:
            return True
    return False
