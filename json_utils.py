"""
JSON utilities using orjson for the Uploadcare Gallery service
==============================================================

Provides a json-module-like interface on top of orjson, plus a helper that
produces JSON safe to embed inside an inline <script> element.
"""

import orjson
from typing import Any, Callable, Optional


def dumps(obj: Any, indent: Optional[int] = None, default: Optional[Callable] = None) -> str:
    """
    Serialize obj to a JSON string using orjson

    Args:
        obj: Object to serialize
        indent: Any non-None value pretty prints with two spaces
        default: Callable for objects that cannot be serialized (e.g., default=str)

    Returns:
        JSON string (orjson itself returns bytes)
    """
    option = orjson.OPT_SERIALIZE_UUID | orjson.OPT_NON_STR_KEYS
    if indent is not None:
        option |= orjson.OPT_INDENT_2
    return orjson.dumps(obj, default=default, option=option).decode("utf-8")


def loads(s: Any) -> Any:
    """Deserialize a JSON string or bytes to a Python object."""
    return orjson.loads(s)


def dumps_for_script(obj: Any) -> str:
    """
    Serialize obj for inline <script> embedding.

    Escapes ``<``, ``>``, ``&`` and the JS line separators so the output can
    never close the surrounding script tag or open an HTML comment.
    """
    text = dumps(obj)
    return (
        text.replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
        .replace("\u2028", "\\u2028")
        .replace("\u2029", "\\u2029")
    )


# Provide compatibility constants
JSONDecodeError = orjson.JSONDecodeError
