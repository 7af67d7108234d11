"""Best-effort JSON extraction from free-text model output."""

from __future__ import annotations

import json
from typing import Any

from .errors import NOT_JSON, FormatError


def _reject_constant(name: str) -> Any:
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"invalid JSON constant: {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def parse_model_json(text: str) -> Any:
    """Parse model output as JSON, tolerating prose around the object.

    Strict parsing is tried first. If that fails, the slice from the first
    ``{`` to the last ``}`` (inclusive) is parsed instead. The result is
    returned as-is; its shape is not checked.

    Raises:
        FormatError: no brace pair exists, or the slice is not JSON either.
    """
    try:
        return _loads(text)
    except (TypeError, ValueError, RecursionError):
        pass

    start, end = text.find("{"), text.rfind("}")
    if start == -1 or end == -1 or start > end:
        raise FormatError(NOT_JSON)
    try:
        return _loads(text[start : end + 1])
    except (ValueError, RecursionError) as exc:
        raise FormatError(NOT_JSON) from exc
