"""Inbound request-body decoding."""

from __future__ import annotations

import json
from typing import NoReturn, Optional

from pydantic import JsonValue

from beacon_conformance.models import BodyDecodeError


def _reject_constant(name: str) -> NoReturn:
    raise ValueError(f"{name} is not a JSON value")


def decode_body(raw: Optional[bytes]) -> JsonValue:
    """Decode a captured request body into a JSON value.

    The bytes are read as strict UTF-8 and parsed as JSON. Percent-escapes
    inside the text are payload content and are left as they are.

    Args:
        raw: Body bytes as captured, or None when the request had no body.

    Returns:
        The decoded JSON value. An absent or empty body decodes to ``{}``.

    Raises:
        BodyDecodeError: If the bytes are not valid UTF-8, not valid JSON,
            or nested too deeply to parse.
    """
    if not raw:
        return {}

    try:
        text = bytes(raw).decode("utf-8")
    except UnicodeDecodeError as e:
        raise BodyDecodeError(f"Body is not valid UTF-8: {e}") from e

    try:
        value: JsonValue = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise BodyDecodeError(f"Body is not valid JSON: {e}") from e
    return value
