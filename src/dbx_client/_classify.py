"""Response classifier — maps a status code and error body onto the error taxonomy.

The classifier is transport-independent: both client flavors read the
body once and hand ``(status, body)`` here. It never raises on a
malformed body; every structured-parse attempt falls back to the raw text.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

from dbx_client._errors import (
    AccessError,
    ConflictError,
    DropboxError,
    ExistedError,
    FromLookupError,
    InvalidTokenError,
    OtherError,
    PathError,
    RequestLimitsError,
    ServerError,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

log = logging.getLogger(__name__)

OK = 200

SUMMARY_DELIMITER = "/"

# 409 summaries: leading segment -> error kind carrying the remainder.
CONFLICT_PREFIXES: dict[str, type[DropboxError]] = {
    "path": PathError,
    "from_lookup": FromLookupError,
    "to": ExistedError,
}

_ENVELOPE_STATUSES: dict[int, type[DropboxError]] = {
    401: InvalidTokenError,
    403: AccessError,
}
_RAW_TEXT_STATUSES: dict[int, type[DropboxError]] = {
    400: PathError,
    500: ServerError,
    503: ServerError,
}

_MAX_RETRY_AFTER = 2**32 - 1


def body_text(body: bytes) -> str:
    """Decode a response body for use as an error message. Never raises."""
    return body.decode("utf-8", errors="replace")


def _load_object(text: str) -> Optional[dict[str, Any]]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def _has_tag(value: object) -> bool:
    if not isinstance(value, dict):
        return False
    tag = value.get(".tag", value.get("tag"))
    return isinstance(tag, str)


def parse_error_summary(text: str) -> Optional[str]:
    """Return ``error_summary`` from a structured error envelope, or ``None``.

    The envelope is ``{"error_summary": str, "error": {".tag": str, ...}}``.
    """
    data = _load_object(text)
    if data is None:
        return None
    summary = data.get("error_summary")
    if not isinstance(summary, str) or not _has_tag(data.get("error")):
        return None
    return summary


def parse_rate_limit(text: str) -> Optional[tuple[str, int]]:
    """Return ``(error_summary, retry_after)`` from a rate-limit envelope, or ``None``.

    The envelope nests a ``reason`` tag and a ``retry_after`` count of
    seconds inside ``error``.
    """
    data = _load_object(text)
    if data is None:
        return None
    summary = data.get("error_summary")
    error = data.get("error")
    if not isinstance(summary, str) or not isinstance(error, dict):
        return None
    retry_after = error.get("retry_after")
    if not _has_tag(error.get("reason")):
        return None
    # bool is an int subclass; reject it explicitly
    if not isinstance(retry_after, int) or isinstance(retry_after, bool):
        return None
    if not 0 <= retry_after <= _MAX_RETRY_AFTER:
        return None
    return summary, retry_after


def split_error_summary(summary: str) -> tuple[str, Optional[str]]:
    """Split a summary on its first delimiter into ``(prefix, remainder)``.

    The remainder is kept verbatim, further delimiters included. Without a
    delimiter the remainder is ``None``.
    """
    prefix, sep, remainder = summary.partition(SUMMARY_DELIMITER)
    if not sep:
        return summary, None
    return prefix, remainder


def classify_conflict(summary: str, *, status: int = 409) -> DropboxError:
    """Prefix dispatch for 409 summaries.

    ``path/...`` -> :class:`PathError`, ``from_lookup/...`` ->
    :class:`FromLookupError`, ``to/...`` -> :class:`ExistedError`, each
    with the remainder as message. Anything else, including a recognized
    word with no delimiter after it, is a :class:`ConflictError` carrying
    the whole summary.
    """
    prefix, remainder = split_error_summary(summary)
    kind = CONFLICT_PREFIXES.get(prefix)
    if kind is None or remainder is None:
        return ConflictError(summary, status=status)
    return kind(remainder, status=status)


def classify(
    status: int,
    body: bytes,
    *,
    overrides: Optional[Mapping[int, type[DropboxError]]] = None,
) -> Optional[DropboxError]:
    """Classify a response.

    :param status: HTTP status code.
    :param body: The full response body (read once by the caller).
    :param overrides: Per-operation status -> error kind, built from the raw
        body text. Consulted before the default table.
    :returns: ``None`` for 200, otherwise the error to raise.
    """
    if status == OK:
        return None
    error = _classify_failure(status, body_text(body), overrides)
    log.debug("Classified HTTP %d as %s", status, type(error).__name__)
    return error


def _classify_failure(
    status: int,
    text: str,
    overrides: Optional[Mapping[int, type[DropboxError]]],
) -> DropboxError:
    if overrides and status in overrides:
        return overrides[status](text, status=status)

    if status in _RAW_TEXT_STATUSES:
        return _RAW_TEXT_STATUSES[status](text, status=status)

    if status in _ENVELOPE_STATUSES:
        summary = parse_error_summary(text)
        return _ENVELOPE_STATUSES[status](text if summary is None else summary, status=status)

    if status == 409:
        summary = parse_error_summary(text)
        if summary is None:
            return ConflictError(text, status=status)
        return classify_conflict(summary, status=status)

    if status == 429:
        parsed = parse_rate_limit(text)
        if parsed is None:
            return RequestLimitsError(text, status=status)
        summary, retry_after = parsed
        return RequestLimitsError(f"{summary} , retry after {retry_after}", status=status, retry_after=retry_after)

    summary = parse_error_summary(text)
    return OtherError(text if summary is None else summary, status=status)
