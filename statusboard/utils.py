"""Utility helpers for timestamps, nested lookups and fingerprints."""

from __future__ import annotations

import zlib
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping, Optional, Tuple

from .errors import InvalidTimestamp

_MISSING = object()

CHECKSUM_SEED = 0x811C9DC5
CHECKSUM_PRIME = 0x01000193
CHECKSUM_MASK = 0xFFFFFFFF


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc).replace(tzinfo=None)


def normalize_timestamp(ts: datetime | date | str) -> datetime:
    """Return ``ts`` as a naive UTC datetime.

    Accepts datetimes, dates and ISO-8601 strings (``Z`` suffix allowed).
    Raises :class:`InvalidTimestamp` for anything else.
    """
    if isinstance(ts, datetime):
        if ts.tzinfo:
            return ts.astimezone(timezone.utc).replace(tzinfo=None)
        return ts
    if isinstance(ts, date):
        return datetime(ts.year, ts.month, ts.day)
    if isinstance(ts, str):
        try:
            parsed = datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidTimestamp(f"Invalid timestamp string '{ts}'.") from exc
        return normalize_timestamp(parsed)
    raise InvalidTimestamp(
        f"Invalid timestamp type {type(ts).__name__}. Must be datetime, date, or ISO-8601 string."
    )


def iso(dt: datetime | None) -> str | None:
    if not dt:
        return None
    return dt.isoformat(timespec="milliseconds") + "Z"


def _walk(obj: Any, path: str) -> Any:
    current = obj
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def has_path(obj: Any, path: str) -> bool:
    """True when the dotted ``path`` resolves inside ``obj``."""
    return _walk(obj, path) is not _MISSING


def get_path(obj: Any, path: str, default: Any = None) -> Any:
    value = _walk(obj, path)
    return default if value is _MISSING else value


def checksum(summaries: Iterable[Optional[str]]) -> int:
    """32-bit fingerprint of an ordered sequence of summaries.

    ``None`` entries hash as the empty string. Every entry is mixed with its
    position, so both content and order perturb the result, and the number of
    entries counts even when they are all empty.
    """
    value = CHECKSUM_SEED
    for index, summary in enumerate(summaries):
        digest = zlib.crc32((summary or "").encode("utf-8"))
        value ^= digest
        value ^= (index * 0x9E3779B1) & CHECKSUM_MASK
        value = (value * CHECKSUM_PRIME) & CHECKSUM_MASK
    return value


def split_tag(spec: Mapping[str, Any], default: str) -> Tuple[str, dict]:
    """Split a ``{"class": tag, **params}`` configuration entry."""
    params = dict(spec)
    tag = params.pop("class", None) or default
    return tag, params
