from __future__ import annotations

from collections.abc import Iterable

from quoteclient import __version__

DEFAULT_HEADERS: list[tuple[str, str]] = [
    ("User-Agent", f"quoteclient/{__version__}"),
    ("Accept", "application/json"),
]

HEADER_ORDER = ["Host", "User-Agent", "Accept", "Accept-Encoding", "Connection"]


def _sanitize_header(name: str, value: str) -> tuple[str, str]:
    """
    Strip CR, LF and NUL from a header name and value so user input
    cannot inject extra header lines.
    """
    clean_name = name.replace("\r", "").replace("\n", "").replace("\x00", "")
    clean_value = value.replace("\r", "").replace("\n", "").replace("\x00", "")
    return clean_name, clean_value


def canonicalize_headers(
    default_headers: Iterable[tuple[str, str]],
    user_headers: dict[str, str] | None,
    order: Iterable[str] = HEADER_ORDER,
) -> list[tuple[str, str]]:
    """
    Merge user headers over defaults (case-insensitive) and emit them in a
    deterministic order. Headers not named in ``order`` follow in insertion order.
    """
    merged: dict[str, tuple[str, str]] = {}
    for name, value in default_headers:
        name, value = _sanitize_header(name, value)
        merged[name.lower()] = (name, value)
    if user_headers:
        for name, value in user_headers.items():
            name, value = _sanitize_header(name, value)
            merged[name.lower()] = (name, value)

    ordered: list[tuple[str, str]] = []
    for name in order:
        key = name.lower()
        if key in merged:
            ordered.append(merged.pop(key))
    ordered.extend(merged.values())
    return ordered
