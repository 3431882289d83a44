from __future__ import annotations

from urllib.parse import quote, urlparse

from quoteclient.errors import TransportError

PATH_SAFE = "/%?=&;:@!$'()*+,~-._"


def parse_url(url: str):
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise TransportError(
            f"Only http and https schemes are supported: {url!r}", url=url
        )
    if not parsed.hostname:
        raise TransportError(f"URL has no host: {url!r}", url=url)
    try:
        port = parsed.port or (443 if parsed.scheme == "https" else 80)
    except ValueError as exc:
        raise TransportError(f"Invalid port in URL {url!r}: {exc}", url=url) from exc
    path = parsed.path or "/"
    if parsed.query:
        path = f"{path}?{parsed.query}"
    # Percent-encode anything outside ASCII; existing escapes are kept.
    path = quote(path, safe=PATH_SAFE)
    return parsed, parsed.hostname, port, path
