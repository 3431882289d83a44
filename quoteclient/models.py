from __future__ import annotations

from collections.abc import Iterable

from quoteclient.errors import ProtocolError


class Response:
    """
    Fully read HTTP response that preserves header order while
    exposing convenient helpers.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        http_version: str,
        headers: Iterable[tuple[str, str]],
        body: bytes,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.http_version = http_version
        self.raw_headers: list[tuple[str, str]] = list(headers)
        self._body = body
        self.url = url

    @property
    def headers(self) -> dict[str, str]:
        # Last-write wins while keeping access case-insensitive for callers.
        out: dict[str, str] = {}
        for name, value in self.raw_headers:
            out[name.lower()] = value
        return out

    @property
    def content(self) -> bytes:
        return self._body

    @property
    def text(self) -> str:
        encoding = "utf-8"
        ctype = self.headers.get("content-type")
        if ctype and "charset=" in ctype:
            encoding = ctype.split("charset=")[-1].split(";")[0].strip() or encoding
        try:
            return self._body.decode(encoding, errors="replace")
        except LookupError:
            return self._body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def raise_for_status(self) -> None:
        """Raise :class:`ProtocolError` unless the status is 2xx."""
        if self.is_success:
            return
        status = f"{self.status_code} {self.reason}".strip()
        raise ProtocolError(
            f"HTTP {status} for url {self.url}",
            url=self.url,
            status_code=self.status_code,
            reason=self.reason,
        )

    def __repr__(self) -> str:
        return f"<Response [{self.status_code}] {len(self._body)} bytes>"
