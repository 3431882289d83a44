from __future__ import annotations

from loguru import logger

from quoteclient.compression import get_accept_encoding
from quoteclient.connection import Connection
from quoteclient.headers import DEFAULT_HEADERS, canonicalize_headers
from quoteclient.models import Response
from quoteclient.utils import parse_url


class Client:
    """
    Minimal synchronous HTTP/1.1 client.

    Every request uses a fresh connection that is closed once the response
    has been read, whether or not the exchange succeeded.

    Args:
        timeout: Connect and read timeout in seconds
        verify: Whether to verify TLS certificates
        auto_decompress: Decode gzip/deflate/br response bodies
        headers: Headers sent with every request, overriding the defaults
    """

    def __init__(
        self,
        timeout: float = 10.0,
        verify: bool = True,
        auto_decompress: bool = True,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self.verify = verify
        self.auto_decompress = auto_decompress
        self.headers = dict(headers or {})
        self.closed = False

    def _build_headers(
        self, host: str, port: int, scheme: str, headers: dict[str, str] | None
    ) -> list[tuple[str, str]]:
        default_port = 443 if scheme == "https" else 80
        host_value = f"[{host}]" if ":" in host else host
        if port != default_port:
            host_value = f"{host_value}:{port}"
        computed = {
            "Host": host_value,
            "Accept-Encoding": get_accept_encoding(self.auto_decompress),
            "Connection": "close",
        }
        # Merge: defaults -> computed -> client headers -> per-request headers.
        return canonicalize_headers(
            DEFAULT_HEADERS, {**computed, **self.headers, **(headers or {})}
        )

    def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """
        Send a request without a body and return the fully read response.

        Raises:
            TransportError: the exchange could not be completed
        """
        if self.closed:
            raise RuntimeError("Cannot send a request on a closed Client")
        parsed, host, port, path = parse_url(url)
        merged_headers = self._build_headers(host, port, parsed.scheme, headers)

        logger.debug("{} {}", method.upper(), url)
        with Connection(
            host, port, parsed.scheme, self.timeout, self.verify, url=url
        ) as conn:
            response = conn.request(
                method.upper(),
                path,
                merged_headers,
                auto_decompress=self.auto_decompress,
            )
        logger.debug(
            "{} {} -> {} ({} bytes)",
            method.upper(),
            url,
            response.status_code,
            len(response.content),
        )
        return response

    def get(self, url: str, headers: dict[str, str] | None = None) -> Response:
        return self.request("GET", url, headers=headers)

    def close(self) -> None:
        # Connections never outlive a request; this only blocks further use.
        self.closed = True

    def __enter__(self) -> Client:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
