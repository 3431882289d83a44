from __future__ import annotations

import socket
import ssl
from collections.abc import Iterable

from quoteclient.compression import decode_body
from quoteclient.errors import TLSNegotiationError, TransportError
from quoteclient.models import Response


class Connection:
    """
    Single-use TCP/TLS connection carrying one HTTP/1.1 exchange.
    """

    def __init__(
        self,
        host: str,
        port: int,
        scheme: str,
        timeout: float = 10.0,
        verify: bool = True,
        url: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.scheme = scheme
        self.timeout = timeout
        self.verify = verify
        self.url = url
        self.sock: socket.socket | ssl.SSLSocket | None = None
        self.closed = True

    def connect(self) -> None:
        raw = self._open_tcp()

        if self.scheme == "https":
            context = ssl.create_default_context()
            if not self.verify:
                context.check_hostname = False
                context.verify_mode = ssl.CERT_NONE
            context.set_alpn_protocols(["http/1.1"])
            try:
                self.sock = context.wrap_socket(raw, server_hostname=self.host)
            except (ssl.SSLError, ssl.CertificateError, OSError) as exc:
                raw.close()
                raise TLSNegotiationError(
                    f"TLS handshake with {self.host}:{self.port} failed: {exc}",
                    url=self.url,
                ) from exc
        else:
            self.sock = raw

        self.sock.settimeout(self.timeout)
        self.closed = False

    def request(
        self,
        method: str,
        path: str,
        headers: Iterable[tuple[str, str]],
        auto_decompress: bool = True,
    ) -> Response:
        try:
            request_bytes = self._build_request(method, path, headers)
        except UnicodeEncodeError as exc:
            raise TransportError(
                f"Cannot encode request for {self.url}: {exc}", url=self.url
            ) from exc

        if self.closed or self.sock is None:
            self.connect()

        try:
            assert self.sock is not None
            self.sock.sendall(request_bytes)
            response = self._read_response(auto_decompress)
        except TimeoutError as exc:
            self.close()
            raise TransportError(
                f"Timed out after {self.timeout}s talking to {self.host}:{self.port}",
                url=self.url,
            ) from exc
        except OSError as exc:
            self.close()
            raise TransportError(
                f"I/O error talking to {self.host}:{self.port}: {exc}", url=self.url
            ) from exc
        except TransportError:
            self.close()
            raise
        return response

    def _build_request(
        self,
        method: str,
        path: str,
        headers: Iterable[tuple[str, str]],
    ) -> bytes:
        lines = [f"{method} {path} HTTP/1.1\r\n".encode("ascii")]
        for name, value in headers:
            lines.append(f"{name}: {value}\r\n".encode("latin-1"))
        lines.append(b"\r\n")
        return b"".join(lines)

    def _readline(self) -> bytes:
        assert self.sock is not None
        buf = bytearray()
        while True:
            ch = self.sock.recv(1)
            if not ch:
                break
            buf.extend(ch)
            if buf.endswith(b"\r\n"):
                break
        return bytes(buf)

    def _read_exact(self, n: int) -> bytes:
        assert self.sock is not None
        remaining = n
        chunks: list[bytes] = []
        while remaining > 0:
            chunk = self.sock.recv(remaining)
            if not chunk:
                raise TransportError("Unexpected EOF while reading body", url=self.url)
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def _read_response(self, auto_decompress: bool) -> Response:
        status_line = self._readline()
        if not status_line:
            raise TransportError(
                f"Server {self.host}:{self.port} closed the connection without a response",
                url=self.url,
            )
        try:
            # e.g., HTTP/1.1 200 OK
            parts = status_line.decode("latin-1").strip().split(" ", 2)
            version = parts[0].split("/", 1)[1]
            status_code = int(parts[1])
            reason = parts[2] if len(parts) > 2 else ""
        except (IndexError, ValueError) as exc:
            raise TransportError(
                f"Malformed status line: {status_line!r}", url=self.url
            ) from exc

        headers: list[tuple[str, str]] = []
        while True:
            line = self._readline()
            if line in (b"\r\n", b"\n"):
                break
            if not line.endswith(b"\n"):
                raise TransportError(
                    f"Connection closed while reading headers from {self.host}:{self.port}",
                    url=self.url,
                )
            try:
                name, value = line.split(b":", 1)
            except ValueError as exc:
                raise TransportError(
                    f"Malformed header line: {line!r}", url=self.url
                ) from exc
            headers.append(
                (name.decode("latin-1").strip(), value.decode("latin-1").strip())
            )

        header_map = {k.lower(): v for k, v in headers}
        body: bytes
        transfer_encoding = header_map.get("transfer-encoding", "").lower()
        if "chunked" in transfer_encoding:
            body = self._read_chunked_body()
        elif "content-length" in header_map:
            try:
                length = int(header_map["content-length"])
            except ValueError as exc:
                raise TransportError("Invalid Content-Length", url=self.url) from exc
            if length < 0:
                raise TransportError("Invalid Content-Length", url=self.url)
            body = self._read_exact(length)
        else:
            body = self._read_until_close()

        if auto_decompress:
            body = decode_body(body, header_map.get("content-encoding", ""))
        return Response(status_code, reason, version, headers, body, url=self.url)

    def _read_until_close(self) -> bytes:
        assert self.sock is not None
        chunks: list[bytes] = []
        while True:
            data = self.sock.recv(4096)
            if not data:
                break
            chunks.append(data)
        return b"".join(chunks)

    def _read_chunked_body(self) -> bytes:
        chunks: list[bytes] = []
        while True:
            line = self._readline()
            if not line:
                raise TransportError(
                    "Unexpected EOF while reading chunked body", url=self.url
                )
            try:
                size = int(line.split(b";", 1)[0].strip(), 16)
            except ValueError as exc:
                raise TransportError(
                    f"Invalid chunk size line: {line!r}", url=self.url
                ) from exc
            if size == 0:
                # Drain optional trailers up to the terminating blank line.
                while self._readline() not in (b"\r\n", b"\n", b""):
                    pass
                break
            chunks.append(self._read_exact(size))
            # Discard CRLF
            _ = self._read_exact(2)
        return b"".join(chunks)

    def close(self) -> None:
        if self.sock:
            try:
                self.sock.close()
            finally:
                self.sock = None
        self.closed = True

    def _open_tcp(self) -> socket.socket:
        try:
            return socket.create_connection(
                (self.host, self.port), timeout=self.timeout
            )
        except OSError as exc:
            raise TransportError(
                f"TCP connection to {self.host}:{self.port} failed: {exc}",
                url=self.url,
            ) from exc

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
