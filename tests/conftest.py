"""Pytest configuration and fixtures."""

import gzip
import socket
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer

import pytest
from loguru import logger

from quoteclient.models import Response

QUOTE_BODY = b'{"type":"success","value":{"id":10,"quote":"Test quote"}}'


class QuoteHandler(BaseHTTPRequestHandler):
    """Stub quote service; the path selects the canned reply."""

    def log_message(self, format, *args):
        pass  # Suppress logging

    def _reply(self, status, body, headers=()):
        self.send_response(status)
        for name, value in headers:
            self.send_header(name, value)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        json_type = [("Content-Type", "application/json")]
        if self.path == "/api/random":
            self._reply(200, QUOTE_BODY, json_type)
        elif self.path == "/api/extra":
            self._reply(
                200,
                b'{"type":"success","value":{"id":1,"quote":"hi","extra":true}}',
                json_type,
            )
        elif self.path == "/api/empty":
            self._reply(200, b"{}", json_type)
        elif self.path == "/api/notjson":
            self._reply(200, b"not json", [("Content-Type", "text/plain")])
        elif self.path == "/api/bad":
            self._reply(200, b"<<<bad>>>", [("Content-Type", "text/plain")])
        elif self.path == "/api/badutf8":
            self._reply(
                200,
                b'{"type":"success","value":{"id":1,"quote":"\xff\xfe"}}',
                json_type,
            )
        elif self.path == "/api/nobody":
            self._reply(200, b"", json_type)
        elif self.path == "/api/error":
            self._reply(500, b"boom", [("Content-Type", "text/plain")])
        elif self.path == "/api/redirect":
            self._reply(302, b"", [("Location", "/api/random")])
        elif self.path == "/api/gzip":
            self._reply(
                200,
                gzip.compress(QUOTE_BODY),
                json_type + [("Content-Encoding", "gzip")],
            )
        elif self.path == "/api/chunked":
            self.send_response(200)
            self.send_header("Content-Type", "application/json")
            self.send_header("Transfer-Encoding", "chunked")
            self.end_headers()
            for part in (QUOTE_BODY[:20], QUOTE_BODY[20:]):
                self.wfile.write(f"{len(part):x}\r\n".encode() + part + b"\r\n")
            self.wfile.write(b"0\r\n\r\n")
        elif self.path == "/api/echo-headers":
            lines = "\n".join(f"{k}: {v}" for k, v in self.headers.items())
            self._reply(200, lines.encode(), [("Content-Type", "text/plain")])
        else:
            self._reply(404, b"not found", [("Content-Type", "text/plain")])


@pytest.fixture(scope="module")
def quote_server():
    """Start a local stub quote service for testing."""
    server = HTTPServer(("127.0.0.1", 0), QuoteHandler)
    port = server.server_address[1]
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield f"http://127.0.0.1:{port}"
    server.shutdown()
    server.server_close()


@pytest.fixture
def hangup_server():
    """Server that accepts a connection and closes it without answering."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]

    def accept_and_close():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        conn.close()

    thread = threading.Thread(target=accept_and_close, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{port}/api/random"
    listener.close()
    thread.join(timeout=1)


@pytest.fixture
def truncated_headers_server():
    """Server that sends half a header block and then hangs up."""
    listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    listener.bind(("127.0.0.1", 0))
    listener.listen(1)
    port = listener.getsockname()[1]

    def reply_and_close():
        try:
            conn, _ = listener.accept()
        except OSError:
            return
        with conn:
            conn.recv(4096)
            conn.sendall(b"HTTP/1.1 200 OK\r\nContent-Type: applic")

    thread = threading.Thread(target=reply_and_close, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{port}/api/random"
    listener.close()
    thread.join(timeout=1)


@pytest.fixture
def unreachable_url():
    """URL for a local port nothing listens on."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return f"http://127.0.0.1:{port}/api/random"


@pytest.fixture
def log_messages():
    """Collect loguru records emitted during a test."""
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_response():
    """Create a sample Response object."""
    return Response(
        status_code=200,
        reason="OK",
        http_version="1.1",
        headers=[
            ("Content-Type", "application/json"),
            ("Content-Length", str(len(QUOTE_BODY))),
        ],
        body=QUOTE_BODY,
        url="http://127.0.0.1:8080/api/random",
    )
