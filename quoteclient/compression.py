"""
Transparent decoding of compressed response bodies.

Supports gzip, deflate and brotli (br).
"""

from __future__ import annotations

import gzip
import io
import zlib

import brotli

ACCEPT_ENCODING = "gzip, deflate, br"


def decode_body(body: bytes, content_encoding: str) -> bytes:
    """
    Decode a response body according to its Content-Encoding header.

    Stacked encodings (``"gzip, br"``) are undone in reverse order. A body
    that fails to decompress is returned unchanged so the JSON decoder can
    report it.
    """
    if not content_encoding or not body:
        return body

    encodings = [e.strip() for e in content_encoding.lower().split(",")]
    result = body
    for enc in reversed(encodings):
        result = _decode_single(result, enc)
    return result


def _decode_single(body: bytes, encoding: str) -> bytes:
    if encoding == "gzip":
        try:
            with gzip.GzipFile(fileobj=io.BytesIO(body)) as f:
                return f.read()
        except (OSError, EOFError, zlib.error):
            return body

    if encoding == "deflate":
        try:
            # Raw deflate first, then zlib-wrapped.
            return zlib.decompress(body, -zlib.MAX_WBITS)
        except zlib.error:
            try:
                return zlib.decompress(body)
            except zlib.error:
                return body

    if encoding == "br":
        try:
            return brotli.decompress(body)
        except brotli.error:
            return body

    # identity or unknown
    return body


def get_accept_encoding(auto_decompress: bool = True) -> str:
    if not auto_decompress:
        return "identity"
    return ACCEPT_ENCODING
