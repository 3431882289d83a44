from __future__ import annotations


class QuoteClientError(Exception):
    """Base error for quoteclient."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class TransportError(QuoteClientError):
    """Raised when the request could not be carried out over the network."""


class TLSNegotiationError(TransportError):
    """Raised when the TLS handshake fails."""


class ProtocolError(QuoteClientError):
    """Raised when the server answers with a non-2xx status."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        reason: str = "",
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.reason = reason


class DecodeError(QuoteClientError):
    """Raised when a response body is not a valid Quote payload."""
