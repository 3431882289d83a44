__version__ = "0.1.0"

from quoteclient.client import Client
from quoteclient.errors import (
    DecodeError,
    ProtocolError,
    QuoteClientError,
    TLSNegotiationError,
    TransportError,
)
from quoteclient.fetcher import DEFAULT_URL, get_random_quote
from quoteclient.models import Response
from quoteclient.quote import Quote, Value

__all__ = [
    "Client",
    "DEFAULT_URL",
    "DecodeError",
    "ProtocolError",
    "Quote",
    "QuoteClientError",
    "Response",
    "TLSNegotiationError",
    "TransportError",
    "Value",
    "get_random_quote",
]
