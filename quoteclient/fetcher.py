from __future__ import annotations

from loguru import logger

from quoteclient.client import Client
from quoteclient.errors import DecodeError
from quoteclient.quote import Quote

DEFAULT_URL = "http://localhost:8080/api/random"


def get_random_quote(url: str = DEFAULT_URL, client: Client | None = None) -> Quote:
    """
    Fetch one quote from ``url``.

    Args:
        url: Absolute http(s) URL of the quote endpoint
        client: Client to send the request with. When omitted a default
            client is created for this call and closed afterwards.

    Returns:
        The decoded Quote

    Raises:
        TransportError: the service could not be reached or hung up
        ProtocolError: the service answered with a non-2xx status
        DecodeError: the body is not a JSON quote
    """
    if client is None:
        with Client() as own_client:
            return get_random_quote(url, own_client)

    response = client.get(url, headers={"Accept": "application/json"})
    response.raise_for_status()

    if not response.content:
        raise DecodeError("Empty response body", url=url)
    quote = Quote.from_json(response.content, url=url)
    logger.debug("Decoded quote id={} from {}", quote.value.id, url)
    return quote
