from __future__ import annotations

from loguru import logger
from pydantic import ValidationError

from quoteclient.client import Client
from quoteclient.config import Settings, load_settings
from quoteclient.errors import ProtocolError, QuoteClientError
from quoteclient.fetcher import get_random_quote
from quoteclient.log import configure_logging
from quoteclient.quote import Quote


def run(settings: Settings | None = None, client: Client | None = None) -> Quote:
    """
    Fetch one quote from the configured endpoint and log it.

    Errors from the fetch are not handled here.
    """
    settings = settings or load_settings()
    if client is None:
        with Client(timeout=settings.timeout, verify=settings.verify) as own_client:
            quote = get_random_quote(settings.url, own_client)
    else:
        quote = get_random_quote(settings.url, client)
    logger.info(str(quote))
    return quote


def main() -> int:
    configure_logging()
    try:
        settings = load_settings()
    except ValidationError as exc:
        logger.error("Invalid configuration: {}", exc)
        return 1
    configure_logging(settings.log_level)

    try:
        run(settings)
    except ProtocolError as exc:
        logger.error(
            "Quote service at {} answered with status {}: {}",
            exc.url,
            exc.status_code,
            exc,
        )
        return 1
    except QuoteClientError as exc:
        logger.error(
            "Fetching quote from {} failed ({}): {}",
            exc.url,
            type(exc).__name__,
            exc,
        )
        return 1
    return 0
