"""Directory endpoints and HTTP fetching.

Builds the "browse" and "search" URIs of the station directory service and
downloads documents with ``requests``. Network errors are not translated:
``requests`` exceptions reach the caller unchanged.
"""

import io
from typing import Optional
from urllib.parse import quote

import requests

from tunein_opml.model import Document
from tunein_opml.shared import ReaderConfig, get_logger
from tunein_opml.shared.config import DEFAULT_FETCH_TIMEOUT_SECONDS
from tunein_opml.tree import assembler

BROWSE_URI = "http://opml.radiotime.com/Browse.ashx"
SEARCH_URI = "http://opml.radiotime.com/Search.ashx"

logger = get_logger(__name__, component="request")


def search_uri(query: str) -> str:
    """Build the search URI for ``query``, percent-encoding every non-alphanumeric."""
    return f"{SEARCH_URI}?query={quote(query, safe='')}"


def fetch(
    uri: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    session: Optional[requests.Session] = None,
) -> bytes:
    """Download the document at ``uri``.

    Args:
        uri: Endpoint to request
        timeout: Read/connect timeout in seconds
        session: Optional session to reuse connections

    Returns:
        Response body as bytes

    Raises:
        requests.RequestException: On connection failure or HTTP error status
    """
    http = session or requests.Session()
    try:
        logger.debug("Fetching document", extra={"uri": uri, "timeout": timeout})
        response = http.get(uri, timeout=timeout)
        response.raise_for_status()
        logger.debug(
            "Document fetched",
            extra={"uri": uri, "status_code": response.status_code,
                   "content_length": len(response.content)},
        )
        return response.content
    finally:
        if session is None:
            http.close()


def fetch_document(
    uri: str,
    config: Optional[ReaderConfig] = None,
    session: Optional[requests.Session] = None,
) -> Document:
    """Download and read the document at ``uri``.

    Raises:
        requests.RequestException: On connection failure or HTTP error status
        OpmlError: If the response is not a valid document
    """
    config = config or ReaderConfig()
    content = fetch(uri, timeout=config.fetch_timeout_seconds, session=session)
    return assembler.read(io.BytesIO(content), config)
