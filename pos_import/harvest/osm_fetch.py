"""Fetch a single OSM node as XML from the OSM API."""

from __future__ import annotations

import logging

import requests

from pos_import.common.constants import OSM_API_BASE_URL, XML_ACCEPT
from pos_import.common.errors import FetchFailure, NodeNotFoundError
from pos_import.common.http import HttpClient, HttpRequestError, TimeoutConfig

logger = logging.getLogger(__name__)


def node_url(node_id: int, base_url: str = OSM_API_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{node_id}"


def fetch_node_xml(
    node_id: int,
    *,
    http_client: HttpClient | None = None,
    base_url: str = OSM_API_BASE_URL,
    timeout: TimeoutConfig | None = None,
) -> str:
    """Return the raw XML for ``node_id``.

    Every failure is raised as ``NodeNotFoundError``; one request, no retries.
    """
    if isinstance(node_id, bool) or not isinstance(node_id, int) or node_id <= 0:
        raise NodeNotFoundError(node_id, FetchFailure.INVALID_NODE_ID, "node id must be a positive integer")

    url = node_url(node_id, base_url)
    logger.info("Fetching OSM node %s from %s", node_id, url)

    owns_client = http_client is None
    client = http_client or HttpClient(timeout=timeout)
    try:
        body = client.get_text(url, headers={"Accept": XML_ACCEPT}, timeout=timeout)
    except HttpRequestError as exc:
        logger.error("OSM API returned status %s for node %s", exc.status_code, node_id)
        raise NodeNotFoundError(node_id, FetchFailure.HTTP_STATUS, str(exc)) from exc
    except requests.RequestException as exc:
        logger.error("Transport error fetching OSM node %s: %s", node_id, exc.__class__.__name__)
        raise NodeNotFoundError(node_id, FetchFailure.TRANSPORT, exc.__class__.__name__) from exc
    finally:
        if owns_client:
            client.close()

    if not body:
        logger.error("Empty response body from OSM API for node %s", node_id)
        raise NodeNotFoundError(node_id, FetchFailure.EMPTY_BODY, "empty response body")

    logger.debug("Received %d bytes of XML for node %s", len(body), node_id)
    return body
