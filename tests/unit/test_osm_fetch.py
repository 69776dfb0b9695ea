from __future__ import annotations

import pytest
import requests

from pos_import.common.errors import FetchFailure, NodeNotFoundError, NotFoundError
from pos_import.common.http import HttpRequestError
from pos_import.harvest.osm_fetch import fetch_node_xml, node_url


class FakeHttpClient:
    def __init__(self, body: str = "", error: Exception | None = None):
        self.body = body
        self.error = error
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def get_text(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.body

    def close(self):
        self.closed = True


def test_node_url_joins_base_and_id():
    assert node_url(42, "https://osm.test/api/0.6/node/") == "https://osm.test/api/0.6/node/42"
    assert node_url(42, "https://osm.test/api/0.6/node") == "https://osm.test/api/0.6/node/42"


def test_fetch_returns_body_and_requests_xml():
    client = FakeHttpClient(body="<osm/>")

    assert fetch_node_xml(7, http_client=client) == "<osm/>"
    url, kwargs = client.calls[0]
    assert url.endswith("/node/7")
    assert "application/xml" in kwargs["headers"]["Accept"]
    assert client.closed is False


@pytest.mark.parametrize(
    ("error", "reason"),
    [
        (HttpRequestError("HTTP status: 404", status_code=404), FetchFailure.HTTP_STATUS),
        (HttpRequestError("HTTP status: 503", status_code=503), FetchFailure.HTTP_STATUS),
        (requests.Timeout("slow"), FetchFailure.TRANSPORT),
        (requests.ConnectionError("refused"), FetchFailure.TRANSPORT),
    ],
)
def test_fetch_failures_collapse_into_node_not_found(error, reason):
    client = FakeHttpClient(error=error)

    with pytest.raises(NotFoundError) as excinfo:
        fetch_node_xml(7, http_client=client)
    assert isinstance(excinfo.value, NodeNotFoundError)
    assert excinfo.value.node_id == 7
    assert excinfo.value.reason is reason
    assert len(client.calls) == 1


def test_fetch_empty_body_is_not_found():
    with pytest.raises(NodeNotFoundError) as excinfo:
        fetch_node_xml(7, http_client=FakeHttpClient(body=""))
    assert excinfo.value.reason is FetchFailure.EMPTY_BODY


@pytest.mark.parametrize("node_id", [0, -5])
def test_fetch_rejects_non_positive_ids_without_request(node_id):
    client = FakeHttpClient(body="<osm/>")

    with pytest.raises(NodeNotFoundError) as excinfo:
        fetch_node_xml(node_id, http_client=client)
    assert excinfo.value.reason is FetchFailure.INVALID_NODE_ID
    assert client.calls == []
