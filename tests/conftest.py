"""Shared fixtures: an app wired to a fake upstream and a test client."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from searxng_proxy import ProxyConfig, create_app

API_KEY = "test-api-key"
SEARXNG_URL = "http://searxng.test:8080"


def make_upstream_response(status_code=200, json_body=None, text="", reason="OK", headers=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.reason = reason
    resp.text = text
    resp.content = text.encode("utf-8")
    resp.headers = headers or {"Content-Type": "application/json"}
    resp.json.return_value = json_body
    return resp


def make_wire_response(body: bytes, content_type: str, status_code=200, reason="OK") -> requests.Response:
    """A real requests.Response carrying raw bytes, decoded by requests itself."""
    resp = requests.Response()
    resp.status_code = status_code
    resp.reason = reason
    resp._content = body
    resp.headers["Content-Type"] = content_type
    resp.url = f"{SEARXNG_URL}/search"
    return resp


@pytest.fixture
def config() -> ProxyConfig:
    return ProxyConfig(api_key=API_KEY, searxng_url=SEARXNG_URL, upstream_timeout=5.0)


@pytest.fixture
def app(config):
    app = create_app(config)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers() -> dict:
    return {"Authorization": f"Bearer {API_KEY}"}


@pytest.fixture
def mock_upstream():
    """Patch the outbound GET; defaults to a small successful JSON search result."""
    with patch("searxng_proxy.forwarder.requests.get") as mock_get:
        mock_get.return_value = make_upstream_response(
            json_body={
                "query": "wikipedia",
                "number_of_results": 1,
                "results": [{"title": "Wikipedia", "url": "https://www.wikipedia.org/"}],
            }
        )
        yield mock_get
