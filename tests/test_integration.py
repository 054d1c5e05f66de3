"""Integration tests for the edgeinfo server."""
from __future__ import annotations

import html
import json
import re

import pytest
from fastapi.testclient import TestClient

from edgeinfo_server.main import create_app
from edgeinfo_server.models import METADATA_UNAVAILABLE
from edgeinfo_server.responses import PrettyJSONResponse
from edgeinfo_server.settings import Settings


@pytest.fixture
def test_app():
    """Create test FastAPI app."""
    return create_app(Settings())


@pytest.fixture
def client(test_app):
    """Client for an app running without edge metadata."""
    return TestClient(test_app)


@pytest.fixture
def edge_client(test_app, edge_metadata, wrap_metadata):
    """Client for an app whose requests carry edge metadata."""
    return TestClient(wrap_metadata(test_app, edge_metadata))


def test_ip_without_metadata(client):
    """/ip degrades to the IP plus an error marker, still HTTP 200."""
    response = client.get("/ip", headers={"X-Forwarded-For": " 1.2.3.4 , 5.6.6.6"})
    assert response.status_code == 200
    assert response.json() == {"ip": "1.2.3.4", "error": METADATA_UNAVAILABLE}


def test_ip_headers(client):
    """JSON responses are UTF-8, pretty-printed and open to any origin."""
    response = client.get("/ip")
    assert response.headers["content-type"] == "application/json;charset=UTF-8"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.text.startswith('{\n  "ip": ')


def test_ip_with_metadata(edge_client):
    """/ip returns IP, ASN and coarse location."""
    response = edge_client.get("/ip", headers={"CF-Connecting-IP": "203.0.113.7"})
    data = response.json()
    assert data["ip"] == "203.0.113.7"
    assert data["asn"] == 3320
    assert data["asOrganization"] == "Deutsche Telekom AG"
    assert data["timezone"] == "Europe/Berlin"


def test_ip_never_exposes_full_fields(edge_client):
    """/ip carries no protocol, header or bot-management fields."""
    data = edge_client.get("/ip", headers={"User-Agent": "curl/8.0"}).json()
    assert set(data) == {"ip", "asn", "asOrganization", "country", "city", "region", "timezone"}
    assert "curl/8.0" not in json.dumps(data)


def test_api_without_metadata(client):
    """/api degrades to ip, header snapshot and error."""
    response = client.get("/api", headers={"X-Real-IP": "192.0.2.9"})
    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["ip", "requestHeaders", "error"]
    assert data["ip"] == "192.0.2.9"
    assert data["requestHeaders"]["userAgent"] == "testclient"
    assert data["error"] == METADATA_UNAVAILABLE


def test_api_with_metadata(edge_client):
    """/api returns every group with null leaves preserved."""
    response = edge_client.get("/api", headers={"CF-Connecting-IP": "203.0.113.7", "CF-Ray": "8a1b-FRA"})
    assert response.headers["access-control-allow-origin"] == "*"
    data = response.json()
    assert data["ip"]["cfConnectingIP"] == "203.0.113.7"
    assert data["location"]["metroCode"] is None
    assert data["request"]["hostMetadata"] is None
    assert data["requestHeaders"]["cfRay"] == "8a1b-FRA"
    assert data["botManagement"]["score"] == 99


def test_api_omits_absent_bot_management(test_app, edge_metadata, wrap_metadata):
    """No bot-management data means no botManagement key."""
    del edge_metadata["botManagement"]
    client = TestClient(wrap_metadata(test_app, edge_metadata))
    assert "botManagement" not in client.get("/api").json()


@pytest.mark.parametrize(
    "path",
    ["/", "/index.html", "/some/other/path", "/docs", "/redoc", "/docs/oauth2-redirect", "/openapi.json"],
)
def test_html_for_other_paths(edge_client, path):
    """Any other path serves the HTML page."""
    response = edge_client.get(path)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<!DOCTYPE html>" in response.text
    assert 'data-card="ip"' in response.text
    assert "access-control-allow-origin" not in response.headers


def test_html_escapes_reflected_headers(edge_client):
    """A script tag in a header is only ever rendered escaped."""
    response = edge_client.get("/", headers={"User-Agent": "<script>alert(1)</script>", "Origin": "<img src=x>"})
    assert "<script>alert(1)" not in response.text
    assert "<img src=x>" not in response.text
    assert "&lt;script&gt;alert(1)" in response.text


def test_html_json_matches_api(edge_client):
    """The JSON embedded in the page equals the /api payload for the same request."""
    headers = {"CF-Connecting-IP": "203.0.113.7", "Referer": "https://example.com/?a=1&b=<2>"}
    page = edge_client.get("/", headers=headers).text
    api = edge_client.get("/api", headers=headers).json()

    block = re.search(r'<code id="jsonContent">(.*?)</code>', page, re.DOTALL)
    assert block is not None
    assert json.loads(html.unescape(block.group(1))) == api


def test_html_without_metadata(client):
    """Without metadata the page still renders with a notice."""
    response = client.get("/")
    assert response.status_code == 200
    assert "data-error" in response.text
    assert response.text.count("data-map-link") == 0


def test_custom_scope_key_and_origin(edge_metadata, wrap_metadata):
    """The metadata scope key and CORS origin come from settings."""
    app = create_app(Settings(metadata_scope_key="edge", cors_allow_origin="https://tools.example"))
    client = TestClient(wrap_metadata(app, edge_metadata, key="edge"))
    response = client.get("/ip")
    assert response.headers["access-control-allow-origin"] == "https://tools.example"
    assert response.json()["city"] == "Munich"


def test_settings_from_env(monkeypatch):
    """Settings are read from EDGEINFO_ environment variables."""
    monkeypatch.setenv("EDGEINFO_LOCALE", "zh-CN")
    monkeypatch.setenv("EDGEINFO_SERVICE_NAME", "whoami")
    client = TestClient(create_app())
    page = client.get("/").text
    assert '<html lang="zh-CN">' in page
    assert "whoami" in page


def test_pretty_json_response_status_code():
    """The JSON response class takes a status code like any Starlette response."""
    assert PrettyJSONResponse({"ip": "1.2.3.4"}).status_code == 200
    response = PrettyJSONResponse({"ip": "1.2.3.4"}, status_code=203, headers={"X-Test": "1"})
    assert response.status_code == 203
    assert response.headers["x-test"] == "1"
    assert response.headers["access-control-allow-origin"] == "*"
