from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from top_stories.config import Settings
from top_stories.datamodels import FetchFailure, FetchSuccess, Story
from top_stories.exceptions import HttpStatusError
from top_stories.server import create_app
from top_stories.sources.nyt import NYTSource


class StubSource:
    def __init__(self, result):
        self.result = result

    def get_top_stories(self):
        return self.result


@pytest.fixture
def dist_dir(tmp_path):
    (tmp_path / "index.html").write_text("<h1>Top Stories</h1>")
    (tmp_path / "app.js").write_text("console.log('hi');")
    return tmp_path


def make_client(dist_dir, result):
    settings = Settings(api_key="secret", dist_dir=str(dist_dir))
    return TestClient(create_app(settings, source=StubSource(result)))


def test_serves_index_and_assets(dist_dir):
    client = make_client(dist_dir, FetchSuccess([]))

    resp = client.get("/")
    assert resp.status_code == 200
    assert "Top Stories" in resp.text

    resp = client.get("/app.js")
    assert resp.status_code == 200


def test_missing_asset_is_404(dist_dir):
    client = make_client(dist_dir, FetchSuccess([]))
    assert client.get("/nope.css").status_code == 404


def test_logs_every_request(dist_dir, caplog):
    client = make_client(dist_dir, FetchSuccess([]))
    with caplog.at_level(logging.INFO, logger="top_stories"):
        client.get("/app.js")

    assert any(r.getMessage().startswith("GET: /app.js - ") for r in caplog.records)


def test_api_route_returns_stories(dist_dir):
    stories = [Story(uri="a", url="http://x", title="Hello")]
    client = make_client(dist_dir, FetchSuccess(stories))

    resp = client.get("/api/top-arts-stories")
    assert resp.status_code == 200
    assert resp.json() == [{"uri": "a", "url": "http://x", "title": "Hello"}]


def test_api_route_reports_failure(dist_dir):
    error = HttpStatusError("Request failed with status code 500", status_code=500)
    client = make_client(dist_dir, FetchFailure(error))

    resp = client.get("/api/top-arts-stories")
    assert resp.status_code == 502
    assert resp.json() == {"detail": "Request failed with status code 500"}


def test_logs_query_string_with_key_masked(dist_dir, caplog):
    client = make_client(dist_dir, FetchSuccess([]))
    with caplog.at_level(logging.INFO, logger="top_stories"):
        client.get("/app.js?v=2&api-key=secret")

    assert any(r.getMessage().startswith("GET: /app.js?v=2&api-key=*** - ") for r in caplog.records)
    assert all("secret" not in r.getMessage() for r in caplog.records if r.name == "top_stories")


def test_api_route_failure_does_not_leak_api_key(dist_dir, caplog):
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = requests.ConnectionError(
        "Max retries exceeded with url: /svc/topstories/v2/arts.json?api-key=secret"
    )
    settings = Settings(api_key="secret", dist_dir=str(dist_dir))
    client = TestClient(create_app(settings, source=NYTSource(settings, session=session)))

    with caplog.at_level(logging.DEBUG, logger="top_stories"):
        resp = client.get("/api/top-arts-stories")

    assert resp.status_code == 502
    assert "secret" not in resp.json()["detail"]
    assert all("secret" not in r.getMessage() for r in caplog.records if r.name == "top_stories")
