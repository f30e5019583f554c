"""Tests for the Flask publication endpoints."""
import asyncio
import threading
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from lab_publications.cache import PublicationCache
from lab_publications.service import PublicationService
from lab_publications.web import create_app, filter_by_author


@pytest.fixture
def publications(make_publication):
    return [
        make_publication(key="b", year="2022", authors=("José Álvarez", "Alice Smith"),
                         bibtex="@inproceedings{b,\n  year = {2022}\n}"),
        make_publication(key="a", year="2018", authors=("Alice Smith", "Bob Jones"),
                         bibtex="@article{a,\n  year = {2018}\n}"),
    ]


@pytest.fixture
def service(publications):
    svc = MagicMock()
    svc.get_publications = MagicMock(return_value=publications)
    return svc


@pytest.fixture
def client(service):
    app = create_app(service)
    app.config["TESTING"] = True
    return app.test_client()


def test_publications_json(client):
    response = client.get("/publications")

    assert response.status_code == 200
    data = response.get_json()
    assert [p["key"] for p in data] == ["b", "a"]
    assert data[0]["authors"] == ["José Álvarez", "Alice Smith"]
    assert set(data[0]) == {"type", "key", "title", "authors", "year", "venue", "url", "doi", "bibtex"}


def test_publications_filtered_by_author_slug(client):
    response = client.get("/publications?author=jose-alvarez")
    assert [p["key"] for p in response.get_json()] == ["b"]

    response = client.get("/publications?author=bob-jones")
    assert [p["key"] for p in response.get_json()] == ["a"]


def test_unknown_author_gives_empty_list(client):
    response = client.get("/publications?author=nobody")
    assert response.status_code == 200
    assert response.get_json() == []


def test_empty_list_when_service_has_nothing(service, client):
    service.get_publications.return_value = []
    assert client.get("/publications").get_json() == []


def test_bibtex_export(client):
    response = client.get("/publications.bib")

    assert response.status_code == 200
    assert response.mimetype == "text/plain"
    body = response.get_data(as_text=True)
    assert body == "@inproceedings{b,\n  year = {2022}\n}\n\n@article{a,\n  year = {2018}\n}"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "ok"


def test_not_found_is_json(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.get_json() == {"error": "Not found"}


def test_filter_by_author_accepts_display_names(publications):
    assert [p.key for p in filter_by_author(publications, "Alice Smith")] == ["b", "a"]


def test_concurrent_requests_on_cache_miss_share_one_download(sample_bibtex):
    async def slow_download():
        await asyncio.sleep(0.2)
        return sample_bibtex

    svc = PublicationService(url="https://dblp.example/pid/1/2.bib", cache=PublicationCache(ttl=300))
    app = create_app(svc)
    app.config["TESTING"] = True
    download = AsyncMock(side_effect=slow_download)
    responses = []

    def request_publications():
        responses.append(app.test_client().get("/publications"))

    with patch.object(svc, "_download", download):
        workers = [threading.Thread(target=request_publications) for _ in range(5)]
        for worker in workers:
            worker.start()
        for worker in workers:
            worker.join(timeout=10)

    assert download.await_count == 1
    assert len(responses) == 5
    assert all(len(r.get_json()) == 2 for r in responses)
