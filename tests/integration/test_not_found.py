import dataclasses

from fastapi.testclient import TestClient

from backend.app import create_app


def test_unknown_api_route_returns_json(client):
    res = client.get("/api/unknown", headers={"accept": "text/html"})
    assert res.status_code == 404
    assert res.json() == {"error": "Route not found."}


def test_unknown_route_without_html_accept_returns_json(client):
    res = client.get("/does-not-exist", headers={"accept": "application/json"})
    assert res.status_code == 404
    assert res.json() == {"error": "Route not found."}


def test_unknown_page_serves_html_404(client):
    res = client.get("/does-not-exist", headers={"accept": "text/html,application/xhtml+xml"})
    assert res.status_code == 404
    assert res.headers["content-type"].startswith("text/html")


def test_missing_static_asset_is_404(client):
    res = client.get("/js/missing.js", headers={"accept": "*/*"})
    assert res.status_code == 404
    assert res.json() == {"error": "Route not found."}


def test_index_is_served(client):
    for path in ("/", "/index.html"):
        res = client.get(path)
        assert res.status_code == 200
        assert "card-container" in res.text


def test_static_assets_are_served(client):
    assert client.get("/js/checkout.js").status_code == 200
    assert client.get("/css/styles.css").status_code == 200


def test_favicon_has_no_content(client):
    res = client.get("/favicon.ico")
    assert res.status_code == 204


def test_index_missing_returns_404(settings, tmp_path):
    app = create_app(dataclasses.replace(settings, public_dir=tmp_path))
    with TestClient(app) as c:
        res = c.get("/", headers={"accept": "text/html"})
    assert res.status_code == 404
    assert res.json() == {"error": "Route not found."}


def test_wrong_method_keeps_error_shape(client):
    res = client.get("/api/payments")
    assert res.status_code == 405
    assert "error" in res.json()
