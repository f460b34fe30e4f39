"""Tests for system endpoints."""


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "ScribeAI API", "version": "1.0.0"}


def test_root_serves_landing_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "ScribeAI" in response.text


def test_static_assets(client):
    response = client.get("/static/style.css")
    assert response.status_code == 200
