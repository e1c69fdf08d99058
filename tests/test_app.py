import io
import json

import pytest
from fastapi.testclient import TestClient
from matplotlib import image as mpimg

from app import app


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def get_chart(client, kind, data, **params):
    params["data"] = data if isinstance(data, str) else json.dumps(data)
    return client.get(f"/api/chart_{kind}.png", params=params)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.parametrize("kind", ["line", "bar"])
def test_chart_png(client, kind):
    r = get_chart(client, kind, {"Jan": 10, "Feb": 20, "Mar": 15},
                  width=300, height=200, margin=20, title="Sales")
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
    assert mpimg.imread(io.BytesIO(r.content)).shape[:2] == (200, 300)


def test_default_size_from_config(client):
    r = get_chart(client, "bar", [["a", 1], ["b", 2]])
    assert r.status_code == 200
    assert mpimg.imread(io.BytesIO(r.content)).shape[:2] == (500, 1000)


def test_invalid_color_still_renders(client):
    r = get_chart(client, "line", {"a": 1, "b": 2}, color="notacolor", show_values=False)
    assert r.status_code == 200


@pytest.mark.parametrize(
    "data,params,error",
    [
        ({}, {}, "EmptyDatasetError"),
        ({"a": "x"}, {}, "InvalidDataError"),
        ({"a": 1}, {"width": 100, "height": 100, "margin": 50}, "DegenerateCanvasError"),
        ({"a": 1}, {"background": "black"}, "InvalidColorError"),
    ],
)
def test_chart_errors(client, data, params, error):
    r = get_chart(client, "bar", data, **params)
    assert r.status_code == 400
    assert r.json()["error"] == error


def test_malformed_json(client):
    r = get_chart(client, "line", "{not json")
    assert r.status_code == 400
    assert "JSON" in r.json()["detail"]


def test_scalar_json_rejected(client):
    r = get_chart(client, "line", "42")
    assert r.status_code == 400


def test_missing_data(client):
    r = client.get("/api/chart_line.png")
    assert r.status_code == 422


def test_huge_integer_rejected(client):
    r = get_chart(client, "bar", {"a": 10**400, "b": 1})
    assert r.status_code == 400
    assert r.json()["error"] == "InvalidDataError"


def test_extreme_range_renders(client):
    r = get_chart(client, "line", {"a": -1e308, "b": 1e308}, width=300, height=200, margin=20)
    assert r.status_code == 200
    assert r.headers["content-type"] == "image/png"
