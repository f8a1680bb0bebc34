"""Tests for the Flask API."""

import io

import pytest
from PIL import Image

from direction_fields.app import app
from direction_fields.config import API_MAX_GRID, PNG_MAX_SCALE

CENTER_BLOCKED = "...\n.#.\n..."


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


class TestSolve:
    def test_root(self, client) -> None:
        assert client.get("/").get_json()["ok"] is True

    def test_solve_text_grid(self, client) -> None:
        """A text grid is solved and rendered."""
        resp = client.post("/field/solve", json={"grid": CENTER_BLOCKED, "source": [0, 0]})
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["reached"] == 7
        assert body["render"] == "0←←\n↑#↑\n↑←↑"
        assert body["entries"][0] == {"x": 1, "y": 0, "distance": 1, "predecessor": "LEFT"}
        assert resp.headers["Access-Control-Allow-Origin"] == "*"

    def test_solve_random_grid_distance_render(self, client) -> None:
        """A seeded random grid with distance rendering."""
        resp = client.post("/field/solve", json={"n": 5, "p": 0.0, "seed": 1, "source": [0, 0], "render": "distance"})
        body = resp.get_json()
        assert body["reached"] == 24
        assert body["render"].splitlines()[-1] == "  4  5  6  7  8"

    def test_obstructed_source(self, client) -> None:
        resp = client.post("/field/solve", json={"grid": CENTER_BLOCKED, "source": [1, 1]})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "ObstructedSource"

    def test_snap(self, client) -> None:
        """snap moves an obstructed source to the nearest free cell."""
        resp = client.post("/field/solve", json={"grid": CENTER_BLOCKED, "source": [1, 1], "snap": True})
        body = resp.get_json()
        assert resp.status_code == 200
        assert body["snapped"] is True
        assert body["source"] == [1, 0]

    def test_out_of_bounds(self, client) -> None:
        resp = client.post("/field/solve", json={"grid": CENTER_BLOCKED, "source": [3, 0]})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "OutOfBounds"

    def test_missing_source(self, client) -> None:
        assert client.post("/field/solve", json={"n": 3}).status_code == 400

    def test_grid_too_large(self, client) -> None:
        resp = client.post("/field/solve", json={"n": API_MAX_GRID + 1, "source": [0, 0]})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "InvalidDimension"


class TestPath:
    def test_path(self, client) -> None:
        resp = client.post("/field/path", json={"grid": CENTER_BLOCKED, "source": [0, 0], "target": [2, 2]})
        body = resp.get_json()
        assert body["distance"] == 4
        assert body["path"][0] == [2, 2]
        assert body["path"][-1] == [0, 0]

    def test_unreachable(self, client) -> None:
        resp = client.post("/field/path", json={"grid": ".#.\n.#.\n.#.", "source": [0, 0], "target": [2, 0]})
        assert resp.status_code == 200
        assert "unreachable" in resp.get_json()["error"]


class TestPng:
    def test_png(self, client) -> None:
        resp = client.get("/field/png?n=5&p=0&seed=1&x=0&y=0&scale=2")
        assert resp.status_code == 200
        assert resp.headers["Content-Type"] == "image/png"
        assert resp.data[:8] == b"\x89PNG\r\n\x1a\n"

    def test_png_needs_coordinates(self, client) -> None:
        assert client.get("/field/png?n=5").status_code == 400


class TestBadInput:
    """Malformed values come back as JSON 400s."""

    def test_probability_out_of_range(self, client) -> None:
        resp = client.post("/field/solve", json={"n": 5, "p": 1.0, "seed": 1, "source": [0, 0]})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "InvalidInput"

    def test_non_numeric_size(self, client) -> None:
        resp = client.post("/field/solve", json={"n": "abc", "source": [0, 0]})
        assert resp.status_code == 400
        assert "n must be a number" in resp.get_json()["error"]

    def test_non_numeric_seed(self, client) -> None:
        resp = client.post("/field/path", json={"n": 4, "seed": "x", "source": [0, 0], "target": [1, 1]})
        assert resp.status_code == 400

    def test_malformed_source(self, client) -> None:
        resp = client.post("/field/solve", json={"grid": CENTER_BLOCKED, "source": "top-left"})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "InvalidInput"

    def test_unknown_grid_cell(self, client) -> None:
        resp = client.post("/field/solve", json={"grid": "..\n.x", "source": [0, 0]})
        assert resp.status_code == 400
        assert resp.get_json()["kind"] == "InvalidInput"

    def test_non_object_body(self, client) -> None:
        assert client.post("/field/solve", json=[1, 2]).status_code == 400

    def test_non_numeric_scale(self, client) -> None:
        resp = client.get("/field/png?n=5&p=0&x=0&y=0&scale=abc")
        assert resp.status_code == 400
        assert "scale" in resp.get_json()["error"]

    def test_scale_is_clamped(self, client) -> None:
        """Huge scales are capped at PNG_MAX_SCALE pixels per cell."""
        resp = client.get("/field/png?n=5&p=0&x=0&y=0&scale=100000")
        assert resp.status_code == 200
        assert Image.open(io.BytesIO(resp.data)).size == (5 * PNG_MAX_SCALE, 5 * PNG_MAX_SCALE)
