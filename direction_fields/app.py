# app.py — Slim Flask API over the direction-field core
# deps: pip install flask numpy pillow

from __future__ import annotations
from typing import Any, Dict, Tuple
import io, logging
import numpy as np
from flask import Flask, request, jsonify, make_response
from PIL import Image

from .config import (API_DEFAULT_GRID, API_MAX_GRID, OBSTRUCTION_P, PNG_DEFAULT_SCALE,
                     PNG_MAX_SCALE, SNAP_RADIUS)
from .connectivity import nearest_free
from .errors import DirectionFieldError, InvalidDimension, InvalidInput
from .grid import parse_grid, random_grid
from .models import GridModel
from .render import render_cardinals, render_distances
from .wavefront_core import build_direction_field, trace_path

logger = logging.getLogger(__name__)

app = Flask(__name__)

# ======= CORS =======
@app.after_request
def _cors(resp):
    resp.headers["Access-Control-Allow-Origin"]  = "*"
    resp.headers["Access-Control-Allow-Headers"] = "*"
    resp.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
    return resp

@app.errorhandler(DirectionFieldError)
def _field_error(e):
    logger.warning("rejected request: %s", e)
    return jsonify({"error": str(e), "kind": type(e).__name__}), 400

# ======= request helpers =======
def _number(data: Dict[str, Any], key: str, cast, default):
    v = data.get(key, default)
    if v in (None, "", "null"):
        return default
    try:
        return cast(v)
    except (TypeError, ValueError):
        raise InvalidInput(f"{key} must be a number, got {v!r}") from None

def _grid_from(data: Dict[str, Any]) -> GridModel:
    if data.get("grid"):
        grid = parse_grid(str(data["grid"]))
    else:
        n    = _number(data, "n", int, API_DEFAULT_GRID)
        p    = _number(data, "p", float, OBSTRUCTION_P)
        seed = _number(data, "seed", int, None)
        if n > API_MAX_GRID:
            raise InvalidDimension(f"grid {n} exceeds API limit {API_MAX_GRID}")
        grid = random_grid(n, p, rng=seed)
    if grid.n > API_MAX_GRID:
        raise InvalidDimension(f"grid {grid.n} exceeds API limit {API_MAX_GRID}")
    return grid

def _xy(v) -> Tuple[int, int]:
    try:
        x, y = v
        return (int(x), int(y))
    except (TypeError, ValueError):
        raise InvalidInput(f"coordinate must be [x, y], got {v!r}") from None

def _source_from(data: Dict[str, Any], grid: GridModel) -> Tuple[Tuple[int, int], bool]:
    src = grid.check_bounds(_xy(data["source"]))
    snapped = False
    if data.get("snap") and not grid.is_free(src):
        src = nearest_free(src, grid, max_radius=SNAP_RADIUS)
        snapped = grid.is_free(src)
    return src, snapped

# ======= endpoints =======
@app.route("/", methods=["GET"])
def root():
    return {"ok": True, "solve": "/field/solve (POST JSON)", "path": "/field/path (POST JSON)",
            "png": "/field/png?n=&p=&seed=&x=&y="}

@app.route("/field/solve", methods=["POST"])
def field_solve():
    """
    JSON body:
    {
      "grid": "..#\\n...\\n#..",        // or n / p / seed for a random grid
      "n": 20, "p": 0.2, "seed": 7,
      "source": [x, y],
      "snap": false,                     // move obstructed source to nearest free cell
      "render": "cardinal" | "distance"  // default "cardinal"
    }
    """
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    if "source" not in data:
        return jsonify({"error": "source=[x, y] required"}), 400

    grid = _grid_from(data)
    src, snapped = _source_from(data, grid)
    field = build_direction_field(src, grid)

    mode = str(data.get("render") or "cardinal").lower()
    text = render_distances(field, grid) if mode == "distance" else render_cardinals(field, grid)

    entries = [{"x": x, "y": y, "distance": e.distance, "predecessor": e.predecessor.name}
               for (x, y), e in sorted(field.items(), key=lambda kv: (kv[0][1], kv[0][0]))]
    return jsonify({
        "source": list(src), "snapped": snapped, "size": grid.n,
        "free_cells": grid.free_count, "reached": len(field),
        "entries": entries, "render": text,
    })

@app.route("/field/path", methods=["POST"])
def field_path():
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        data = {}
    if "source" not in data or "target" not in data:
        return jsonify({"error": "source=[x, y] and target=[x, y] required"}), 400

    grid = _grid_from(data)
    src, snapped = _source_from(data, grid)
    field = build_direction_field(src, grid)
    path = trace_path(field, _xy(data["target"]))
    if path is None:
        return jsonify({"error": f"target {list(_xy(data['target']))} unreachable from {list(src)}",
                        "source": list(src)}), 200
    return jsonify({"source": list(src), "snapped": snapped,
                    "distance": len(path) - 1, "path": [list(c) for c in path]})

@app.route("/field/png", methods=["GET"])
def field_png():
    try:
        x = int(request.args["x"]); y = int(request.args["y"])
    except Exception:
        return jsonify({"error": "x and y required"}), 400

    grid  = _grid_from(request.args.to_dict())
    field = build_direction_field((x, y), grid)
    dist  = field.distance_array().astype("float64")

    hi = max(float(dist.max()), 1.0)
    scaled = np.where(dist >= 0, 1.0 - dist / hi, 0.0)
    scale = _number(request.args, "scale", int, PNG_DEFAULT_SCALE)
    scale = max(1, min(scale, PNG_MAX_SCALE))
    img = Image.fromarray((scaled * 255).astype("uint8"))
    img = img.resize((grid.n * scale, grid.n * scale), Image.Resampling.NEAREST)
    buf = io.BytesIO()
    img.save(buf, "PNG")
    buf.seek(0)
    resp = make_response(buf.read())
    resp.headers["Content-Type"] = "image/png"
    return resp


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host="0.0.0.0", port=8081, threaded=True)
