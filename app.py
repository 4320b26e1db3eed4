from __future__ import annotations

import os
import random
import sys
from typing import Any, Dict, Optional
from urllib.parse import quote

from flask import Flask, jsonify, redirect, render_template_string, request
from werkzeug.routing import PathConverter

# Ensure package imports work when executed directly from repo root or as module
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

try:
    from .game import (  # type: ignore
        Board,
        DIRECTIONS,
        SPAWN_VALUES,
        GameOver,
        MalformedToken,
        bare_board_code,
        can_move,
        deserialize,
        legal_directions,
        load_settings,
        next_tokens,
    )
    from .twenty48_core.config import clamp_side, parse_flag  # type: ignore
except ImportError:
    from game import (  # type: ignore
        Board,
        DIRECTIONS,
        SPAWN_VALUES,
        GameOver,
        MalformedToken,
        bare_board_code,
        can_move,
        deserialize,
        legal_directions,
        load_settings,
        next_tokens,
    )
    from twenty48_core.config import clamp_side, parse_flag  # type: ignore

SETTINGS = load_settings()

# Spawn source for every request; tests swap it for a seeded generator.
rng = random.Random(SETTINGS.seed)


class TokenConverter(PathConverter):
    """Path segment holding a base64 token, which may itself start with '/'."""
    regex = ".+?"
    part_isolating = False


app = Flask(__name__)
# Standard base64 tokens can contain "//"; never collapse it.
app.url_map.merge_slashes = False
app.url_map.converters["token"] = TokenConverter

PAGE = """<!doctype html>
<html>
<head>
<title>2048</title>
<style type="text/css">
td {
  border: 4px solid #eee;
  font-size: 24px;
  height: 32px; width: 32px;
  text-align: center;
}
</style>
</head>
<body>
{% if game_over %}
<p class="game-over">Game over.</p>
{% endif %}
<table>
{% for row in board.rows %}<tr>{% for v in row %}<td class="t{{ v }}">{{ v }}</td>{% endfor %}</tr>
{% endfor %}</table>
{% if game_over %}
<a href="/">new game</a>
{% else %}
<p class="moves">{% for direction, href in links %}{% if not loop.first %} | {% endif %}{% if href %}<a href="{{ href }}">{{ direction }}</a>{% else %}<span>{{ direction }}</span>{% endif %}{% endfor %}</p>
{% endif %}
</body>
</html>
"""

ERROR_PAGE = """<!doctype html>
<html><head><title>2048</title></head>
<body><p class="error">Bad board token: {{ reason }}</p><a href="/">new game</a></body>
</html>
"""


def board_to_json(b: Board) -> Dict[str, Any]:
    return {"width": int(b.width), "height": int(b.height), "rows": [list(r) for r in b.rows]}


def _side(value: Any, default: int) -> int:
    try:
        return clamp_side(int(value))
    except (TypeError, ValueError):
        return default


def token_url(token: str) -> str:
    """Path for a token; slashes are escaped so a leading one never reads as a host."""
    return "/" + quote(token, safe="+=")


def _move_links(board: Board):
    tokens = next_tokens(board)
    links = []
    for direction in DIRECTIONS:
        token = tokens[direction]
        if token is None:
            app.logger.warning("move %s overflows 16-bit tiles; link omitted", direction)
        links.append((direction, token_url(token) if token else None))
    return links


def _json_body() -> Optional[Dict[str, Any]]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _token_from_body(body: Dict[str, Any]) -> Optional[str]:
    token = body.get("token")
    return token if isinstance(token, str) and token else None


@app.errorhandler(MalformedToken)
def malformed_token(e: MalformedToken) -> Any:
    app.logger.warning("rejected token on %s: %s", request.path, e)
    if request.path.startswith("/api/"):
        return jsonify({"ok": False, "error": f"bad token: {e}"}), 400
    return render_template_string(ERROR_PAGE, reason=str(e)), 400


# ---------- HTML game ----------

@app.get("/")
def index() -> Any:
    width = _side(request.args.get("width"), SETTINGS.width)
    height = _side(request.args.get("height"), SETTINGS.height)
    return redirect(token_url(bare_board_code(width, height)))


@app.get("/favicon.ico")
def favicon() -> Any:
    return "", 204


@app.get("/<token:token>")
def play(token: str) -> Any:
    board = deserialize(token, policy=SETTINGS.token_policy)
    try:
        board.spawn_tile(*SPAWN_VALUES, rng=rng)
        game_over = False
    except GameOver:
        app.logger.info("game over on %dx%d board", board.width, board.height)
        game_over = True
    links = [] if game_over else _move_links(board)
    html = render_template_string(PAGE, board=board, links=links, game_over=game_over)
    return html, 200, {"Cache-Control": "no-cache"}


# ---------- JSON API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = _json_body()
    if body is None:
        return jsonify({"ok": False, "error": "JSON object required"}), 400
    width = _side(body.get("width"), SETTINGS.width)
    height = _side(body.get("height"), SETTINGS.height)
    token = bare_board_code(width, height)
    return jsonify({"ok": True, "token": token, "board": board_to_json(Board(width=width, height=height))})


@app.post("/api/state")
def api_state() -> Any:
    body = _json_body()
    if body is None:
        return jsonify({"ok": False, "error": "JSON object required"}), 400
    token = _token_from_body(body)
    if token is None:
        return jsonify({"ok": False, "error": "token required"}), 400
    board = deserialize(token, policy=SETTINGS.token_policy)
    return jsonify({
        "ok": True,
        "board": board_to_json(board),
        "next": next_tokens(board),
        "legal": legal_directions(board),
        "gameOver": not can_move(board),
    })


@app.post("/api/move")
def api_move() -> Any:
    body = _json_body()
    if body is None:
        return jsonify({"ok": False, "error": "JSON object required"}), 400
    token = _token_from_body(body)
    if token is None:
        return jsonify({"ok": False, "error": "token required"}), 400
    direction = body.get("direction")
    if direction not in DIRECTIONS:
        return jsonify({"ok": False, "error": f"unknown direction: {direction!r}", "directions": list(DIRECTIONS)}), 400
    board = deserialize(token, policy=SETTINGS.token_policy)
    moved = board.clone().move(direction)
    changed = moved != board
    if changed and parse_flag(body.get("spawn", True), True):
        # A move that changed the board always leaves at least one empty cell.
        moved.spawn_tile(*SPAWN_VALUES, rng=rng)
    try:
        next_token = moved.serialize()
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 400
    return jsonify({
        "ok": True,
        "moved": changed,
        "token": next_token,
        "board": board_to_json(moved),
        "gameOver": not can_move(moved),
    })


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
