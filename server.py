"""
Minimal Flask API that wires the board adapter into the browser UI.

Endpoints:
- GET  /api/board                 -> full game snapshot (board, turn, status, history, fen)
- GET  /api/legal-moves?r=&c=     -> legal destination squares for the piece on (r, c)
- POST /api/move                  -> submit {"from": {"r","c"}, "to": {"r","c"}}; illegal moves answer ok=false
- POST /api/reset                 -> new game (start position, empty history)
- POST /api/history/clear         -> empty the history panel, board untouched
- GET  /api/history               -> recorded moves and their display lines
- GET  /api/pgn                   -> PGN of the game so far

One BoardAdapter per app; every call goes through `lock` since Flask serves requests on threads.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from flask import Flask, Response, jsonify, request

from src.chessboard_ui.board_adapter import BoardAdapter
from src.chessboard_ui.config import SETTINGS, Settings
from src.chessboard_ui.notation import InvalidSquareError, to_coord

log = logging.getLogger("server")


def _bad_request(message: str):
    return jsonify({"error": message}), 400


def _int_arg(name: str) -> int:
    raw = request.args.get(name)
    if raw is None:
        raise InvalidSquareError(f"Missing query parameter '{name}'")
    try:
        return int(raw)
    except ValueError:
        raise InvalidSquareError(f"Query parameter '{name}' must be an integer") from None


def create_app(adapter: Optional[BoardAdapter] = None, settings: Settings = SETTINGS) -> Flask:
    app = Flask(__name__)
    board = adapter if adapter is not None else BoardAdapter()
    lock = threading.Lock()
    app.config["BOARD_ADAPTER"] = board

    @app.errorhandler(InvalidSquareError)
    def invalid_square(exc: InvalidSquareError):
        return _bad_request(str(exc))

    @app.route("/api/board", methods=["GET"])
    def get_board():
        with lock:
            return jsonify(board.snapshot())

    @app.route("/api/legal-moves", methods=["GET"])
    def legal_moves():
        r, c = _int_arg("r"), _int_arg("c")
        with lock:
            return jsonify({
                "square": board.coord_to_alg(r, c),
                "selectable": board.can_select(r, c),
                "legal_moves": board.get_legal_moves(r, c),
            })

    @app.route("/api/move", methods=["POST"])
    def make_move():
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return _bad_request("JSON body required")
        if "from" not in data or "to" not in data:
            return _bad_request("'from' and 'to' are required")
        src, dst = to_coord(data["from"]), to_coord(data["to"])
        with lock:
            outcome = board.try_move(src, dst)
            if not outcome.ok:
                log.info("Rejected move %s -> %s (%s)", board.coord_to_alg(*src), board.coord_to_alg(*dst), outcome.reason)
            return jsonify({
                "ok": outcome.ok,
                "reason": outcome.reason,
                "move": outcome.move.to_dict() if outcome.move else None,
                "state": board.snapshot(),
            })

    @app.route("/api/reset", methods=["POST"])
    def reset_game():
        with lock:
            board.reset_game()
            return jsonify(board.snapshot())

    @app.route("/api/history/clear", methods=["POST"])
    def clear_history():
        with lock:
            board.clear_history()
            return jsonify(board.snapshot())

    @app.route("/api/history", methods=["GET"])
    def history():
        with lock:
            return jsonify({
                "moves": [m.to_dict() for m in board.get_moves()],
                "lines": board.formatted_history(),
            })

    @app.route("/api/pgn", methods=["GET"])
    def pgn():
        with lock:
            text = board.pgn()
        return Response(text, mimetype="text/plain")

    @app.after_request
    def add_cors_headers(response):
        response.headers["Access-Control-Allow-Origin"] = settings.cors_origin
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        # the board changes on every move; never serve a cached snapshot
        response.headers["Cache-Control"] = "no-store, max-age=0"
        return response

    @app.route("/api/<path:path>", methods=["OPTIONS"])
    def cors_preflight(path: str):
        return app.make_response(("", 204))

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, SETTINGS.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.info("Serving chess board API on %s:%d", SETTINGS.host, SETTINGS.port)
    app.run(host=SETTINGS.host, port=SETTINGS.port, debug=SETTINGS.debug)
