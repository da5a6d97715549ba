"""
Replay a list of moves through the board adapter and print the history panel,
status line and PGN. Moves are origin/destination square pairs: "e2e4", "e2-e4"
or "e2 e4" per line in --file. Promotion is always to a queen, so "e7e8q" is
accepted but under-promotion suffixes are not.
"""
import argparse
import json
import logging
import re
import sys

from src.chessboard_ui.board_adapter import BoardAdapter
from src.chessboard_ui.config import SETTINGS

MOVE_RE = re.compile(r"^([a-h][1-8])[-\s]?([a-h][1-8])q?$", re.I)


def load_json_config(path: str) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.getLogger("replay_moves").error("Failed to read config %s: %s", path, e)
        return {}


def parse_moves(text: str) -> list[tuple[str, str]]:
    """Split free text into (from, to) square pairs; raises ValueError on the first bad token."""
    pairs = []
    tokens = [t for t in re.split(r"[,\s]+", text.strip()) if t]
    i = 0
    while i < len(tokens):
        raw = tokens[i]
        tok = raw.lower()
        # "e2 e4" arrives as two tokens
        if re.fullmatch(r"[a-h][1-8]", tok) and i + 1 < len(tokens):
            tok = tok + tokens[i + 1].lower()
            i += 1
        m = MOVE_RE.match(tok)
        if not m:
            raise ValueError(f"Cannot parse move '{raw}'")
        pairs.append((m.group(1), m.group(2)))
        i += 1
    return pairs


def replay(adapter: BoardAdapter, pairs: list[tuple[str, str]], stop_on_illegal: bool = True) -> int:
    """Apply pairs in order; returns the number of moves accepted."""
    log = logging.getLogger("replay_moves")
    applied = 0
    for src, dst in pairs:
        outcome = adapter.try_move(adapter.alg_to_coord(src), adapter.alg_to_coord(dst))
        if not outcome.ok:
            log.warning("Move %s-%s rejected (%s)", src, dst, outcome.reason)
            if stop_on_illegal:
                break
            continue
        applied += 1
        if adapter.is_game_over():
            log.info("Game over after %d moves: %s", applied, adapter.status_message())
            break
    return applied


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--config", default=None, help="Optional JSON config file to load defaults from.")
    ap.add_argument("--moves", default=None, help='Moves to replay, e.g. "e2e4 e7e5 g1f3". Pawns always promote to a queen; only a "q" suffix is accepted')
    ap.add_argument("--file", default=None, help="Text file with one move per line")
    ap.add_argument("--keep-going", action="store_true", help="Skip rejected moves instead of stopping")
    ap.add_argument("--white", default=None, help="White player name for the PGN headers")
    ap.add_argument("--black", default=None, help="Black player name for the PGN headers")
    ap.add_argument("--pgn-out", default=None, help="Optional path to write PGN at end")
    ap.add_argument("--log-level", default=None, help="Python logging level (e.g., INFO, DEBUG)")

    args = ap.parse_args()

    cfg_dict = load_json_config(args.config) if args.config else {}

    def pick(*keys, default=None):
        for k in keys:
            v = getattr(args, k, None)
            if v is not None:
                return v
            if k in cfg_dict and cfg_dict[k] is not None:
                return cfg_dict[k]
        return default

    log_level = pick("log_level", default=SETTINGS.log_level).upper()
    logging.basicConfig(level=getattr(logging, log_level, logging.INFO), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("replay_moves")

    text = pick("moves", default="")
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            text = f"{text}\n{f.read()}"
    try:
        pairs = parse_moves(text)
    except ValueError as e:
        log.error("%s", e)
        sys.exit(2)

    adapter = BoardAdapter()
    adapter.engine.set_headers(white=pick("white", default="?"), black=pick("black", default="?"))
    keep_going = args.keep_going or bool(cfg_dict.get("keep_going", False))
    applied = replay(adapter, pairs, stop_on_illegal=not keep_going)
    log.info("Replayed %d of %d moves", applied, len(pairs))

    print("History:")
    for line in adapter.formatted_history():
        print(" ", line)
    print("Status:", adapter.status_message())
    print("Result:", adapter.result())
    print("PGN:\n", adapter.pgn())

    if args.pgn_out:
        with open(args.pgn_out, "w", encoding="utf-8") as f:
            f.write(adapter.pgn())
        log.info("Wrote PGN to %s", args.pgn_out)
