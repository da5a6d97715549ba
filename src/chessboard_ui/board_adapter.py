"""
Board adapter: the single façade the browser UI talks to.

- Translates (row, column) grid coordinates to algebraic squares and back.
- Reads the board through the rules engine on every call (no second copy is kept).
- Submits moves to the rules engine (queen promotion by default) and appends each
  accepted move to an ordered, append-only history.
- Exposes turn, check/checkmate/stalemate/draw status and per-square legal destinations.

Every way a move can fail (null move, empty origin square, illegal per the rules)
comes back as "no move": move_piece() returns None and try_move() carries the reason.
Off-board coordinates raise InvalidSquareError instead.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .notation import (
    BOARD_SIZE,
    Color,
    Coord,
    alg_to_coord,
    coord_to_alg,
    is_dark_square,
    piece_code,
    to_coord,
)
from .rules_engine import ChessRulesEngine, RulesEngine

log = logging.getLogger("board_adapter")

PieceCode = str
Board = list[list[Optional[PieceCode]]]

SIDE_NAMES = {"w": "White", "b": "Black"}


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"


@dataclass(frozen=True)
class Move:
    """One accepted move. `piece` is the code of the piece that moved, as it stood
    before the move (a promoting pawn is still logged as a pawn)."""
    piece: PieceCode
    from_: Coord
    to: Coord

    def to_dict(self) -> dict:
        return {
            "piece": self.piece,
            "from": {"r": self.from_.r, "c": self.from_.c},
            "to": {"r": self.to.r, "c": self.to.c},
        }


@dataclass(frozen=True)
class MoveOutcome:
    move: Optional[Move]
    reason: str  # ok | null_move | empty_origin | illegal

    @property
    def ok(self) -> bool:
        return self.move is not None


class BoardAdapter:
    def __init__(self, engine: RulesEngine | None = None):
        self.engine = engine if engine is not None else ChessRulesEngine()
        self._moves: list[Move] = []

    # ---------------- Board reads -----------------
    def get_board(self) -> Board:
        return [
            [self.get_piece_at(r, c) for c in range(BOARD_SIZE)]
            for r in range(BOARD_SIZE)
        ]

    def get_piece_at(self, r: int, c: int) -> Optional[PieceCode]:
        piece = self.engine.piece_at(coord_to_alg(r, c))
        if piece is None:
            return None
        color, kind = piece
        return piece_code(color, kind)

    # ---------------- Moves -----------------
    def try_move(self, from_, to) -> MoveOutcome:
        """Apply from_ -> to through the rules engine and report what happened."""
        src = to_coord(from_)
        dst = to_coord(to)
        if src == dst:
            return MoveOutcome(None, "null_move")

        piece = self.get_piece_at(src.r, src.c)
        if piece is None:
            return MoveOutcome(None, "empty_origin")

        from_alg = coord_to_alg(src.r, src.c)
        to_alg = coord_to_alg(dst.r, dst.c)
        try:
            accepted = self.engine.attempt_move(from_alg, to_alg, promotion="q")
        except ValueError as exc:
            # python-chess signals unparsable/illegal moves with ValueError subclasses
            log.debug("Engine rejected %s-%s: %s", from_alg, to_alg, exc)
            accepted = False
        if not accepted:
            log.debug("Illegal move %s %s-%s", piece, from_alg, to_alg)
            return MoveOutcome(None, "illegal")

        move = Move(piece=piece, from_=src, to=dst)
        self._moves.append(move)
        log.info("Move %d: %s %s-%s", len(self._moves), piece, from_alg, to_alg)
        return MoveOutcome(move, "ok")

    def move_piece(self, from_, to) -> Optional[Move]:
        return self.try_move(from_, to).move

    def reset_game(self) -> None:
        self.engine.reset()
        self._moves = []
        log.info("Game reset")

    # ---------------- History -----------------
    def get_moves(self) -> tuple[Move, ...]:
        return tuple(self._moves)

    def clear_history(self) -> None:
        self._moves = []

    def format_move(self, move: Move, index: int) -> str:
        src = coord_to_alg(move.from_.r, move.from_.c)
        dst = coord_to_alg(move.to.r, move.to.c)
        return f"{index + 1}. {move.piece} {src} → {dst}"

    def formatted_history(self) -> list[str]:
        return [self.format_move(m, i) for i, m in enumerate(self._moves)]

    # ---------------- Notation -----------------
    @staticmethod
    def coord_to_alg(r: int, c: int) -> str:
        return coord_to_alg(r, c)

    @staticmethod
    def alg_to_coord(alg: str) -> Coord:
        return alg_to_coord(alg)

    @staticmethod
    def is_dark_square(r: int, c: int) -> bool:
        return is_dark_square(r, c)

    # ---------------- Turn / status -----------------
    def get_current_turn(self) -> Color:
        return self.engine.turn()

    def is_check(self) -> bool:
        return self.engine.is_check()

    def is_checkmate(self) -> bool:
        return self.engine.is_checkmate()

    def is_stalemate(self) -> bool:
        return self.engine.is_stalemate()

    def is_draw(self) -> bool:
        return self.engine.is_draw()

    def is_game_over(self) -> bool:
        return self.engine.is_game_over()

    def get_legal_moves(self, r: int, c: int) -> list[str]:
        return list(self.engine.legal_destinations(coord_to_alg(r, c)))

    def can_select(self, r: int, c: int) -> bool:
        """True if the piece on (r, c) belongs to the side to move and play is still on."""
        piece = self.get_piece_at(r, c)
        if piece is None or self.is_game_over():
            return False
        return piece[0] == self.get_current_turn()

    def get_status(self) -> GameStatus:
        if self.is_checkmate():
            return GameStatus.CHECKMATE
        if self.is_stalemate():
            return GameStatus.STALEMATE
        if self.is_draw():
            return GameStatus.DRAW
        if self.is_check():
            return GameStatus.CHECK
        return GameStatus.IN_PROGRESS

    def status_message(self) -> str:
        status = self.get_status()
        side = SIDE_NAMES[self.get_current_turn()]
        if status is GameStatus.CHECKMATE:
            winner = "Black" if side == "White" else "White"
            return f"Checkmate, {winner} wins"
        if status is GameStatus.STALEMATE:
            return "Stalemate"
        if status is GameStatus.DRAW:
            return "Draw"
        if status is GameStatus.CHECK:
            return f"{side} to move (check)"
        return f"{side} to move"

    # ---------------- Export -----------------
    def fen(self) -> str:
        return self.engine.fen()

    def pgn(self) -> str:
        return self.engine.pgn()

    def result(self) -> str:
        return self.engine.result()

    def termination_reason(self) -> Optional[str]:
        return self.engine.termination_reason()

    def snapshot(self) -> dict:
        """JSON-ready view of the whole game for the front end."""
        return {
            "board": self.get_board(),
            "turn": self.get_current_turn(),
            "status": self.get_status().value,
            "message": self.status_message(),
            "check": self.is_check(),
            "checkmate": self.is_checkmate(),
            "stalemate": self.is_stalemate(),
            "draw": self.is_draw(),
            "game_over": self.is_game_over(),
            "result": self.result(),
            "termination_reason": self.termination_reason(),
            "moves": [m.to_dict() for m in self._moves],
            "history": self.formatted_history(),
            "fen": self.fen(),
        }
