"""
Rules engine: the chess-legality authority behind the board adapter.

- RulesEngine: the narrow capability interface the adapter depends on
  (occupant query, move attempt, legal destinations, turn, game-end predicates, reset).
- ChessRulesEngine: implementation around a python-chess Board, plus PGN/FEN export
  and a readable termination reason.

Squares are algebraic strings ("e4"); pieces come back as (color, type) pairs
such as ("w", "P").
"""
from __future__ import annotations

import datetime
import logging
from typing import Optional, Protocol

import chess
import chess.pgn

from .notation import Color

log = logging.getLogger("rules_engine")

PROMOTION_PIECES = {"q": chess.QUEEN, "r": chess.ROOK, "b": chess.BISHOP, "n": chess.KNIGHT}


class RulesEngine(Protocol):
    def piece_at(self, square: str) -> Optional[tuple[Color, str]]: ...

    def attempt_move(self, from_sq: str, to_sq: str, promotion: str = "q") -> bool: ...

    def legal_destinations(self, from_sq: str) -> list[str]: ...

    def turn(self) -> Color: ...

    def is_check(self) -> bool: ...

    def is_checkmate(self) -> bool: ...

    def is_stalemate(self) -> bool: ...

    def is_draw(self) -> bool: ...

    def is_game_over(self) -> bool: ...

    def reset(self) -> None: ...

    # export/reporting
    def fen(self) -> str: ...

    def pgn(self) -> str: ...

    def result(self) -> str: ...

    def termination_reason(self) -> Optional[str]: ...


class ChessRulesEngine:
    """python-chess Board wrapper exposing the RulesEngine capabilities."""

    def __init__(self):
        self.board = chess.Board()
        self._headers: dict[str, str] = {}

    # ---------------- Queries -----------------
    def piece_at(self, square: str) -> Optional[tuple[Color, str]]:
        piece = self.board.piece_at(chess.parse_square(square))
        if piece is None:
            return None
        color: Color = "w" if piece.color == chess.WHITE else "b"
        return color, piece.symbol().upper()

    def legal_destinations(self, from_sq: str) -> list[str]:
        """Destination squares reachable from from_sq, in generation order.

        A promoting pawn has four legal moves to the same square (one per piece);
        that square is listed once, not once per promotion piece.
        """
        origin = chess.parse_square(from_sq)
        seen: list[str] = []
        for mv in self.board.legal_moves:
            if mv.from_square != origin:
                continue
            name = chess.square_name(mv.to_square)
            if name not in seen:
                seen.append(name)
        return seen

    def turn(self) -> Color:
        return "w" if self.board.turn == chess.WHITE else "b"

    def fen(self) -> str:
        return self.board.fen()

    # ---------------- Move Application -----------------
    def attempt_move(self, from_sq: str, to_sq: str, promotion: str = "q") -> bool:
        """Push from_sq -> to_sq if legal. The promotion piece is only used when the
        plain move is not legal (a pawn reaching the last rank)."""
        origin = chess.parse_square(from_sq)
        target = chess.parse_square(to_sq)
        if promotion.lower() not in PROMOTION_PIECES:
            raise ValueError(f"Unknown promotion piece {promotion!r}")
        # python-chess reads king-takes-own-rook as castling; the UI only offers the king's landing square
        if self.board.color_at(target) == self.board.turn:
            return False
        mv = chess.Move(origin, target)
        if not self.board.is_legal(mv):
            mv = chess.Move(origin, target, promotion=PROMOTION_PIECES[promotion.lower()])
            if not self.board.is_legal(mv):
                return False
        san = self.board.san(mv)
        self.board.push(mv)
        log.debug("Applied %s (%s)", san, mv.uci())
        return True

    def reset(self) -> None:
        self.board.reset()

    # ---------------- Status -----------------
    def is_check(self) -> bool:
        return self.board.is_check()

    def is_checkmate(self) -> bool:
        return self.board.is_checkmate()

    def is_stalemate(self) -> bool:
        return self.board.is_stalemate()

    def is_insufficient_material(self) -> bool:
        return self.board.is_insufficient_material()

    def is_fifty_moves(self) -> bool:
        return self.board.halfmove_clock >= 100

    def is_threefold_repetition(self) -> bool:
        return self.board.is_repetition(3)

    def is_draw(self) -> bool:
        return (
            self.is_fifty_moves()
            or self.is_stalemate()
            or self.is_insufficient_material()
            or self.is_threefold_repetition()
        )

    def is_game_over(self) -> bool:
        return self.is_checkmate() or self.is_draw()

    def termination_reason(self) -> Optional[str]:
        if self.is_checkmate():
            return "checkmate"
        if self.is_stalemate():
            return "stalemate"
        if self.is_insufficient_material():
            return "insufficient_material"
        if self.is_fifty_moves():
            return "fifty_move_rule"
        if self.is_threefold_repetition():
            return "threefold_repetition"
        return None

    def result(self) -> str:
        if self.is_checkmate():
            # side to move is the one that got mated
            return "0-1" if self.board.turn == chess.WHITE else "1-0"
        if self.is_draw():
            return "1/2-1/2"
        return "*"

    # ---------------- PGN -----------------
    def set_headers(self, event: str = "Casual Game", site: str = "?", date: Optional[str] = None,
                    white: str = "?", black: str = "?") -> None:
        date = date or datetime.date.today().strftime("%Y.%m.%d")
        self._headers.update({
            "Event": event,
            "Site": site,
            "Date": date,
            "White": white,
            "Black": black,
        })

    def pgn(self) -> str:
        game = chess.pgn.Game()
        for k, v in self._headers.items():
            game.headers[k] = v
        game.headers["Result"] = self.result()
        node = game
        for mv in list(self.board.move_stack):
            node = node.add_variation(mv)
        reason = self.termination_reason()
        if reason:
            game.comment = f"Termination: {reason}"
        exporter = chess.pgn.StringExporter(headers=True, variations=False, comments=bool(reason))
        return game.accept(exporter)
