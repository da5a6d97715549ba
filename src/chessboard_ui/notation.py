"""
Coordinate and notation helpers for the board UI.

Grid coordinates are zero-based (row, column) pairs as the browser lays the board
out: row 0 is rank 8 (Black's back rank), row 7 is rank 1; column 0 is file 'a'.

- coord_to_alg / alg_to_coord: bijection between (r, c) and algebraic squares ("e4").
- is_dark_square: square colouring, a8 is light.
- piece_code: two-character piece tags used by the front end ("wP", "bK").

Out-of-range coordinates and malformed squares raise InvalidSquareError.
"""
from __future__ import annotations

import re
from typing import Literal, NamedTuple

SQUARE_RE = re.compile(r"^[a-h][1-8]$")
BOARD_SIZE = 8
FILES = "abcdefgh"

Color = Literal["w", "b"]


class InvalidSquareError(ValueError):
    """Raised for coordinates outside the 8x8 grid or malformed algebraic squares."""


class Coord(NamedTuple):
    r: int
    c: int


def _check_coord(r: int, c: int) -> None:
    if isinstance(r, bool) or isinstance(c, bool) or not isinstance(r, int) or not isinstance(c, int):
        raise InvalidSquareError(f"Coordinates must be integers, got ({r!r}, {c!r})")
    if not (0 <= r < BOARD_SIZE and 0 <= c < BOARD_SIZE):
        raise InvalidSquareError(f"Coordinates ({r}, {c}) are off the board")


def to_coord(value) -> Coord:
    """Accept a Coord, an (r, c) pair or a {"r": .., "c": ..} mapping."""
    if isinstance(value, dict):
        try:
            value = (value["r"], value["c"])
        except KeyError as exc:
            raise InvalidSquareError(f"Missing coordinate key {exc.args[0]!r}") from None
    try:
        r, c = value
    except (TypeError, ValueError):
        raise InvalidSquareError(f"Not a (row, column) pair: {value!r}") from None
    _check_coord(r, c)
    return Coord(r, c)


def coord_to_alg(r: int, c: int) -> str:
    """(6, 4) -> 'e2'."""
    _check_coord(r, c)
    return f"{FILES[c]}{BOARD_SIZE - r}"


def alg_to_coord(alg: str) -> Coord:
    """'e2' -> Coord(r=6, c=4)."""
    if not isinstance(alg, str) or not SQUARE_RE.match(alg):
        raise InvalidSquareError(f"Not an algebraic square: {alg!r}")
    return Coord(BOARD_SIZE - int(alg[1]), ord(alg[0]) - ord("a"))


def is_dark_square(r: int, c: int) -> bool:
    return (r + c) % 2 == 1


def piece_code(color: Color, piece_type: str) -> str:
    return f"{color}{piece_type.upper()}"


__all__ = [
    "Color",
    "Coord",
    "InvalidSquareError",
    "alg_to_coord",
    "coord_to_alg",
    "is_dark_square",
    "piece_code",
    "to_coord",
]
