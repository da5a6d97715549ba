import unittest

from src.chessboard_ui.notation import (
    Coord,
    InvalidSquareError,
    alg_to_coord,
    coord_to_alg,
    is_dark_square,
    piece_code,
    to_coord,
)


class NotationTests(unittest.TestCase):
    def test_coord_to_alg_corners_and_centre(self):
        self.assertEqual(coord_to_alg(0, 0), "a8")
        self.assertEqual(coord_to_alg(0, 4), "e8")
        self.assertEqual(coord_to_alg(7, 0), "a1")
        self.assertEqual(coord_to_alg(7, 7), "h1")
        self.assertEqual(coord_to_alg(4, 4), "e4")

    def test_alg_to_coord(self):
        self.assertEqual(alg_to_coord("a8"), Coord(0, 0))
        self.assertEqual(alg_to_coord("e4"), (4, 4))
        self.assertEqual(alg_to_coord("h1"), (7, 7))

    def test_conversions_are_inverse_over_whole_board(self):
        for r in range(8):
            for c in range(8):
                self.assertEqual(alg_to_coord(coord_to_alg(r, c)), (r, c))

    def test_dark_squares(self):
        self.assertFalse(is_dark_square(0, 0))
        self.assertTrue(is_dark_square(0, 1))
        self.assertTrue(is_dark_square(1, 0))
        self.assertTrue(is_dark_square(3, 4))
        self.assertFalse(is_dark_square(4, 4))
        dark = sum(is_dark_square(r, c) for r in range(8) for c in range(8))
        self.assertEqual(dark, 32)

    def test_piece_code(self):
        self.assertEqual(piece_code("w", "p"), "wP")
        self.assertEqual(piece_code("b", "K"), "bK")

    def test_out_of_range_coordinates_raise(self):
        for r, c in [(-1, 0), (0, 8), (8, 8), (3, -2)]:
            with self.assertRaises(InvalidSquareError):
                coord_to_alg(r, c)

    def test_malformed_squares_raise(self):
        for alg in ["", "e9", "i1", "E4", "e", "e44", None]:
            with self.assertRaises(InvalidSquareError):
                alg_to_coord(alg)

    def test_invalid_square_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidSquareError, ValueError))

    def test_to_coord_accepts_tuples_and_dicts(self):
        self.assertEqual(to_coord((6, 4)), Coord(6, 4))
        self.assertEqual(to_coord({"r": 6, "c": 4}), Coord(6, 4))
        self.assertIsInstance(to_coord([1, 2]), Coord)

    def test_to_coord_rejects_bad_input(self):
        for value in [{"r": 1}, 5, (1, 2, 3), ("6", "4"), (True, 0), (0, 9)]:
            with self.assertRaises(InvalidSquareError):
                to_coord(value)


if __name__ == "__main__":
    unittest.main()
