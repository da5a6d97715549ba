import unittest

import chess

from src.chessboard_ui.rules_engine import ChessRulesEngine


class ChessRulesEngineTests(unittest.TestCase):
    def setUp(self):
        self.engine = ChessRulesEngine()

    def test_piece_at(self):
        self.assertEqual(self.engine.piece_at("e1"), ("w", "K"))
        self.assertEqual(self.engine.piece_at("g8"), ("b", "N"))
        self.assertIsNone(self.engine.piece_at("e4"))

    def test_attempt_move_applies_legal_move(self):
        self.assertTrue(self.engine.attempt_move("e2", "e4"))
        self.assertEqual(self.engine.turn(), "b")
        self.assertEqual(self.engine.board.peek(), chess.Move.from_uci("e2e4"))

    def test_attempt_move_rejects_illegal_move(self):
        fen = self.engine.fen()
        self.assertFalse(self.engine.attempt_move("e2", "e5"))
        self.assertFalse(self.engine.attempt_move("e7", "e5"))
        self.assertEqual(self.engine.fen(), fen)

    def test_promotion_piece_only_used_for_promotions(self):
        # a queen promotion flag must not turn a plain push into an illegal move
        self.assertTrue(self.engine.attempt_move("e2", "e4", promotion="q"))
        self.assertIsNone(self.engine.board.peek().promotion)

    def test_underpromotion(self):
        self.engine.board.set_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        self.assertTrue(self.engine.attempt_move("a7", "a8", promotion="n"))
        self.assertEqual(self.engine.piece_at("a8"), ("w", "N"))

    def test_own_piece_on_target_is_rejected(self):
        self.engine.board.set_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        self.assertFalse(self.engine.attempt_move("e1", "h1"))
        self.assertFalse(self.engine.attempt_move("e1", "a1"))
        self.assertEqual(len(self.engine.board.move_stack), 0)
        self.assertTrue(self.engine.attempt_move("e1", "g1"))

    def test_unknown_promotion_piece_raises_value_error(self):
        with self.assertRaises(ValueError):
            self.engine.attempt_move("e2", "e4", promotion="x")
        self.assertEqual(self.engine.fen(), chess.STARTING_FEN)

    def test_promotion_square_listed_once(self):
        self.engine.board.set_fen("8/P7/8/8/8/8/8/k6K w - - 0 1")
        self.assertEqual(self.engine.legal_destinations("a7"), ["a8"])

    def test_legal_destinations(self):
        self.assertEqual(sorted(self.engine.legal_destinations("g1")), ["f3", "h3"])
        self.assertEqual(self.engine.legal_destinations("e4"), [])

    def test_reset(self):
        self.engine.attempt_move("e2", "e4")
        self.engine.reset()
        self.assertEqual(self.engine.fen(), chess.STARTING_FEN)

    def test_fifty_move_rule_is_a_draw(self):
        self.engine.board.set_fen("4k3/8/8/8/8/8/8/R3K3 w - - 100 80")
        self.assertTrue(self.engine.is_draw())
        self.assertTrue(self.engine.is_game_over())
        self.assertEqual(self.engine.termination_reason(), "fifty_move_rule")
        self.assertEqual(self.engine.result(), "1/2-1/2")

    def test_result_white_wins(self):
        # back-rank mate
        self.engine.board.set_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        self.assertTrue(self.engine.attempt_move("a1", "a8"))
        self.assertTrue(self.engine.is_checkmate())
        self.assertEqual(self.engine.result(), "1-0")

    def test_pgn_export(self):
        self.engine.set_headers(white="Alice", black="Bob", date="2024.01.01")
        self.engine.attempt_move("e2", "e4")
        self.engine.attempt_move("e7", "e5")
        pgn = self.engine.pgn()
        self.assertIn('[White "Alice"]', pgn)
        self.assertIn('[Black "Bob"]', pgn)
        self.assertIn('[Result "*"]', pgn)
        self.assertIn("1. e4 e5", pgn)

    def test_pgn_records_termination(self):
        for src, dst in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            self.assertTrue(self.engine.attempt_move(src, dst))
        pgn = self.engine.pgn()
        self.assertIn('[Result "0-1"]', pgn)
        self.assertIn("Termination: checkmate", pgn)
        self.assertIn("Qh4#", pgn)


if __name__ == "__main__":
    unittest.main()
