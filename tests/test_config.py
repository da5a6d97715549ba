import os
import unittest
from unittest.mock import patch

from src.chessboard_ui.config import Settings, load_settings


class ConfigTests(unittest.TestCase):
    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            s = load_settings(cfg={})
        self.assertEqual(s, Settings(host="0.0.0.0", port=8000, debug=False, cors_origin="*", log_level="INFO"))

    def test_environment_overrides_defaults(self):
        env = {"CHESSBOARD_PORT": "5050", "CHESSBOARD_DEBUG": "true", "CHESSBOARD_LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env, clear=True):
            s = load_settings(cfg={})
        self.assertEqual(s.port, 5050)
        self.assertTrue(s.debug)
        self.assertEqual(s.log_level, "DEBUG")

    def test_yaml_takes_precedence_over_environment(self):
        with patch.dict(os.environ, {"CHESSBOARD_PORT": "5050"}, clear=True):
            s = load_settings(cfg={"CHESSBOARD_PORT": 9000, "CHESSBOARD_CORS_ORIGIN": "http://localhost:5173"})
        self.assertEqual(s.port, 9000)
        self.assertEqual(s.cors_origin, "http://localhost:5173")


if __name__ == "__main__":
    unittest.main()
