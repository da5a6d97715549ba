"""
Chess board UI back end.

Components:
- board_adapter: BoardAdapter façade (coordinates <-> algebraic, move history, status)
- rules_engine: RulesEngine interface and the python-chess implementation
- notation: coordinate/square helpers
- config: settings from settings.yml / environment
"""
# Package exports are intentionally minimal; import modules directly as needed.
