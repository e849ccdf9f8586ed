"""Core engine package for Uno Room."""

__all__ = [
    "errors",
    "cards",
    "deck",
    "mechanics",
    "scoring",
    "state",
    "action",
    "game",
    "rules_schema",
    "store",
    "service",
]
