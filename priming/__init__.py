# priming/__init__.py
"""
Speech Priming - per-turn recognizer priming for composable dialogs.

Computes which intents, entities and vocabulary the speech/NLU front end
should be biased toward, given the recognizer/dialog composition tree and
the dialogs currently active in the turn. Follows Hexagonal Architecture
(Ports & Adapters).
"""

__version__ = "1.0.0"
