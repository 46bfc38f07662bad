"""Simulated field unit for a domination-style control point game: team
buttons, LEDs, per-team stopwatches, stored settings and the game state machine."""

__version__ = "0.1.0"