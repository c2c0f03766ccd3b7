"""
A command line companion for DSA (Das Schwarze Auge).

Parses Heldensoftware hero exports and covers a subset of character
related mechanics:
- rolling skill checks for you
- dumping your character
- keeping track of your health, astral points and stamina
"""

__version__ = "0.2.0"
