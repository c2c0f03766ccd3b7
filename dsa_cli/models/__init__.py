"""
Data models for dsa-cli.

This package contains the hero models:
- Attribute (the fourteen primitive attributes and their aliases)
- Skill, DerivedBases and Character
"""

from .attribute import Attribute
from .hero import Character, DerivedBases, Skill

__all__ = [
    "Attribute",
    "Character",
    "DerivedBases",
    "Skill",
]
