"""
Test configuration and fixtures for the dsa-cli test suite.

Provides a small reference hero, the path to the sample Heldensoftware
export, and resets logging between tests.
"""

import logging
import os
from pathlib import Path

import pytest
import structlog

from dsa_cli.models.attribute import Attribute
from dsa_cli.models.hero import Character, DerivedBases, Skill

os.environ.setdefault("DSA_LOGGING_LEVEL", "WARNING")

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop handlers and structlog configuration installed by a test."""
    root_logger = logging.getLogger()
    level = root_logger.level
    yield
    for handler in list(root_logger.handlers):
        if getattr(handler, "_dsa_cli_handler", False):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def hero_xml_path() -> Path:
    """Path to the sample Heldensoftware export."""
    return DATA_DIR / "alrik.xml"


@pytest.fixture
def climbing() -> Skill:
    """Klettern (MU/GE/KK) at value 4."""
    return Skill(name="Klettern", value=4, checks=(Attribute.COURAGE, Attribute.AGILITY, Attribute.STRENGTH))


@pytest.fixture
def character(climbing: Skill) -> Character:
    """A hero with a handful of attributes and skills."""
    return Character.build(
        name="Alrik",
        attributes={
            Attribute.COURAGE: 13,
            Attribute.WISDOM: 12,
            Attribute.INTUITION: 14,
            Attribute.CHARISMA: 11,
            Attribute.DEXTERITY: 10,
            Attribute.AGILITY: 12,
            Attribute.CONSTITUTION: 13,
            Attribute.STRENGTH: 11,
        },
        skills=[
            climbing,
            Skill(name="Bogen", value=5, checks=("IN", "FF", "KK")),
            Skill(name="Sinnenschärfe", value=7, checks=("KL", "IN", "IN")),
        ],
        bases=DerivedBases(health=12, stamina=10, astral=15),
    )
