"""
Derived attributes for dsa-cli.

Health (LeP), stamina (AuP) and astral reserve (AsP) are computed from the
primitive attributes plus a per-hero base offset:

    health  = round((2 * KO + KK) / 2) + health_base
    stamina = round((MU + KO + GE) / 2) + stamina_base
    astral  = round((MU + IN + CH) / 2) + astral_base

Halves round away from zero. The arithmetic is exact (Decimal), so there is
no floating point intermediate to drift.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import NamedTuple

from ..models.attribute import Attribute
from ..models.hero import DerivedBases


class DerivedAttributes(NamedTuple):
    """The three secondary attributes of a hero."""

    health: int
    stamina: int
    astral: int


def round_half_away_from_zero(numerator: int, denominator: int) -> int:
    """
    Divide and round to the nearest integer, ties away from zero.

    Args:
        numerator: Dividend.
        denominator: Divisor (non-zero).

    Returns:
        The rounded quotient.
    """
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def _halved(attributes: Mapping[Attribute, int], *terms: Attribute) -> int:
    return round_half_away_from_zero(sum(attributes.get(term, 0) for term in terms), 2)


def derive_health(attributes: Mapping[Attribute, int], base: int = 0) -> int:
    """Lebensenergie: constitution counts twice."""
    return _halved(attributes, Attribute.CONSTITUTION, Attribute.CONSTITUTION, Attribute.STRENGTH) + base


def derive_stamina(attributes: Mapping[Attribute, int], base: int = 0) -> int:
    """Ausdauer."""
    return _halved(attributes, Attribute.COURAGE, Attribute.CONSTITUTION, Attribute.AGILITY) + base


def derive_astral(attributes: Mapping[Attribute, int], base: int = 0) -> int:
    """Astralenergie."""
    return _halved(attributes, Attribute.COURAGE, Attribute.INTUITION, Attribute.CHARISMA) + base


def derive_secondary_attributes(
    attributes: Mapping[Attribute, int],
    bases: DerivedBases | None = None,
) -> DerivedAttributes:
    """
    Compute health, stamina and astral reserve.

    Missing attributes count as 0. This function never fails.

    Args:
        attributes: Primitive attribute values.
        bases: Base offsets, all 0 when omitted.

    Returns:
        DerivedAttributes with the three values.
    """
    bases = bases or DerivedBases()
    return DerivedAttributes(
        health=derive_health(attributes, bases.health),
        stamina=derive_stamina(attributes, bases.stamina),
        astral=derive_astral(attributes, bases.astral),
    )
