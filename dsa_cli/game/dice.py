"""
Dice sources for skill checks.

The roll engine never touches a global random generator; callers pass in a
DiceSource. RandomDiceSource is used for play, FixedDiceSource replays a
known sequence (tests, `--dice` on the command line).
"""

import random
from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from ..exceptions import DiceExhaustedError, ValidationError

D20_SIDES = 20


@runtime_checkable
class DiceSource(Protocol):
    """Anything that can produce independent uniform d20 results."""

    def roll_d20(self) -> int:
        """Return an integer in 1..20 inclusive."""


class RandomDiceSource:
    """
    d20 source backed by a private random.Random instance.

    Args:
        seed: Optional random seed for reproducible rolls (useful for testing)
    """

    __slots__ = ("_rng",)

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed) if seed is not None else random.Random()

    def roll_d20(self) -> int:
        return self._rng.randint(1, D20_SIDES)


class FixedDiceSource:
    """Replays a fixed sequence of d20 results."""

    __slots__ = ("_values", "_position")

    def __init__(self, values: Iterable[int]) -> None:
        values = tuple(values)
        for value in values:
            if not 1 <= value <= D20_SIDES:
                raise ValidationError(
                    f"Die value out of range: {value}",
                    field="dice",
                    value=value,
                    user_friendly=f"die value {value} is not between 1 and {D20_SIDES}",
                )
        self._values = values
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def roll_d20(self) -> int:
        if self._position >= len(self._values):
            raise DiceExhaustedError(user_friendly="not enough dice values supplied")
        value = self._values[self._position]
        self._position += 1
        return value


def roll_three(source: DiceSource) -> tuple[int, int, int]:
    """Draw the three dice a skill check consumes."""
    return (source.roll_d20(), source.roll_d20(), source.roll_d20())
