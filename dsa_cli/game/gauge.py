"""
Session gauges: health, stamina and astral points tracked during play.

A gauge never rejects a change. After every mutation the maximum is raised
to at least 0 and the current value is clamped into 0..max.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ..models.hero import Character
from ..structured_logging.logging_config import get_logger
from .derivation import round_half_away_from_zero

logger = get_logger(__name__)


class GaugeAction(str, Enum):
    """Operations supported by a gauge."""

    GET = "get"
    SET = "set"
    ADD = "add"
    SUB = "sub"


class GaugeReading(BaseModel):
    """Immutable snapshot of a gauge."""

    model_config = ConfigDict(frozen=True)

    name: str
    current: int
    max: int

    @property
    def percent(self) -> int:
        """current/max as a whole percentage, 0 for an empty gauge."""
        if self.max == 0:
            return 0
        return round_half_away_from_zero(100 * self.current, self.max)


class SessionGauge(BaseModel):
    """A bounded counter kept for the length of an interactive session."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = Field(..., min_length=1)
    current: int = 0
    max: int = 0

    def model_post_init(self, __context) -> None:
        self._clamp()

    @classmethod
    def for_character(cls, character: Character) -> dict[str, "SessionGauge"]:
        """Health, stamina and astral gauges, each starting full."""
        return {
            "health": cls(name="health", current=character.health, max=character.health),
            "stamina": cls(name="stamina", current=character.stamina, max=character.stamina),
            "astral": cls(name="astral", current=character.astral, max=character.astral),
        }

    def _clamp(self) -> None:
        # Bypass validate_assignment; both fields are plain ints here.
        object.__setattr__(self, "max", max(self.max, 0))
        object.__setattr__(self, "current", min(max(self.current, 0), self.max))

    def _write(self, value: int, target_max: bool) -> None:
        field = "max" if target_max else "current"
        setattr(self, field, value)
        self._clamp()
        logger.debug("Gauge updated", gauge=self.name, current=self.current, max=self.max)

    def get(self) -> GaugeReading:
        return GaugeReading(name=self.name, current=self.current, max=self.max)

    def set(self, value: int, target_max: bool = False) -> GaugeReading:
        self._write(value, target_max)
        return self.get()

    def add(self, delta: int, target_max: bool = False) -> GaugeReading:
        self._write((self.max if target_max else self.current) + delta, target_max)
        return self.get()

    def sub(self, delta: int, target_max: bool = False) -> GaugeReading:
        self._write((self.max if target_max else self.current) - delta, target_max)
        return self.get()

    def apply(self, action: GaugeAction, value: int | None = None, target_max: bool = False) -> GaugeReading:
        """Dispatch a GaugeAction; GET ignores value."""
        if action is GaugeAction.GET or value is None:
            return self.get()
        operations = {
            GaugeAction.SET: self.set,
            GaugeAction.ADD: self.add,
            GaugeAction.SUB: self.sub,
        }
        return operations[action](value, target_max)
