"""
Output formatting.

Usually chosen via a command line option, the available formats aim at
human or machine readability. HumanReadable lays results out in aligned
columns; Json emits one compact object per line.

Example:
    formatter = get_formatter(OutputFormat.HUMANREADABLE)
    formatter.format(GaugeReading(name="health", current=1, max=10))
    # 'current health: 1/10 (10%)'
"""

import json
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from ..exceptions import DSAError
from ..game.gauge import GaugeReading
from ..game.skill_check import BatchEntry, RollOutcome
from ..models.hero import Character


class OutputFormat(str, Enum):
    """Supported output formats."""

    HUMANREADABLE = "humanreadable"
    JSON = "json"

    @classmethod
    def parse(cls, value: str) -> "OutputFormat":
        return cls(value.strip().lower())


Formattable = RollOutcome | BatchEntry | GaugeReading | Character | DSAError


class Formatter(ABC):
    """Converts an output item to a string for presentation to the user."""

    def format(self, item: Formattable) -> str:
        if isinstance(item, RollOutcome):
            return self.format_roll(item)
        if isinstance(item, BatchEntry):
            return self.format_entry(item)
        if isinstance(item, GaugeReading):
            return self.format_gauge(item)
        if isinstance(item, Character):
            return self.format_dump(item)
        if isinstance(item, DSAError):
            return self.format_error(item)
        raise TypeError(f"cannot format {type(item).__name__}")

    def format_entry(self, entry: BatchEntry) -> str:
        if entry.error is not None:
            return self.format_error(entry.error, skill=entry.skill)
        return self.format_roll(entry.outcome)

    @abstractmethod
    def format_roll(self, outcome: RollOutcome) -> str: ...

    @abstractmethod
    def format_gauge(self, reading: GaugeReading) -> str: ...

    @abstractmethod
    def format_dump(self, character: Character) -> str: ...

    @abstractmethod
    def format_error(self, error: DSAError, skill: str | None = None) -> str: ...


class HumanReadableFormatter(Formatter):
    """Indented, aligned text."""

    def format_roll(self, outcome: RollOutcome) -> str:
        lines = []
        if outcome.skill:
            lines.append(f"{outcome.skill}:")
        lines.append(f"base: {outcome.effective_base} (= {outcome.base}, {-outcome.modifier_sum:+} mod)")
        if outcome.stat_penalty > 0:
            lines.append(f"modifier larger than base, reducing stats by {outcome.stat_penalty}")
        for step in outcome.steps:
            if step.die < step.effective_stat:
                sym = "<"
            elif step.die == step.effective_stat:
                sym = "="
            else:
                sym = ">"
            lines.append(
                f"{step.attribute.abbreviation:16} | {step.die:2} {sym} {step.effective_stat:2} = {step.deficit:3} "
                f"| {step.pool_before:3} => {step.pool_after:3}"
            )
        verdict = "success" if outcome.success else "failure"
        lines.append(f"{'critical ' if outcome.critical else ''}{verdict} ({outcome.remainder})")
        return "\n".join(lines)

    def format_gauge(self, reading: GaugeReading) -> str:
        return f"current {reading.name}: {reading.current}/{reading.max} ({reading.percent}%)"

    def format_dump(self, character: Character) -> str:
        lines = [
            f"name: {character.name}",
            f"health: {character.health}",
            f"stamina: {character.stamina}",
            f"astral: {character.astral}",
            "attributes:",
        ]
        for attribute, value in character.attributes.items():
            lines.append(f"  {attribute.abbreviation:4} {attribute.value:17} {value:3}")
        lines.append("skills:")
        for name in sorted(character.skills):
            skill = character.skills[name]
            probe = "/".join(check.abbreviation for check in skill.checks)
            lines.append(f"  {name:32} {skill.value:3} ({probe})")
        return "\n".join(lines)

    def format_error(self, error: DSAError, skill: str | None = None) -> str:
        return f"error: {error.user_friendly}"


class JsonFormatter(Formatter):
    """One compact JSON object per item."""

    @staticmethod
    def _dump(payload: dict[str, Any]) -> str:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)

    def format_roll(self, outcome: RollOutcome) -> str:
        return self._dump(
            {
                "skill": outcome.skill,
                "success": outcome.success,
                "critical": outcome.critical,
                "remainder": outcome.remainder,
                "checks": [check.value for check in outcome.checks],
                "stat": list(outcome.stat_values),
                "dice": list(outcome.dice),
                "mod": outcome.modifier_sum,
                "base": outcome.base,
            }
        )

    def format_gauge(self, reading: GaugeReading) -> str:
        return self._dump({"name": reading.name, "current": reading.current, "max": reading.max})

    def format_dump(self, character: Character) -> str:
        return self._dump(
            {
                "name": character.name,
                "health": character.health,
                "stamina": character.stamina,
                "astral": character.astral,
                "basevalues": {attribute.value: value for attribute, value in character.attributes.items()},
                "skills": {
                    name: {"value": skill.value, "rolls": [check.value for check in skill.checks]}
                    for name, skill in character.skills.items()
                },
            }
        )

    def format_error(self, error: DSAError, skill: str | None = None) -> str:
        payload: dict[str, Any] = {"error": error.user_friendly, "error_type": type(error).__name__}
        if skill is not None:
            payload = {"skill": skill, **payload}
        return self._dump(payload)


def get_formatter(output_format: OutputFormat | str) -> Formatter:
    """Return the formatter for a format name or enum member."""
    if not isinstance(output_format, OutputFormat):
        output_format = OutputFormat.parse(output_format)
    formatters = {
        OutputFormat.HUMANREADABLE: HumanReadableFormatter,
        OutputFormat.JSON: JsonFormatter,
    }
    return formatters[output_format]()
