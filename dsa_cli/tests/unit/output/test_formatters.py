"""
Tests for output formatters.
"""

import json

import pytest

from dsa_cli.exceptions import SkillNotFoundError
from dsa_cli.game.gauge import GaugeReading
from dsa_cli.game.skill_check import BatchEntry, resolve_check
from dsa_cli.models.hero import Skill
from dsa_cli.output.formatters import (
    HumanReadableFormatter,
    JsonFormatter,
    OutputFormat,
    get_formatter,
)


@pytest.fixture
def outcome(climbing):
    return resolve_check(climbing, [13, 12, 11], 0, [13, 14, 12])


class TestGetFormatter:
    """Test formatter selection."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("humanreadable", HumanReadableFormatter), ("JSON", JsonFormatter), (OutputFormat.JSON, JsonFormatter)],
    )
    def test_known_formats(self, name, expected):
        """Names are matched case-insensitively."""
        assert isinstance(get_formatter(name), expected)

    def test_unknown_format(self):
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError):
            get_formatter("yaml")

    def test_unsupported_item(self):
        """Only known result types can be formatted."""
        with pytest.raises(TypeError):
            get_formatter("json").format(42)  # type: ignore[arg-type]


class TestHumanReadableFormatter:
    """Test the text layout."""

    def test_roll(self, outcome):
        """Rolls show the pool, each check and the verdict."""
        lines = HumanReadableFormatter().format(outcome).splitlines()

        assert lines[0] == "klettern:"
        assert lines[1] == "base: 4 (= 4, +0 mod)"
        assert lines[2].startswith("MU")
        assert "13 = 13 =   0 |   4 =>   4" in lines[2]
        assert "14 > 12 =   2 |   4 =>   2" in lines[3]
        assert "12 > 11 =   1 |   2 =>   1" in lines[4]
        assert lines[5] == "success (1)"

    def test_roll_with_stat_penalty(self, climbing):
        """A modifier above the base is announced."""
        text = HumanReadableFormatter().format(resolve_check(climbing, [13, 12, 11], 6, [1, 2, 3]))

        assert "base: 0 (= 4, -6 mod)" in text
        assert "modifier larger than base, reducing stats by 2" in text

    def test_critical_failure(self, climbing):
        """Critical results are labelled."""
        text = HumanReadableFormatter().format(resolve_check(climbing, [13, 12, 11], 0, [20, 20, 1]))
        assert text.splitlines()[-1].startswith("critical failure")

    def test_gauge(self):
        """Gauges read as current/max with a percentage."""
        reading = GaugeReading(name="health", current=5, max=10)
        assert HumanReadableFormatter().format(reading) == "current health: 5/10 (50%)"

    def test_dump(self, character):
        """Dumps list name, derived values, attributes and skills."""
        text = HumanReadableFormatter().format(character)

        assert text.startswith("name: Alrik\nhealth: 31\nstamina: 29\nastral: 34\nattributes:")
        assert "(MU/GE/KK)" in text
        assert "sinnenschärfe" in text

    def test_error_entry(self):
        """Failed batch entries show the error."""
        entry = BatchEntry(skill="fliegen", error=SkillNotFoundError("fliegen"))
        assert HumanReadableFormatter().format(entry) == "error: unknown skill 'fliegen'"


class TestJsonFormatter:
    """Test the JSON layout."""

    def test_roll(self, outcome):
        """Rolls serialize the verdict and inputs."""
        payload = json.loads(JsonFormatter().format(outcome))

        assert payload == {
            "skill": "klettern",
            "success": True,
            "critical": False,
            "remainder": 1,
            "checks": ["courage", "agility", "strength"],
            "stat": [13, 12, 11],
            "dice": [13, 14, 12],
            "mod": 0,
            "base": 4,
        }

    def test_output_is_single_line(self, outcome):
        """One compact object per item."""
        assert "\n" not in JsonFormatter().format(outcome)

    def test_gauge(self):
        """Gauges serialize name, current and max."""
        reading = GaugeReading(name="astral", current=3, max=34)
        assert json.loads(JsonFormatter().format(reading)) == {"name": "astral", "current": 3, "max": 34}

    def test_dump(self, character):
        """Dumps keep attributes and skills by name."""
        payload = json.loads(JsonFormatter().format(character))

        assert payload["name"] == "Alrik"
        assert payload["health"] == 31
        assert payload["basevalues"]["courage"] == 13
        assert payload["skills"]["bogen"] == {"value": 5, "rolls": ["intuition", "dexterity", "strength"]}

    def test_non_ascii_kept(self, character):
        """Umlauts are written as is."""
        assert "sinnenschärfe" in JsonFormatter().format(character)

    def test_error_entry(self):
        """Failed batch entries carry the skill and error type."""
        entry = BatchEntry(skill="fliegen", error=SkillNotFoundError("fliegen"))

        assert json.loads(JsonFormatter().format(entry)) == {
            "skill": "fliegen",
            "error": "unknown skill 'fliegen'",
            "error_type": "SkillNotFoundError",
        }

    def test_successful_entry(self, outcome):
        """Successful batch entries format as their roll."""
        entry = BatchEntry(skill="Klettern", outcome=outcome)
        assert json.loads(JsonFormatter().format(entry))["remainder"] == 1

    def test_skill_name_is_lower_cased(self):
        """Outcomes carry the normalized skill name."""
        skill = Skill(name="X", value=1, checks=("MU", "MU", "MU"))
        assert json.loads(JsonFormatter().format(resolve_check(skill, [10, 10, 10], 0, [1, 2, 3])))["skill"] == "x"
