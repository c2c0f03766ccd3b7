"""
Tests for the Skill and Character models.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from dsa_cli.exceptions import MalformedSkillDefinitionError, SkillNotFoundError, UnknownAttributeError
from dsa_cli.models.attribute import Attribute
from dsa_cli.models.hero import Character, DerivedBases, Skill


class TestSkill:
    """Test Skill construction."""

    def test_checks_resolve_aliases(self):
        """String aliases become Attribute members."""
        skill = Skill(name="Klettern", value=4, checks=("MU", "Gewandtheit", "kk"))
        assert skill.checks == (Attribute.COURAGE, Attribute.AGILITY, Attribute.STRENGTH)

    def test_repeated_attribute_allowed(self):
        """A skill may check the same attribute more than once."""
        skill = Skill(name="Sinnenschärfe", value=7, checks=("KL", "IN", "IN"))
        assert skill.checks.count(Attribute.INTUITION) == 2

    def test_name_is_lower_cased(self):
        """Names are stored lower-cased for lookups."""
        assert Skill(name="  Klettern ", value=1, checks=("MU", "MU", "MU")).name == "klettern"

    @pytest.mark.parametrize("checks", [("MU", "GE"), ("MU", "GE", "KK", "KO"), ()])
    def test_wrong_arity_rejected(self, checks):
        """Exactly three checks are required."""
        with pytest.raises(MalformedSkillDefinitionError) as exc_info:
            Skill(name="Tanzen", value=2, checks=checks)

        assert exc_info.value.skill == "Tanzen"

    def test_unknown_check_rejected(self):
        """An unknown alias in the checks fails the skill."""
        with pytest.raises(UnknownAttributeError):
            Skill(name="Gassenwissen", value=3, checks=("KL", "IN", "XX"))

    def test_blank_name_rejected(self):
        """A skill needs a name."""
        with pytest.raises(PydanticValidationError):
            Skill(name="   ", value=1, checks=("MU", "MU", "MU"))

    def test_skill_is_immutable(self, climbing):
        """Skills are frozen."""
        with pytest.raises(PydanticValidationError):
            climbing.value = 10  # type: ignore[misc]


class TestSkillFromProbe:
    """Test building skills from Heldensoftware probe strings."""

    def test_probe_with_padding(self):
        """The exported ' (MU/KL/CH)' form is accepted."""
        skill = Skill.from_probe("Balsamsalabunde", 9, " (KL/IN/CH)")
        assert skill.checks == (Attribute.WISDOM, Attribute.INTUITION, Attribute.CHARISMA)
        assert skill.value == 9

    def test_probe_with_two_attributes(self):
        """Two attributes are a malformed definition."""
        with pytest.raises(MalformedSkillDefinitionError):
            Skill.from_probe("Tanzen", 2, " (CH/GE)")

    def test_empty_probe(self):
        """No attributes at all is malformed."""
        with pytest.raises(MalformedSkillDefinitionError):
            Skill.from_probe("Leer", 1, "")


class TestCharacter:
    """Test Character construction and lookups."""

    def test_derived_values_computed(self, character):
        """Derived attributes follow the formulas plus base offsets."""
        assert (character.health, character.stamina, character.astral) == (31, 29, 34)

    def test_derived_values_ignore_input(self):
        """Passed-in derived values are replaced by the computed ones."""
        hero = Character(name="X", attributes={"KO": 10, "KK": 10}, health=999)
        assert hero.health == 15

    def test_attribute_keys_parsed(self):
        """Attribute keys may be given as aliases."""
        hero = Character.build(name="X", attributes={"Mut": 12, "kk": 9})
        assert hero.attributes == {Attribute.COURAGE: 12, Attribute.STRENGTH: 9}

    def test_unknown_attribute_key_rejected(self):
        """An unknown attribute key fails construction."""
        with pytest.raises(UnknownAttributeError):
            Character.build(name="X", attributes={"Glück": 3})

    def test_missing_attribute_reads_zero(self, character):
        """Attributes absent from the sheet read as 0."""
        assert character.attribute(Attribute.SOCIAL_STATUS) == 0
        assert character.attribute(Attribute.COURAGE) == 13

    @pytest.mark.parametrize("name", ["Klettern", "klettern", "KLETTERN", " kLeTTern "])
    def test_get_skill_case_insensitive(self, character, name):
        """Skill lookup ignores case."""
        assert character.get_skill(name).name == "klettern"
        assert character.has_skill(name)

    def test_get_unknown_skill(self, character):
        """Unknown names raise SkillNotFoundError."""
        with pytest.raises(SkillNotFoundError) as exc_info:
            character.get_skill("Fliegen")

        assert exc_info.value.user_friendly == "unknown skill 'Fliegen'"
        assert not character.has_skill("Fliegen")

    def test_later_skill_replaces_earlier(self):
        """Skills differing only by case collapse to the last one."""
        hero = Character.build(
            name="X",
            skills=[
                Skill(name="Klettern", value=2, checks=("MU", "GE", "KK")),
                Skill(name="KLETTERN", value=6, checks=("MU", "GE", "KK")),
            ],
        )
        assert len(hero.skills) == 1
        assert hero.get_skill("klettern").value == 6

    def test_skills_from_mapping(self):
        """Skills may be supplied as a mapping of name to definition."""
        hero = Character(name="X", skills={"Bogen": {"value": 5, "checks": ["IN", "FF", "KK"]}})
        assert hero.get_skill("bogen").checks == (Attribute.INTUITION, Attribute.DEXTERITY, Attribute.STRENGTH)

    def test_bases_from_mapping(self):
        """Base offsets may be supplied as a mapping."""
        hero = Character(name="X", bases={"astral": 7})
        assert hero.bases == DerivedBases(astral=7)
        assert hero.astral == 7

    def test_character_is_immutable(self, character):
        """A built hero cannot be changed."""
        with pytest.raises(PydanticValidationError):
            character.name = "Other"  # type: ignore[misc]
