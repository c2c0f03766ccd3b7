"""
Hero models for dsa-cli.

A Character is built once from an exported sheet and is immutable from then
on; the roll engine only ever reads it. Session trackers keep their own
mutable copies of the derived values (see dsa_cli.game.gauge).
"""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..exceptions import MalformedSkillDefinitionError, SkillNotFoundError
from .attribute import Attribute

CHECK_COUNT = 3


def normalize_skill_name(name: str) -> str:
    """Skill names are compared case-insensitively."""
    return name.strip().lower()


class Skill(BaseModel):
    """A named, leveled capability checked against exactly three attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, description="Lower-cased skill name")
    value: int = Field(..., description="Base proficiency (TaW/ZfW)")
    checks: tuple[Attribute, Attribute, Attribute] = Field(..., description="Attributes the skill is rolled against")

    @model_validator(mode="before")
    @classmethod
    def _resolve_checks(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "checks" not in data:
            return data
        name = str(data.get("name", ""))
        checks = data["checks"]
        if isinstance(checks, str):
            raise MalformedSkillDefinitionError(name, "checks must be a sequence of attributes")
        checks = tuple(checks)
        if len(checks) != CHECK_COUNT:
            raise MalformedSkillDefinitionError(name, f"expected {CHECK_COUNT} attributes, got {len(checks)}")
        resolved = tuple(check if isinstance(check, Attribute) else Attribute.parse(str(check)) for check in checks)
        return {**data, "checks": resolved}

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, v: str) -> str:
        normalized = normalize_skill_name(v)
        if not normalized:
            raise ValueError("skill name must not be blank")
        return normalized

    @classmethod
    def from_probe(cls, name: str, value: int, probe: str) -> "Skill":
        """
        Build a skill from a Heldensoftware probe string such as " (MU/KL/CH)".

        Raises:
            UnknownAttributeError: If a token is not a known attribute
            MalformedSkillDefinitionError: If the probe does not name three attributes
        """
        tokens = [token for token in probe.strip().strip("()").split("/") if token.strip()]
        return cls(name=name, value=value, checks=tokens)


class DerivedBases(BaseModel):
    """Per-hero base offsets added to the derived attributes."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    health: int = 0
    stamina: int = 0
    astral: int = 0


class Character(BaseModel):
    """
    The hero: primitive attributes, skill catalog and derived attributes.

    health, stamina and astral are computed from the attributes and the base
    offsets whenever a Character is constructed; any values passed in for
    them are replaced.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., description="Display name")
    attributes: dict[Attribute, int] = Field(default_factory=dict)
    skills: dict[str, Skill] = Field(default_factory=dict)
    bases: DerivedBases = Field(default_factory=DerivedBases)
    health: int = 0
    stamina: int = 0
    astral: int = 0

    @model_validator(mode="before")
    @classmethod
    def _normalize_and_derive(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        # Import here to avoid circular dependency
        from ..game.derivation import derive_secondary_attributes

        data = dict(data)
        attributes = {
            key if isinstance(key, Attribute) else Attribute.parse(str(key)): int(value)
            for key, value in (data.get("attributes") or {}).items()
        }
        data["attributes"] = attributes

        raw_skills = data.get("skills") or {}
        if isinstance(raw_skills, Mapping):
            raw_skills = [
                skill if isinstance(skill, Skill) else Skill.model_validate({"name": key, **skill})
                for key, skill in raw_skills.items()
            ]
        skills: dict[str, Skill] = {}
        for skill in raw_skills:
            if not isinstance(skill, Skill):
                skill = Skill.model_validate(skill)
            skills[skill.name] = skill
        data["skills"] = skills

        bases = data.get("bases") or DerivedBases()
        if not isinstance(bases, DerivedBases):
            bases = DerivedBases.model_validate(bases)
        data["bases"] = bases

        derived = derive_secondary_attributes(attributes, bases)
        data["health"] = derived.health
        data["stamina"] = derived.stamina
        data["astral"] = derived.astral
        return data

    @classmethod
    def build(
        cls,
        name: str,
        attributes: Mapping[Attribute | str, int] | None = None,
        skills: Iterable[Skill] = (),
        bases: DerivedBases | None = None,
    ) -> "Character":
        """Construct a hero; later skills with the same name replace earlier ones."""
        return cls(name=name, attributes=dict(attributes or {}), skills=list(skills), bases=bases or DerivedBases())

    def attribute(self, attribute: Attribute) -> int:
        """Value of an attribute, 0 when the sheet does not list it."""
        return self.attributes.get(attribute, 0)

    def has_skill(self, name: str) -> bool:
        return normalize_skill_name(name) in self.skills

    def get_skill(self, name: str) -> Skill:
        """
        Case-insensitive skill lookup.

        Raises:
            SkillNotFoundError: If the hero has no such skill
        """
        try:
            return self.skills[normalize_skill_name(name)]
        except KeyError:
            raise SkillNotFoundError(name) from None
