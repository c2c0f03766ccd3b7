"""
Skill check resolution (3d20 talent/spell probes).

A skill is rolled with three d20, one per attribute the skill is checked
against. Each die that exceeds its attribute costs the difference out of
the proficiency pool; the check succeeds when the pool ends non-negative.

Modifiers are applied to the pool first. A modifier larger than the skill
value empties the pool and the excess lowers all three attributes instead.

Two or more 20s fail the check no matter what is left in the pool, two or
more 1s succeed it; both are critical. The two flags are reported
separately: a critical result is a critical success or a critical failure
depending on `success`.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field

from ..exceptions import DSAError
from ..models.attribute import Attribute
from ..models.hero import Character, Skill
from ..structured_logging.logging_config import get_logger
from .dice import DiceSource, roll_three

logger = get_logger(__name__)

DIE_MAX = 20
DIE_MIN = 1


class CheckStep(BaseModel):
    """One of the three attribute checks of a roll, in roll order."""

    model_config = ConfigDict(frozen=True)

    attribute: Attribute
    stat: int
    effective_stat: int
    die: int
    deficit: int
    pool_before: int
    pool_after: int


class RollOutcome(BaseModel):
    """Result of a single skill check. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    skill: str | None = Field(default=None, description="Skill name, when rolled by name")
    success: bool
    critical: bool
    remainder: int = Field(..., description="Proficiency pool left after all deductions")
    base: int = Field(..., description="Skill value before modifiers")
    modifier_sum: int = Field(..., description="Sum of applied modifiers, positive is harder")
    checks: tuple[Attribute, Attribute, Attribute]
    stat_values: tuple[int, int, int]
    dice: tuple[int, int, int]
    steps: tuple[CheckStep, CheckStep, CheckStep]

    @property
    def effective_base(self) -> int:
        return effective_base(self.base, self.modifier_sum)

    @property
    def stat_penalty(self) -> int:
        return stat_penalty(self.base, self.modifier_sum)

    @property
    def is_critical_success(self) -> bool:
        return self.critical and self.success

    @property
    def is_critical_failure(self) -> bool:
        return self.critical and not self.success


class BatchEntry(BaseModel):
    """Outcome or error for one skill of a batch roll."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    skill: str
    outcome: RollOutcome | None = None
    error: DSAError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def effective_base(base: int, modifier_sum: int) -> int:
    """Proficiency pool available at the start of a check, never negative."""
    return max(0, base - modifier_sum)


def stat_penalty(base: int, modifier_sum: int) -> int:
    """Part of the modifier the skill value could not absorb, never negative."""
    return max(0, modifier_sum - base)


def resolve_check(
    skill: Skill,
    stat_values: Iterable[int],
    modifier_sum: int,
    dice: Iterable[int],
) -> RollOutcome:
    """
    Resolve a skill check from fully known inputs.

    Pure and deterministic: identical arguments give identical outcomes.
    Dice are taken as given (1..20); they are not re-validated here.

    Args:
        skill: The skill being rolled.
        stat_values: The hero's values for skill.checks, same order.
        modifier_sum: Aggregated modifier (positive makes the check harder).
        dice: Three d20 results, same order as skill.checks.

    Returns:
        RollOutcome with the per-check breakdown.
    """
    stats = tuple(stat_values)
    rolled = tuple(dice)
    penalty = stat_penalty(skill.value, modifier_sum)

    # The pool may go negative and stays negative for later checks.
    pool = effective_base(skill.value, modifier_sum)
    steps = []
    for attribute, stat, die in zip(skill.checks, stats, rolled, strict=True):
        effective_stat = stat - penalty
        deficit = max(0, die - effective_stat)
        steps.append(
            CheckStep(
                attribute=attribute,
                stat=stat,
                effective_stat=effective_stat,
                die=die,
                deficit=deficit,
                pool_before=pool,
                pool_after=pool - deficit,
            )
        )
        pool -= deficit

    num_max = rolled.count(DIE_MAX)
    num_min = rolled.count(DIE_MIN)

    outcome = RollOutcome(
        skill=skill.name,
        success=num_max < 2 and (pool >= 0 or num_min > 1),
        critical=num_max > 1 or num_min > 1,
        remainder=pool,
        base=skill.value,
        modifier_sum=modifier_sum,
        checks=skill.checks,
        stat_values=stats,
        dice=rolled,
        steps=tuple(steps),
    )
    logger.debug(
        "Skill check resolved",
        skill=skill.name,
        dice=rolled,
        modifier_sum=modifier_sum,
        remainder=pool,
        success=outcome.success,
        critical=outcome.critical,
    )
    return outcome


def roll_skill(character: Character, skill_name: str, modifier_sum: int, dice_source: DiceSource) -> RollOutcome:
    """
    Roll a named skill of a hero with fresh dice.

    Raises:
        SkillNotFoundError: If the hero does not have the skill
        DiceExhaustedError: If a fixed dice source runs out
    """
    skill = character.get_skill(skill_name)
    stats = tuple(character.attribute(attribute) for attribute in skill.checks)
    return resolve_check(skill, stats, modifier_sum, roll_three(dice_source))


def roll_skills(
    character: Character,
    skill_names: Iterable[str],
    modifier_sum: int,
    dice_source: DiceSource,
) -> list[BatchEntry]:
    """
    Roll several skills independently, each with its own three dice.

    A skill that cannot be rolled (unknown name, dice source running dry)
    yields an entry carrying the error; outcomes for the other skills are
    kept.
    """
    entries = []
    for name in skill_names:
        try:
            outcome = roll_skill(character, name, modifier_sum, dice_source)
        except DSAError as exc:
            entries.append(BatchEntry(skill=name, error=exc))
            continue
        entries.append(BatchEntry(skill=name, outcome=outcome))

    logger.info(
        "Batch roll completed",
        hero=character.name,
        requested=len(entries),
        failed=sum(1 for entry in entries if not entry.ok),
    )
    return entries
