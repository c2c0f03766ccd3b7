"""
Loader for Heldensoftware hero exports.

The export is an XML document shaped like:

    <helden>
      <held name="Alrik">
        <eigenschaften>
          <eigenschaft name="Mut" value="12" mod="0"/>
          <eigenschaft name="Lebensenergie" value="3" mod="7"/>
          ...
        </eigenschaften>
        <talentliste>
          <talent name="Klettern" probe=" (MU/GE/KK)" value="4"/>
        </talentliste>
        <zauberliste>
          <zauber name="Balsamsalabunde" probe=" (KL/IN/CH)" value="7"/>
        </zauberliste>
      </held>
    </helden>

Entries naming an unknown attribute, and skills that do not resolve to
exactly three attributes, are dropped and recorded in the LoadReport; the
rest of the hero still loads.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from xml.etree.ElementTree import Element, ParseError

from defusedxml import ElementTree
from defusedxml.common import DefusedXmlException

from ..exceptions import HeroParseError, MalformedSkillDefinitionError, UnknownAttributeError, create_error_context
from ..models.attribute import Attribute
from ..models.hero import Character, DerivedBases, Skill
from ..structured_logging.logging_config import get_logger

logger = get_logger(__name__)

ROOT_TAG = "helden"
HERO_TAG = "held"

# eigenschaft entries that carry base offsets rather than primitive attributes
BASE_OFFSET_NAMES = {
    "lebensenergie": "health",
    "ausdauer": "stamina",
    "astralenergie": "astral",
}

SKILL_SECTIONS = (("talentliste", "talent"), ("zauberliste", "zauber"))


@dataclass
class DroppedEntry:
    """An entry of the export that could not be used."""

    section: str
    name: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"section": self.section, "name": self.name, "reason": self.reason}


@dataclass
class LoadReport:
    """What the loader skipped while reading a hero."""

    source: str = "<string>"
    dropped: list[DroppedEntry] = field(default_factory=list)

    def drop(self, section: str, name: str, reason: str) -> None:
        logger.info("Dropping hero entry", source=self.source, section=section, name=name, reason=reason)
        self.dropped.append(DroppedEntry(section=section, name=name, reason=reason))


@dataclass
class LoadedHero:
    """A parsed hero plus the report of dropped entries."""

    character: Character
    report: LoadReport


def _int_attribute(element: Element, key: str) -> int:
    raw = element.get(key)
    if raw is None or not raw.strip():
        return 0
    return int(raw.strip())


def _fail(message: str, source: str, **details: Any) -> None:
    context = create_error_context(source=source)
    context.metadata["operation"] = "parse_hero"
    raise HeroParseError(message, context, source=source, details=details, user_friendly=message)


def _read_attributes(hero: Element, report: LoadReport) -> tuple[dict[Attribute, int], DerivedBases]:
    attributes: dict[Attribute, int] = {}
    bases: dict[str, int] = {}
    for entry in hero.iterfind("eigenschaften/eigenschaft"):
        name = entry.get("name", "")
        try:
            total = _int_attribute(entry, "value") + _int_attribute(entry, "mod")
        except ValueError:
            report.drop("eigenschaften", name, "value is not an integer")
            continue

        offset_key = BASE_OFFSET_NAMES.get(name.strip().lower())
        if offset_key is not None:
            bases[offset_key] = total
            continue

        try:
            attribute = Attribute.parse(name)
        except UnknownAttributeError as exc:
            report.drop("eigenschaften", name, exc.user_friendly)
            continue
        attributes[attribute] = total
    return attributes, DerivedBases(**bases)


def _read_skills(hero: Element, report: LoadReport) -> list[Skill]:
    skills = []
    for section, tag in SKILL_SECTIONS:
        for entry in hero.iterfind(f"{section}/{tag}"):
            name = entry.get("name", "")
            try:
                value = _int_attribute(entry, "value")
            except ValueError:
                report.drop(section, name, "value is not an integer")
                continue
            try:
                skills.append(Skill.from_probe(name, value, entry.get("probe", "")))
            except (UnknownAttributeError, MalformedSkillDefinitionError) as exc:
                report.drop(section, name, exc.user_friendly)
            except ValueError as exc:
                report.drop(section, name, str(exc))
    return skills


def parse_hero(text: str | bytes, source: str = "<string>") -> LoadedHero:
    """
    Parse a Heldensoftware XML export.

    Args:
        text: XML document; pass bytes to honour the declared encoding
        source: Name used in logs and errors (usually the file path)

    Returns:
        LoadedHero with the character and a report of dropped entries

    Raises:
        HeroParseError: If the document is not a usable hero export
    """
    try:
        root = ElementTree.fromstring(text)
    except (ParseError, DefusedXmlException) as exc:
        _fail(f"xml document could not be parsed: {exc}", source)

    if root.tag != ROOT_TAG:
        _fail("unknown root element", source, root=root.tag)

    hero = next(iter(root), None)
    if hero is None or hero.tag != HERO_TAG:
        _fail("root element does not contain held element", source)

    name = hero.get("name")
    if not name:
        _fail("hero does not have a name", source)

    report = LoadReport(source=source)
    attributes, bases = _read_attributes(hero, report)
    skills = _read_skills(hero, report)
    character = Character.build(name=name, attributes=attributes, skills=skills, bases=bases)

    logger.info(
        "Hero loaded",
        source=source,
        hero=character.name,
        attributes=len(character.attributes),
        skills=len(character.skills),
        dropped=len(report.dropped),
    )
    return LoadedHero(character=character, report=report)


def load_hero(path: Path | str) -> LoadedHero:
    """
    Read and parse a hero file.

    Raises:
        HeroParseError: If the file cannot be read or parsed
    """
    file_path = Path(path)
    try:
        text = file_path.read_bytes()
    except OSError as exc:
        _fail(f"loading hero file failed: {exc.strerror or exc}", str(file_path))
    return parse_hero(text, source=str(file_path))
