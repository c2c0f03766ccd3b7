"""
Primitive attributes of a hero.

The set is closed: exactly fourteen attributes exist, and every textual alias
(German abbreviation, German or English full word) maps onto one of them.
Unrecognized aliases are an error, never a default.
"""

from enum import Enum

from ..exceptions import UnknownAttributeError


class Attribute(str, Enum):
    """Core attribute types for a DSA hero."""

    COURAGE = "courage"
    WISDOM = "wisdom"
    INTUITION = "intuition"
    CHARISMA = "charisma"
    DEXTERITY = "dexterity"
    AGILITY = "agility"
    CONSTITUTION = "constitution"
    STRENGTH = "strength"
    SOCIAL_STATUS = "social_status"
    MAGIC_RESISTANCE = "magic_resistance"
    INITIATIVE = "initiative"
    CLOSE_COMBAT = "close_combat"
    PARRY = "parry"
    RANGED_COMBAT = "ranged_combat"

    @property
    def abbreviation(self) -> str:
        """German short name as printed on the character sheet."""
        return _ABBREVIATIONS[self]

    @classmethod
    def parse(cls, token: str) -> "Attribute":
        """
        Resolve a textual alias to an Attribute.

        Lookup is case-insensitive and ignores surrounding whitespace.

        Raises:
            UnknownAttributeError: If the alias is not known
        """
        key = " ".join(token.strip().lower().split())
        try:
            return _ALIASES[key]
        except KeyError:
            raise UnknownAttributeError(token) from None


_ABBREVIATIONS = {
    Attribute.COURAGE: "MU",
    Attribute.WISDOM: "KL",
    Attribute.INTUITION: "IN",
    Attribute.CHARISMA: "CH",
    Attribute.DEXTERITY: "FF",
    Attribute.AGILITY: "GE",
    Attribute.CONSTITUTION: "KO",
    Attribute.STRENGTH: "KK",
    Attribute.SOCIAL_STATUS: "SO",
    Attribute.MAGIC_RESISTANCE: "MR",
    Attribute.INITIATIVE: "INI",
    Attribute.CLOSE_COMBAT: "AT",
    Attribute.PARRY: "PA",
    Attribute.RANGED_COMBAT: "FK",
}

_ALIASES = {
    # courage
    "mu": Attribute.COURAGE,
    "mut": Attribute.COURAGE,
    "courage": Attribute.COURAGE,
    # wisdom
    "kl": Attribute.WISDOM,
    "klugheit": Attribute.WISDOM,
    "wisdom": Attribute.WISDOM,
    "cleverness": Attribute.WISDOM,
    "intelligence": Attribute.WISDOM,
    # intuition
    "in": Attribute.INTUITION,
    "intuition": Attribute.INTUITION,
    # charisma
    "ch": Attribute.CHARISMA,
    "charisma": Attribute.CHARISMA,
    # dexterity
    "ff": Attribute.DEXTERITY,
    "fingerfertigkeit": Attribute.DEXTERITY,
    "dexterity": Attribute.DEXTERITY,
    # agility
    "ge": Attribute.AGILITY,
    "gewandtheit": Attribute.AGILITY,
    "agility": Attribute.AGILITY,
    # constitution
    "ko": Attribute.CONSTITUTION,
    "konstitution": Attribute.CONSTITUTION,
    "constitution": Attribute.CONSTITUTION,
    # strength
    "kk": Attribute.STRENGTH,
    "körperkraft": Attribute.STRENGTH,
    "koerperkraft": Attribute.STRENGTH,
    "strength": Attribute.STRENGTH,
    # social status
    "so": Attribute.SOCIAL_STATUS,
    "sozialstatus": Attribute.SOCIAL_STATUS,
    "social status": Attribute.SOCIAL_STATUS,
    "social_status": Attribute.SOCIAL_STATUS,
    # magic resistance
    "mr": Attribute.MAGIC_RESISTANCE,
    "magieresistenz": Attribute.MAGIC_RESISTANCE,
    "magic resistance": Attribute.MAGIC_RESISTANCE,
    "magic_resistance": Attribute.MAGIC_RESISTANCE,
    # initiative
    "ini": Attribute.INITIATIVE,
    "initiative": Attribute.INITIATIVE,
    # close combat
    "at": Attribute.CLOSE_COMBAT,
    "attacke": Attribute.CLOSE_COMBAT,
    "attack": Attribute.CLOSE_COMBAT,
    "close combat": Attribute.CLOSE_COMBAT,
    "close_combat": Attribute.CLOSE_COMBAT,
    # parry
    "pa": Attribute.PARRY,
    "parade": Attribute.PARRY,
    "parry": Attribute.PARRY,
    # ranged combat
    "fk": Attribute.RANGED_COMBAT,
    "fernkampf": Attribute.RANGED_COMBAT,
    "ranged combat": Attribute.RANGED_COMBAT,
    "ranged_combat": Attribute.RANGED_COMBAT,
}
