"""
Modifier aggregation.

Modifiers are signed integers: positive values make a check harder,
negative values make it easier. Several modifiers on one roll are summed.
"""

import re
from collections.abc import Iterable

from ..exceptions import ModifierParseError

_INTEGER = re.compile(r"[+-]?\d+")


def parse_modifier(token: str | int) -> int:
    """
    Parse a single modifier token.

    Raises:
        ModifierParseError: If the token is not an integer
    """
    if isinstance(token, int) and not isinstance(token, bool):
        return token
    text = str(token).strip()
    if not _INTEGER.fullmatch(text):
        raise ModifierParseError(str(token))
    return int(text)


def sum_modifiers(tokens: Iterable[str | int] | None = None) -> int:
    """
    Sum zero or more modifier tokens.

    One invalid token fails the whole aggregation, so no roll is made with a
    partially applied modifier.
    """
    return sum(parse_modifier(token) for token in tokens or ())
