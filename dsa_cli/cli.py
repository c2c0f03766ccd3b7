#!/usr/bin/env python3
"""
dsa-cli command line interface.

Loads a Heldensoftware hero export and offers:
- dump: print the hero
- roll: roll one or more skills with optional modifiers
- cli: an interactive session that additionally tracks health, stamina and
  astral points

Run with: python -m dsa_cli -f hero.xml roll klettern -m 2
"""

import shlex
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

import click

from .config import get_config
from .exceptions import DSAError, ModifierParseError
from .game.dice import DiceSource, FixedDiceSource, RandomDiceSource
from .game.gauge import GaugeAction, SessionGauge
from .game.modifiers import parse_modifier, sum_modifiers
from .game.skill_check import roll_skills
from .loaders.hero_loader import load_hero
from .models.hero import Character
from .output.formatters import Formatter, OutputFormat, get_formatter
from .structured_logging.logging_config import VALID_LEVELS, configure_structlog, get_logger, setup_logging

logger = get_logger(__name__)

PROMPT = "%"
GAUGE_NAMES = ("health", "stamina", "astral")


@dataclass
class CliSession:
    """State shared by the commands of one invocation or interactive session."""

    character: Character
    formatter: Formatter
    dice: DiceSource
    gauges: dict[str, SessionGauge] = field(default_factory=dict)

    def emit(self, item) -> None:
        click.echo(self.formatter.format(item))


@contextmanager
def _user_errors() -> Iterator[None]:
    """Report dsa-cli errors as click errors instead of tracebacks."""
    try:
        yield
    except DSAError as exc:
        raise click.ClickException(exc.user_friendly) from exc


def _parse_dice(value: str | None) -> list[int] | None:
    if value is None:
        return None
    try:
        return [parse_modifier(token) for token in value.split(",") if token.strip()]
    except ModifierParseError as exc:
        raise click.BadParameter(f"'{exc.token}' is not a die value", param_hint="--dice") from exc


@click.command("dump")
@click.pass_obj
def dump(session: CliSession):
    """Dump hero information."""
    session.emit(session.character)


@click.command("roll")
@click.option(
    "-m",
    "--modifier",
    "--mod",
    "modifiers",
    multiple=True,
    help="Modification as positive (bad) or negative (good) integer; may be repeated.",
)
@click.argument("skills", nargs=-1, required=True)
@click.pass_context
def roll(ctx: click.Context, modifiers: tuple[str, ...], skills: tuple[str, ...]):
    """Roll for one or more SKILLS."""
    session: CliSession = ctx.obj
    try:
        modifier_sum = sum_modifiers(modifiers)
    except ModifierParseError as exc:
        raise click.BadParameter(exc.user_friendly, param_hint="--modifier") from exc

    with _user_errors():
        entries = roll_skills(session.character, skills, modifier_sum, session.dice)

    for entry in entries:
        session.emit(entry)
    if not all(entry.ok for entry in entries):
        ctx.exit(1)


def make_gauge_command(name: str) -> click.Command:
    """Build the interactive command tracking one gauge of the session."""

    @click.command(name, help=f"Track your current {name}.")
    @click.option("-g", "--get", "get_value", is_flag=True, help="Get current value (default).")
    @click.option("-s", "--set", "set_value", type=int, help="Set current value.")
    @click.option("--add", "add_value", type=int, help="Add to current value.")
    @click.option("--sub", "sub_value", type=int, help="Subtract from current value.")
    @click.option("-m", "--max", "target_max", is_flag=True, help="Change max value instead of current.")
    @click.pass_obj
    def gauge_command(
        session: CliSession,
        get_value: bool,
        set_value: int | None,
        add_value: int | None,
        sub_value: int | None,
        target_max: bool,
    ):
        requested = [
            (action, value)
            for action, value in (
                (GaugeAction.SET, set_value),
                (GaugeAction.ADD, add_value),
                (GaugeAction.SUB, sub_value),
            )
            if value is not None
        ]
        if len(requested) + int(get_value) > 1:
            raise click.UsageError("use only one of --get, --set, --add and --sub")

        action, value = requested[0] if requested else (GaugeAction.GET, None)
        session.emit(session.gauges[name].apply(action, value, target_max))

    return gauge_command


def build_session_group() -> click.Group:
    """Commands available inside the interactive session."""

    @click.group(name="session", context_settings={"help_option_names": ["-h", "--help"]})
    def session_group():
        """Interactive commands. Type 'exit' or send EOF to leave."""

    session_group.add_command(dump)
    session_group.add_command(roll)
    for gauge_name in GAUGE_NAMES:
        session_group.add_command(make_gauge_command(gauge_name))

    @session_group.command("exit")
    def exit_command():
        """Leave the interactive session."""

    return session_group


def run_session_line(group: click.Group, session: CliSession, line: str) -> bool:
    """
    Execute one line of the interactive session.

    Returns:
        False when the session should end, True otherwise
    """
    try:
        args = shlex.split(line)
    except ValueError as exc:
        click.echo(f"error: {exc}", err=True)
        return True
    if not args:
        return True
    if args == ["exit"]:
        return False

    try:
        group.main(args, prog_name="", standalone_mode=False, obj=session)
    except click.ClickException as exc:
        exc.show()
    except click.Abort:
        click.echo("aborted", err=True)
    return True


@click.group()
@click.option(
    "-f",
    "--file",
    "hero_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="The XML file for your hero.",
)
@click.option(
    "-o",
    "--output",
    "--format",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat], case_sensitive=False),
    default=None,
    help="Output format.",
)
@click.option("--seed", type=int, default=None, help="Seed the dice for reproducible rolls.")
@click.option("--dice", "dice_values", default=None, help="Comma separated d20 results to use instead of random dice.")
@click.option(
    "--log-level",
    type=click.Choice(list(VALID_LEVELS), case_sensitive=False),
    default=None,
    help="Log level for diagnostics on stderr.",
)
@click.version_option(package_name="dsa-cli")
@click.pass_context
def main(
    ctx: click.Context,
    hero_file: Path,
    output_format: str | None,
    seed: int | None,
    dice_values: str | None,
    log_level: str | None,
):
    """Calculates DSA rolls for a Heldensoftware hero."""
    # Log records go to stderr even while the settings are still being read.
    configure_structlog()
    with _user_errors():
        config = get_config()
    logging_config = config.logging
    if log_level is not None:
        logging_config = logging_config.model_copy(update={"level": log_level.upper()})
    # Each invocation binds a fresh stderr handler.
    setup_logging(logging_config, force_reconfigure=True)

    fixed_dice = _parse_dice(dice_values)
    with _user_errors():
        loaded = load_hero(hero_file)
        dice: DiceSource = (
            FixedDiceSource(fixed_dice)
            if fixed_dice is not None
            else RandomDiceSource(seed if seed is not None else config.dice.seed)
        )

    ctx.obj = CliSession(
        character=loaded.character,
        formatter=get_formatter(output_format or config.output.format),
        dice=dice,
    )
    logger.debug("CLI session prepared", hero=loaded.character.name, dropped=len(loaded.report.dropped))


main.add_command(dump)
main.add_command(roll)


@main.command("cli")
@click.pass_obj
def interactive(session: CliSession):
    """Interactive command line client."""
    session.gauges = SessionGauge.for_character(session.character)
    group = build_session_group()

    while True:
        try:
            line = click.prompt(PROMPT, default="", show_default=False, prompt_suffix=" ")
        except click.Abort:
            click.echo()
            break
        if not run_session_line(group, session, line):
            break


if __name__ == "__main__":
    main()
