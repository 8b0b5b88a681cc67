"""
hrm - Human Resource Machine Profile Tool
=========================================

This module implements the command-line interface for reading programs
out of a Human Resource Machine save file.

Commands
--------
- **text**: Print a program in the game's copy/paste format
- **svg**: Draw a program as an SVG picture
- **floors**: Summarise every floor of a profile

PROFILE is the save slot (only 1 is supported currently), FLOOR is the
floor number shown in the game and TAB is the program tab, counting
from 1. Numbers may be given in hex with a 0x prefix.

Usage Examples
--------------
Print the program in tab 1 of floor 2:
    $ hrm text 1 2 1

Show line numbers, slot numbers and raw records:
    $ hrm text -v 1 2 1

Draw floor 20, tab 3 to a file:
    $ hrm svg 1 20 3 -o floor20.svg

Use a specific save file:
    $ hrm --profile ~/backup/profiles.bin floors 1
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from hrm_profile import __version__
from hrm_profile.cli.errors import handle_cli_exception
from hrm_profile.config import ToolConfig, find_profile
from hrm_profile.errors import PreconditionError
from hrm_profile.instructions import line_count
from hrm_profile.profile import (
    TABS_PER_FLOOR,
    check_profile,
    decode_profile,
    floor_to_index,
    tab_start_addr,
)
from hrm_profile.render import TextOptions, render_tab_svg, render_tab_text


logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the profile path override, the configuration and verbosity.
    """

    def __init__(self) -> None:
        self.config: ToolConfig = ToolConfig.from_env()
        self.profile_path: Optional[Path] = None
        self.debug: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity."""
        level = logging.DEBUG if self.debug else getattr(logging, self.config.log_level)
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s" if self.debug else "%(message)s",
        )

    def locate_profile(self) -> Path:
        """Return the profiles.bin to read (CLI option, then config, then defaults)."""
        path = find_profile(self.profile_path or self.config.profile_path)
        logger.debug(f"Using profile file {path}")
        return path


pass_context = click.make_pass_decorator(Context, ensure=True)


class IntOrHex(click.ParamType):
    """
    Click parameter type for integers.

    Accepts decimal, or hex with a 0x prefix.
    """
    name = "integer"

    def convert(self, value, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> int:
        if isinstance(value, int):
            return value
        text = value.strip().lower()
        try:
            if text.startswith("0x"):
                return int(text[2:], 16)
            return int(text, 10)
        except ValueError:
            self.fail(f"'{value}' is not a valid integer", param, ctx)


INT_OR_HEX = IntOrHex()


def _tab_start(profile: int, floor: int, tab: int) -> int:
    """Validate command-line addressing and return the tab's file offset."""
    check_profile(profile)
    if not 1 <= tab <= TABS_PER_FLOOR:
        raise PreconditionError(f"tab {tab} is out of range (1-{TABS_PER_FLOOR})")
    return tab_start_addr(profile, floor_to_index(floor), tab - 1)


def _write_output(result: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(result, encoding="utf-8")
        logger.info(f"Output written to: {output}")
    else:
        click.echo(result, nl=False)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-p", "--profile", "profile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="PATH to a profiles.bin (otherwise search in default locations)",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Log decoding details to stderr",
)
@click.version_option(__version__, "--version", "-V", prog_name="hrm")
@pass_context
def main(ctx: Context, profile_path: Optional[Path], debug: bool) -> None:
    """
    Human Resource Machine profile tool.

    Read programs out of a Human Resource Machine save file (profiles.bin).

    \b
    Commands:
      text      Render a program as text
      svg       Render a program as an SVG
      floors    Summarise all floors of a profile

    \b
    Examples:
      hrm text 1 2 1
      hrm svg 1 20 3 -o floor20.svg
      hrm --profile profiles.bin floors 1
    """
    ctx.profile_path = profile_path
    ctx.debug = debug
    ctx.setup_logging()


# =============================================================================
# Text Command
# =============================================================================

@main.command("text")
@click.argument("profile", type=INT_OR_HEX)
@click.argument("floor", type=INT_OR_HEX)
@click.argument("tab", type=INT_OR_HEX)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="FILENAME to write the text program to (default: stdout)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Show as much info as possible (same as -lir)",
)
@click.option("-l", "--line-number", is_flag=True, help="Show line numbers")
@click.option("-i", "--inst-number", is_flag=True, help="Show instruction numbers")
@click.option("-r", "--raw", is_flag=True, help="Show raw (hex) instructions")
@pass_context
def cmd_text(
    ctx: Context,
    profile: int,
    floor: int,
    tab: int,
    output: Optional[Path],
    verbose: bool,
    line_number: bool,
    inst_number: bool,
    raw: bool,
) -> None:
    """
    Render a profile's program as text.

    Without display options the output can be pasted into the game.

    \b
    Examples:
      hrm text 1 2 1
      hrm text -l 1 2 1 -o floor2.txt
    """
    try:
        tab_start = _tab_start(profile, floor, tab)
        options = TextOptions(
            show_line_numbers=verbose or line_number,
            show_instruction_numbers=verbose or inst_number,
            show_raw_instructions=verbose or raw,
        )
        with open(ctx.locate_profile(), "rb") as stream:
            stream.seek(tab_start)
            result = render_tab_text(stream, options, wrap_width=ctx.config.wrap_width)
        _write_output(result, output)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.debug)


# =============================================================================
# SVG Command
# =============================================================================

@main.command("svg")
@click.argument("profile", type=INT_OR_HEX)
@click.argument("floor", type=INT_OR_HEX)
@click.argument("tab", type=INT_OR_HEX)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="FILENAME to write the SVG to (default: stdout)",
)
@pass_context
def cmd_svg(
    ctx: Context,
    profile: int,
    floor: int,
    tab: int,
    output: Optional[Path],
) -> None:
    """
    Render a single program as an SVG.

    \b
    Examples:
      hrm svg 1 20 3 -o floor20.svg
    """
    try:
        tab_start = _tab_start(profile, floor, tab)
        with open(ctx.locate_profile(), "rb") as stream:
            stream.seek(tab_start)
            result = render_tab_svg(stream)
        _write_output(result, output)
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.debug)


# =============================================================================
# Floors Command
# =============================================================================

@main.command("floors")
@click.argument("profile", type=INT_OR_HEX)
@pass_context
def cmd_floors(ctx: Context, profile: int) -> None:
    """
    Summarise every floor of a profile.

    For each floor shows the size and speed challenge results (when
    met) and the number of lines in each tab.
    """
    try:
        with open(ctx.locate_profile(), "rb") as stream:
            decoded = decode_profile(stream, profile)

        click.echo(f"{'Floor':>5}  {'Size':>5}  {'Speed':>5}  Tab lines")
        click.echo("-" * 40)
        for floor in decoded:
            size = "-" if floor.size_challenge is None else str(floor.size_challenge)
            speed = "-" if floor.speed_challenge is None else str(floor.speed_challenge)
            lines = " ".join(f"{line_count(tab.code):>3}" for tab in floor.tabs)
            click.echo(f"{floor.number:>5}  {size:>5}  {speed:>5}  {lines}")
    except Exception as e:
        handle_cli_exception(e, verbose=ctx.debug)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    sys.exit(main())
