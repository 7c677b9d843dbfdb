"""
Renderer - Draws the Pokédex grid and game messages to the terminal.

The grid is laid out column-major: entries fill down each column before
moving to the next. The number of columns follows the terminal width unless
fixed by the player, and is recomputed after a resize.
"""

import math
import shutil
import sys
from typing import Callable, Iterable, List, Optional, TextIO

import click

from .roster import Entry, Roster
from .session import GuessOutcome, GuessResult, Session

ENTRY_WIDTH = 20  # Width of each grid cell
COLUMN_SPACING = 4  # Spaces between columns
MIN_COLUMNS = 2
MAX_COLUMNS = 10
DEFAULT_TERMINAL_WIDTH = 80

CLEAR_SCREEN = "\x1b[2J\x1b[3J\x1b[H"
SAVE_CURSOR = "\x1b7"
RESTORE_CURSOR = "\x1b8"
CLEAR_LINE = "\r\x1b[2K"

BANNER = r"""
  ____                            _         _
 / ___|___  _ __   __ _ _ __ __ _| |_ ___  | |
| |   / _ \| '_ \ / _` | '__/ _` | __/ __| | |
| |__| (_) | | | | (_| | | | (_| | |_\__ \ |_|
 \____\___/|_| |_|\__, |_|  \__,_|\__|___/ (_)
                  |___/
"""

OUTCOME_COLORS = {
    GuessOutcome.CORRECT: "green",
    GuessOutcome.ALREADY_GUESSED: "yellow",
    GuessOutcome.INCORRECT: "red",
}


def terminal_height() -> int:
    return shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).lines or 24


def terminal_width() -> int:
    """Current terminal width, or 80 columns when it cannot be detected."""
    columns = shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns
    return columns or DEFAULT_TERMINAL_WIDTH


def calculate_columns(width: int) -> int:
    """Number of grid columns that fit in the given terminal width."""
    # Each column needs ENTRY_WIDTH chars plus COLUMN_SPACING, except the last
    columns = (width + COLUMN_SPACING) // (ENTRY_WIDTH + COLUMN_SPACING)
    return max(MIN_COLUMNS, min(MAX_COLUMNS, columns))


def format_cell(entry: Entry, revealed: bool) -> str:
    text = f"{entry.id}: {entry.name}" if revealed else f"{entry.id}:"
    return text.ljust(ENTRY_WIDTH)


def render_grid(roster: Roster, revealed: Iterable[Entry], columns: int) -> List[str]:
    """
    Lay out the roster as text rows.

    Args:
        roster: All entries, in display order
        revealed: Entries whose names are shown
        columns: Number of grid columns

    Returns:
        One string per grid row
    """
    revealed_ids = {entry.id for entry in revealed}
    cells = [format_cell(entry, entry.id in revealed_ids) for entry in roster]
    if not cells:
        return []

    rows = math.ceil(len(cells) / columns)
    lines = []
    for r in range(rows):
        row = [cells[c * rows + r] for c in range(columns) if c * rows + r < len(cells)]
        lines.append((" " * COLUMN_SPACING).join(row))
    return lines


def render_header(session: Session) -> str:
    header = f"Guessed {session.revealed_count}/{session.total}"
    elapsed = session.elapsed_text()
    if elapsed is not None:
        header += f"  Time: {elapsed}"
    return header


class Renderer:
    """Writes the game screen and feedback to an output stream."""

    def __init__(self, out: Optional[TextIO] = None, columns: Optional[int] = None,
                 show_banner: bool = True, width_source: Callable[[], int] = terminal_width,
                 height_source: Callable[[], int] = terminal_height,
                 interactive: Optional[bool] = None):
        self.out = out
        self.fixed_columns = columns
        self.show_banner = show_banner
        self.width_source = width_source
        self.height_source = height_source
        if interactive is None:
            stream = out if out is not None else sys.stdout
            interactive = stream.isatty()
        self.interactive = interactive
        self.layout_dirty = True
        self._columns = MIN_COLUMNS
        # Screen rows between the header and the cursor; None until the first draw
        self._rows_below_header: Optional[int] = None

    def _echo(self, text: str = "", **kwargs):
        click.echo(text, file=self.out, **kwargs)

    def _rows_for(self, text: str) -> int:
        width = self.width_source() or DEFAULT_TERMINAL_WIDTH
        return sum(max(1, math.ceil(len(part) / width)) for part in click.unstyle(text).split("\n"))

    def _line(self, text: str = ""):
        self._echo(text)
        if self._rows_below_header is not None:
            self._rows_below_header += self._rows_for(text)

    def mark_layout_dirty(self):
        """Request a column recount at the next full draw."""
        self.layout_dirty = True

    @property
    def columns(self) -> int:
        if self.fixed_columns is not None:
            return self.fixed_columns
        if self.layout_dirty:
            self._columns = calculate_columns(self.width_source())
            self.layout_dirty = False
        return self._columns

    def clear(self):
        self._echo(CLEAR_SCREEN, nl=False)
        self._rows_below_header = None

    def draw(self, session: Session):
        """Clear the screen and draw the header plus the full grid."""
        self.clear()
        self._rows_below_header = 0
        self._line(click.style(render_header(session), fg="green"))
        for line in render_grid(session.roster, session.revealed, self.columns):
            self._line(line.rstrip())

    def header_offset(self) -> Optional[int]:
        """Rows to move up from the cursor to the header, or None when it is not on screen."""
        rows = self._rows_below_header
        if not self.interactive or rows is None or rows < 1:
            return None
        if rows >= self.height_source():
            return None
        return rows

    def update_header(self, session: Session):
        """Rewrite only the header line, leaving the cursor where it was."""
        rows = self.header_offset()
        if rows is None:
            return
        header = click.style(render_header(session), fg="green")
        self._echo(f"{SAVE_CURSOR}\x1b[{rows}A{CLEAR_LINE}{header}{RESTORE_CURSOR}", nl=False, color=True)

    def prompt(self, text: str):
        self._echo(click.style("? ", fg="green") + click.style(text, bold=True) + " ", nl=False)

    def note_input_line(self):
        """The terminal echoed the player's Enter, moving the cursor down a row."""
        if self._rows_below_header is not None:
            self._rows_below_header += 1

    def show_feedback(self, result: GuessResult):
        self._line(click.style(result.message, fg=OUTCOME_COLORS[result.outcome]))

    def show_validation_error(self, message: str):
        self._line(click.style(f">> {message}", fg="red"))

    def draw_completion(self, session: Session):
        """Final screen: grid, optional banner, congratulations and time taken."""
        self.draw(session)
        if self.show_banner:
            self._line(click.style(BANNER, fg="yellow"))
        self._line(click.style(f"Congratulations, you have found all {session.total} Pokémon!", fg="green"))
        elapsed = session.elapsed_text()
        if elapsed is not None:
            self._line(click.style(f"Completed in {elapsed}", fg="green"))
