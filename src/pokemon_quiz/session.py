"""
Session - Tracks what the player has found so far.

A session owns the revealed entries (in the order they were found) and an
optional clock. Guesses go through submit_guess(), the only place the
revealed set changes.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from .logging_config import setup_logger
from .roster import Entry, Roster, normalize_name

logger = setup_logger(__name__)


class GuessOutcome(Enum):
    CORRECT = "correct"
    ALREADY_GUESSED = "already_guessed"
    INCORRECT = "incorrect"


class SessionState(Enum):
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class GuessResult:
    """Outcome of one guess, with the matched entry when there is one."""

    outcome: GuessOutcome
    guess: str
    entry: Optional[Entry] = None

    @property
    def message(self) -> str:
        if self.outcome is GuessOutcome.CORRECT:
            return f"Correct: {self.entry.name}"
        if self.outcome is GuessOutcome.ALREADY_GUESSED:
            return f"Already guessed: {self.entry.name}"
        return f"Incorrect: {self.guess}"


def format_elapsed(seconds: float) -> str:
    """Format a duration as '42s', '3m 7s' or '1h 2m 3s'."""
    total = max(0, int(seconds))
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m {secs}s"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


class SessionClock:
    """Wall clock for a session; stops counting once frozen."""

    def __init__(self, now: Callable[[], float] = time.monotonic):
        self._now = now
        self.started_at = now()
        self.stopped_at: Optional[float] = None

    @property
    def running(self) -> bool:
        return self.stopped_at is None

    def elapsed(self) -> float:
        end = self.stopped_at if self.stopped_at is not None else self._now()
        return end - self.started_at

    def stop(self):
        if self.stopped_at is None:
            self.stopped_at = self._now()

    def formatted(self) -> str:
        return format_elapsed(self.elapsed())


class Session:
    """State of one play-through: revealed entries and the optional clock."""

    def __init__(self, roster: Roster, clock: Optional[SessionClock] = None):
        self.roster = roster
        self.clock = clock
        self._revealed: Dict[int, Entry] = {}  # insertion ordered, keyed by id

    @property
    def revealed(self) -> List[Entry]:
        return list(self._revealed.values())

    @property
    def revealed_count(self) -> int:
        return len(self._revealed)

    @property
    def total(self) -> int:
        return len(self.roster)

    @property
    def state(self) -> SessionState:
        if self.revealed_count >= self.total:
            return SessionState.COMPLETE
        return SessionState.PLAYING

    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    def is_revealed(self, entry: Entry) -> bool:
        return entry.id in self._revealed

    def submit_guess(self, guess: str) -> GuessResult:
        """
        Match a guess against the roster and reveal it if new.

        Args:
            guess: Raw text typed by the player

        Returns:
            GuessResult describing what happened

        Raises:
            ValueError: If the guess is empty or only whitespace
        """
        if not normalize_name(guess):
            raise ValueError("Guess must not be empty")

        entry = self.roster.find(guess)
        if entry is None:
            result = GuessResult(GuessOutcome.INCORRECT, guess)
        elif self.is_revealed(entry):
            result = GuessResult(GuessOutcome.ALREADY_GUESSED, guess, entry)
        else:
            self._revealed[entry.id] = entry
            result = GuessResult(GuessOutcome.CORRECT, guess, entry)
            if self.is_complete() and self.clock is not None:
                self.clock.stop()

        logger.debug(f"Guess {guess!r} -> {result.outcome.value} ({self.revealed_count}/{self.total})")
        return result

    def elapsed_text(self) -> Optional[str]:
        if self.clock is None:
            return None
        return self.clock.formatted()
