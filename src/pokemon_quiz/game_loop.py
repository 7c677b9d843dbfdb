"""
Game Loop - Runs one quiz session from the first prompt to the final screen.

Each turn redraws the grid, asks for a name, checks it against the roster and
shows the result. While the timer is enabled a background ticker refreshes the
header once a second. Once every entry is revealed the ticker is stopped and
the completion screen is shown.
"""

import asyncio
import signal
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

import click

from .logging_config import setup_logger
from .renderer import Renderer
from .roster import Roster, load_roster
from .session import GuessResult, Session, SessionClock
from .terminal_input import LineReader

logger = setup_logger(__name__)

PROMPT_TEXT = "Enter Pokémon name:"
EMPTY_GUESS_MESSAGE = "Please enter a Pokémon name."


@dataclass
class GameConfig:
    """Player-facing options for a session."""

    timer: bool = True
    banner: bool = True
    columns: Optional[int] = None  # None follows the terminal width
    delay: float = 0.6  # Pause after feedback before the next redraw
    tick_interval: float = 1.0
    watch_resize: bool = True


class TimerTicker:
    """Calls a callback at a fixed interval from a background task."""

    def __init__(self, callback: Callable[[], None], interval: float):
        self.callback = callback
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval)
            self.callback()

    async def stop(self):
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass


class GameLoop:
    """Drives a session: prompt, match, feedback, redraw, until complete."""

    def __init__(self, roster: Roster, config: Optional[GameConfig] = None,
                 renderer: Optional[Renderer] = None,
                 read_line: Optional[Callable[[], Awaitable[str]]] = None):
        self.roster = roster
        self.config = config or GameConfig()
        self.renderer = renderer or Renderer(columns=self.config.columns, show_banner=self.config.banner)
        self.read_line = read_line or LineReader().readline
        self.session: Optional[Session] = None
        self.ticker = TimerTicker(self._tick, self.config.tick_interval)
        self._resize_subscribed = False

    def new_session(self) -> Session:
        clock = SessionClock() if self.config.timer else None
        return Session(self.roster, clock)

    def _tick(self):
        if self.session is not None:
            self.renderer.update_header(self.session)

    def _subscribe_resize(self):
        if not self.config.watch_resize or not hasattr(signal, "SIGWINCH"):
            return
        loop = asyncio.get_running_loop()
        try:
            loop.add_signal_handler(signal.SIGWINCH, self.renderer.mark_layout_dirty)
        except (NotImplementedError, RuntimeError, ValueError) as e:
            logger.debug(f"Resize events unavailable: {e}")
            return
        self._resize_subscribed = True

    def _unsubscribe_resize(self):
        if self._resize_subscribed:
            asyncio.get_running_loop().remove_signal_handler(signal.SIGWINCH)
            self._resize_subscribed = False

    async def read_guess(self) -> str:
        """Prompt until the player enters something other than whitespace."""
        while True:
            self.renderer.prompt(PROMPT_TEXT)
            guess = await self.read_line()
            self.renderer.note_input_line()
            if guess.strip():
                return guess
            self.renderer.show_validation_error(EMPTY_GUESS_MESSAGE)

    async def play_turn(self, session: Session) -> GuessResult:
        """One prompt/response/feedback cycle."""
        guess = await self.read_guess()
        result = session.submit_guess(guess)
        self.renderer.show_feedback(result)
        return result

    async def run(self) -> Session:
        """
        Play a session to completion.

        Returns:
            The completed session

        Raises:
            EOFError: If input runs out before every entry is found
        """
        session = self.new_session()
        self.session = session
        logger.info(f"Quiz started with {session.total} entries to find")

        self._subscribe_resize()
        if session.clock is not None:
            self.ticker.start()
        try:
            while not session.is_complete():
                self.renderer.draw(session)
                await self.play_turn(session)
                if session.is_complete():
                    break
                await asyncio.sleep(self.config.delay)
        finally:
            await self.ticker.stop()
            self._unsubscribe_resize()

        self.renderer.draw_completion(session)
        elapsed = session.elapsed_text()
        logger.info(f"All {session.total} entries found" + (f" in {elapsed}" if elapsed else ""))
        return session


def game_main(config: GameConfig, roster_path: Optional[str] = None) -> int:
    """Main entry point for a quiz session. Returns the process exit status."""
    roster = load_roster(roster_path)
    game = GameLoop(roster, config)

    try:
        asyncio.run(game.run())
    except (KeyboardInterrupt, EOFError):
        click.echo()
        found = game.session.revealed_count if game.session else 0
        logger.info(f"Quiz stopped by player with {found}/{len(roster)} found.")
        return 1
    return 0
