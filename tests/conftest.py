from __future__ import annotations

import io
from collections.abc import Awaitable, Callable, Iterable

import pytest

from pokemon_quiz.roster import Entry, Roster, load_roster


@pytest.fixture(scope="session")
def roster() -> Roster:
    return load_roster()


@pytest.fixture()
def small_roster() -> Roster:
    return Roster([Entry(1, "Bulbasaur"), Entry(2, "Ivysaur"), Entry(3, "Venusaur"), Entry(4, "Charmander"), Entry(5, "Mr. Mime")])


@pytest.fixture()
def make_reader() -> Callable[[Iterable[str]], Callable[[], Awaitable[str]]]:
    """Async line source that replays lines, then behaves like an exhausted stdin."""

    def _make(lines: Iterable[str]) -> Callable[[], Awaitable[str]]:
        pending = list(lines)

        async def read_line() -> str:
            if not pending:
                raise EOFError("script exhausted")
            return pending.pop(0)

        return read_line

    return _make


@pytest.fixture()
def out() -> io.StringIO:
    return io.StringIO()
