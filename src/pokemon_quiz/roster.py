"""
Roster - The fixed, ordered list of guessable Pokémon.

The roster ships with the package as a JSON asset and is loaded once at
startup. Entries are immutable and numbered by their Pokédex id.
"""

import json
from dataclasses import dataclass
from importlib import resources
from typing import Iterable, List, Optional, Tuple

from .logging_config import setup_logger

logger = setup_logger(__name__)

ROSTER_RESOURCE = "data/roster.json"


class RosterError(ValueError):
    """Raised when roster data is malformed."""


@dataclass(frozen=True)
class Entry:
    """One guessable Pokémon."""

    id: int
    name: str

    @property
    def key(self) -> str:
        """Name as compared against player guesses."""
        return normalize_name(self.name)


def normalize_name(text: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return text.strip().lower()


class Roster:
    """Ordered, read-only collection of entries with case-insensitive lookup."""

    def __init__(self, entries: Iterable[Entry]):
        self._entries: Tuple[Entry, ...] = tuple(entries)
        self._by_key = {}

        if not self._entries:
            raise RosterError("Roster has no entries")

        for position, entry in enumerate(self._entries, start=1):
            if entry.id != position:
                raise RosterError(f"Expected id {position}, found {entry.id} ({entry.name!r})")
            if not entry.key:
                raise RosterError(f"Entry {entry.id} has an empty name")
            if entry.key in self._by_key:
                raise RosterError(f"Duplicate name {entry.name!r} (id {entry.id})")
            self._by_key[entry.key] = entry

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __getitem__(self, index: int) -> Entry:
        return self._entries[index]

    def __contains__(self, entry: object) -> bool:
        return isinstance(entry, Entry) and self._by_key.get(entry.key) == entry

    @property
    def entries(self) -> Tuple[Entry, ...]:
        return self._entries

    def find(self, guess: str) -> Optional[Entry]:
        """Return the entry whose name matches the guess, ignoring case and padding."""
        return self._by_key.get(normalize_name(guess))

    @classmethod
    def from_records(cls, records: List[dict]) -> "Roster":
        """Build a roster from a list of {"id": ..., "name": ...} records."""
        if not isinstance(records, list):
            raise RosterError("Roster data must be a list of records")
        entries = []
        for record in records:
            if not isinstance(record, dict) or "id" not in record or "name" not in record:
                raise RosterError(f"Invalid roster record {record!r}: expected an object with id and name")
            entry_id, name = record["id"], record["name"]
            # bool is an int subclass
            if not isinstance(entry_id, int) or isinstance(entry_id, bool):
                raise RosterError(f"Invalid roster record {record!r}: id must be an integer")
            if not isinstance(name, str):
                raise RosterError(f"Invalid roster record {record!r}: name must be a string")
            entries.append(Entry(id=entry_id, name=name))
        return cls(entries)


def load_roster(path: Optional[str] = None) -> Roster:
    """
    Load the roster from a JSON file.

    Args:
        path: JSON file to read. Defaults to the roster packaged with the game

    Returns:
        The loaded roster

    Raises:
        RosterError: If the file is not valid roster data
    """
    source = ROSTER_RESOURCE if path is None else path
    try:
        if path is None:
            text = resources.files(__package__).joinpath(ROSTER_RESOURCE).read_text(encoding="utf-8")
        else:
            with open(path, encoding="utf-8") as f:
                text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise RosterError(f"Could not read {source}: {e}") from e

    try:
        records = json.loads(text)
    except json.JSONDecodeError as e:
        raise RosterError(f"Could not parse {source}: {e}") from e

    roster = Roster.from_records(records)
    logger.debug(f"Loaded {len(roster)} entries from {source}")
    return roster
