"""Entrant list management.

The list is owned here; the spin engine only ever sees an immutable
ordered snapshot (a tuple) for the duration of one spin.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple
import logging
import uuid

logger = logging.getLogger(__name__)

ID_LENGTH = 9


def new_entrant_id() -> str:
    """Short opaque id, unique enough for an in-memory list."""
    return uuid.uuid4().hex[:ID_LENGTH]


def split_names(raw: str, separator: str = "\n") -> List[str]:
    """Split raw text into trimmed, non-empty names."""
    if not raw:
        return []
    return [name.strip() for name in raw.split(separator) if name.strip()]


@dataclass(frozen=True)
class Entrant:
    """A named entrant. Identity is ``id``; names may repeat."""

    id: str
    name: str

    @classmethod
    def create(cls, name: str) -> "Entrant":
        name = name.strip()
        if not name:
            raise ValueError("Entrant name must not be empty")
        return cls(id=new_entrant_id(), name=name)


class EntrantList:
    """Ordered, mutable list of entrants."""

    def __init__(self, entrants: Optional[Iterable[Entrant]] = None) -> None:
        self._entrants: List[Entrant] = list(entrants or [])

    def __len__(self) -> int:
        return len(self._entrants)

    def __iter__(self):
        return iter(self._entrants)

    def __bool__(self) -> bool:
        return bool(self._entrants)

    def add(self, name: str) -> Optional[Entrant]:
        """Add one entrant. Blank names are ignored."""
        if not name or not name.strip():
            return None
        entrant = Entrant(id=self._unique_id(), name=name.strip())
        self._entrants.append(entrant)
        return entrant

    def add_from_text(self, raw: str) -> List[Entrant]:
        """Add one entrant per non-blank line of ``raw``."""
        added = [self.add(name) for name in split_names(raw)]
        added = [e for e in added if e is not None]
        if added:
            logger.info(f"Added {len(added)} entrants ({len(self)} total)")
        return added

    def extend_names(self, names: Iterable[str]) -> List[Entrant]:
        added = [self.add(name) for name in names]
        return [e for e in added if e is not None]

    def remove(self, entrant_id: str) -> bool:
        """Remove an entrant by id. Returns False if no such id."""
        before = len(self._entrants)
        self._entrants = [e for e in self._entrants if e.id != entrant_id]
        removed = len(self._entrants) != before
        if removed:
            logger.info(f"Removed entrant {entrant_id} ({len(self)} left)")
        return removed

    def clear(self) -> None:
        self._entrants.clear()

    def snapshot(self) -> Tuple[Entrant, ...]:
        """Immutable ordered copy for a spin or a redraw."""
        return tuple(self._entrants)

    def names(self) -> List[str]:
        return [e.name for e in self._entrants]

    def get(self, entrant_id: str) -> Optional[Entrant]:
        for entrant in self._entrants:
            if entrant.id == entrant_id:
                return entrant
        return None

    def _unique_id(self) -> str:
        taken = {e.id for e in self._entrants}
        entrant_id = new_entrant_id()
        while entrant_id in taken:
            entrant_id = new_entrant_id()
        return entrant_id
