"""Entrant persistence: a small JSON key-value file and shareable links.

Names travel as comma-joined text in both places: under the
``rode_roleta_v1`` key of the state file and as the ``lista`` query
parameter of a share URL. Storage problems never stop the wheel; they are
logged and the list falls back to empty (on read) or stays in memory only
(on write).
"""

from pathlib import Path
from typing import Iterable, List, Optional, Union
from urllib.parse import parse_qs, quote, urlsplit, urlunsplit
import json
import logging

from roda.entrants import Entrant, split_names

logger = logging.getLogger(__name__)

STORAGE_KEY = "rode_roleta_v1"
URL_PARAM = "lista"
SEPARATOR = ","

# Left unescaped, as browsers do for URI components
SHARE_SAFE_CHARS = "!*'()"


def _names_of(entrants: Iterable[Union[Entrant, str]]) -> List[str]:
    return [getattr(e, "name", e) for e in entrants]


def join_names(entrants: Iterable[Union[Entrant, str]]) -> str:
    return SEPARATOR.join(_names_of(entrants))


def parse_names(text: str) -> List[Entrant]:
    """Comma-joined names to fresh entrants (trimmed, blanks dropped)."""
    return [Entrant.create(name) for name in split_names(text, SEPARATOR)]


def names_from_url(url: str) -> Optional[str]:
    """Raw ``lista`` value from a URL, or None when absent or empty."""
    query = parse_qs(urlsplit(url).query)
    values = query.get(URL_PARAM)
    if not values or not values[0]:
        return None
    return values[0]


class EntrantStore:
    """Reads and writes the entrant list.

    Args:
        path: JSON state file; created (with parent dirs) on first save
        base_url: Page URL used to build share links
    """

    def __init__(self, path: Union[str, Path], base_url: str = "http://localhost:5173/") -> None:
        self.path = Path(path).expanduser()
        self.base_url = base_url

    def save(self, entrants: Iterable[Union[Entrant, str]]) -> bool:
        """Persist names. Returns False (after logging) if the write failed."""
        names = join_names(entrants)
        try:
            state = self._read_state()
            state[STORAGE_KEY] = names
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(state, ensure_ascii=False), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to save entrants to {self.path}: {e}")
            return False
        logger.info(f"Saved {len(split_names(names, SEPARATOR))} entrants to {self.path}")
        return True

    def load(self, url: Optional[str] = None) -> List[Entrant]:
        """Load entrants, preferring the URL's ``lista`` parameter over the file."""
        if url:
            from_url = names_from_url(url)
            if from_url is not None:
                entrants = parse_names(from_url)
                logger.info(f"Loaded {len(entrants)} entrants from URL")
                return entrants

        stored = self._read_state().get(STORAGE_KEY)
        if not stored or not isinstance(stored, str):
            return []
        entrants = parse_names(stored)
        logger.info(f"Loaded {len(entrants)} entrants from {self.path}")
        return entrants

    def share_url(self, entrants: Iterable[Union[Entrant, str]]) -> str:
        """Link that reopens the wheel with the same names.

        Any query or fragment on the base URL is replaced.
        """
        scheme, netloc, path, _, _ = urlsplit(self.base_url)
        query = f"{URL_PARAM}={quote(join_names(entrants), safe=SHARE_SAFE_CHARS)}"
        return urlunsplit((scheme, netloc, path, query, ""))

    def parse_names(self, text: str) -> List[Entrant]:
        return parse_names(text)

    def _read_state(self) -> dict:
        """Whole state file as a dict; {} when missing or unreadable."""
        if not self.path.exists():
            return {}
        try:
            state = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        if not isinstance(state, dict):
            logger.warning(f"Ignoring malformed state file {self.path}")
            return {}
        return state
