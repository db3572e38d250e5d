"""Pagination cursors for the SkillShare home page listings."""

import json
from enum import Enum
from pathlib import Path

from loguru import logger


class SortKey(str, Enum):
    """Listing sort orders; the value is the API's ``sortAttribute``."""

    SIX_MONTHS_ENGAGEMENT = "SIX_MONTHS_ENGAGEMENT"
    ML_TRENDINESS = "ML_TRENDINESS"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    SortKey.SIX_MONTHS_ENGAGEMENT: "Popular Classes",
    SortKey.ML_TRENDINESS: "Trending Classes",
}


class CursorTable:
    """One cursor per sort key.

    A cursor is the id of the last class of the previous page; "" means the
    next request starts from the beginning. Callers are expected to use one
    table from a single thread.
    """

    def __init__(self):
        self._cursors: dict[SortKey, str] = {key: "" for key in SortKey}

    def cursor_for(self, key: SortKey | str) -> str:
        return self._cursors[SortKey(key)]

    def reset_if_first_page(self, key: SortKey | str, page: int) -> None:
        """Forget the cursor of ``key`` when page 1 is requested."""
        key = SortKey(key)
        if page == 1:
            self._cursors[key] = ""

    def advance(self, key: SortKey | str, last_item_id: str | None) -> None:
        """Point ``key`` past the page just fetched.

        Args:
            key: The sort key that was fetched.
            last_item_id: Id of the last class on the page, or None for an empty page.
        """
        key = SortKey(key)
        self._cursors[key] = last_item_id or ""
        logger.debug(f"Cursor for {key.value} is now {self._cursors[key]!r}")

    def to_dict(self) -> dict[str, str]:
        return {key.value: cursor for key, cursor in self._cursors.items()}

    @classmethod
    def from_dict(cls, data: dict[str, str]) -> "CursorTable":
        """Restore a table; keys that are not sort keys are ignored."""
        table = cls()
        for name, cursor in data.items():
            try:
                key = SortKey(name)
            except ValueError:
                logger.warning(f"Ignoring cursor for unknown sort key {name!r}")
                continue
            table._cursors[key] = str(cursor or "")
        return table

    @classmethod
    def load(cls, path: Path) -> "CursorTable":
        """Read a table saved by :meth:`save`; a missing file gives a fresh table."""
        if not path.exists():
            return cls()
        with open(path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Cursor state must be a JSON object: {path}")
        return cls.from_dict(data)

    def save(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.debug(f"Cursor state saved at {path}")
