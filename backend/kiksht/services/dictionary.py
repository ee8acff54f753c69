from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import case, delete, or_, select
from sqlalchemy.orm import Session

from kiksht.models import DictionaryEntry
from kiksht.parsing import Entry

LOGGER = logging.getLogger(__name__)

DEFAULT_SEARCH_LIMIT = 50
DEFAULT_SUGGEST_LIMIT = 10


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DictionaryService:
    def __init__(self, session: Session) -> None:
        self.session = session

    def store_entries(
        self,
        entries: Iterable[Entry],
        *,
        truncate: bool = True,
        commit_interval: int = 200,
    ) -> int:
        """Insert or update ``entries`` keyed by root; return the number of roots stored.

        A root repeated within ``entries`` keeps its last entry.
        """

        if truncate:
            self.session.execute(delete(DictionaryEntry))

        rows: Dict[str, DictionaryEntry] = {}
        stored = 0
        for stored, entry in enumerate(entries, start=1):
            row = rows.get(entry.root)
            if row is None and not truncate:
                row = self.session.execute(
                    select(DictionaryEntry).where(DictionaryEntry.root == entry.root)
                ).scalar_one_or_none()
            if row is None:
                row = DictionaryEntry(root=entry.root)
            row.part_of_speech = entry.part_of_speech.value
            row.definition = entry.definition
            row.payload = entry.to_dict()
            rows[entry.root] = row
            self.session.add(row)
            if commit_interval and stored % commit_interval == 0:
                self.session.flush()

        self.session.commit()
        LOGGER.info("Stored %d dictionary entries", len(rows))
        return len(rows)

    def get_entry(self, root: str) -> Optional[Entry]:
        payload = self.session.execute(
            select(DictionaryEntry.payload).where(DictionaryEntry.root == root)
        ).scalar_one_or_none()
        if payload is None:
            return None
        return Entry.from_dict(payload)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[Entry]:
        """Entries whose root or definition contains ``query``, exact root first."""

        term = query.strip()
        if not term:
            return []
        pattern = f"%{_escape_like(term)}%"
        rows = self.session.execute(
            select(DictionaryEntry.payload)
            .where(
                or_(
                    DictionaryEntry.root.ilike(pattern, escape="\\"),
                    DictionaryEntry.definition.ilike(pattern, escape="\\"),
                )
            )
            .order_by(case((DictionaryEntry.root == term, 0), else_=1), DictionaryEntry.root)
            .limit(limit)
        ).scalars()
        return [Entry.from_dict(payload) for payload in rows]

    def suggest(self, term: str, limit: int = DEFAULT_SUGGEST_LIMIT) -> List[str]:
        prefix = term.strip()
        if not prefix:
            return []
        return list(
            self.session.execute(
                select(DictionaryEntry.root)
                .where(DictionaryEntry.root.like(f"{_escape_like(prefix)}%", escape="\\"))
                .order_by(DictionaryEntry.root)
                .limit(limit)
            ).scalars()
        )
