"""
Per-User Side State

Bookmarks, reading preferences and the visitor ledger. These are keyed
records mutated from request handlers. They assume a single process;
a multi-worker deployment needs an external store instead.
"""

from __future__ import annotations
from dataclasses import fields, replace
from pathlib import Path
from typing import Dict, List, Optional
import json
import logging

from ..contracts import Bookmark, UserPreferences, new_record_id


logger = logging.getLogger(__name__)

_PREFERENCE_FIELDS = frozenset(
    f.name for f in fields(UserPreferences) if f.name not in ('id', 'user_id')
)


class BookmarkStore:
    """In-memory bookmarks keyed by bookmark id."""

    def __init__(self):
        self._bookmarks: Dict[str, Bookmark] = {}

    def list_for_user(self, user_id: str) -> List[Bookmark]:
        return [b for b in self._bookmarks.values() if b.user_id == user_id]

    def create(self, user_id: str, hadith_id: str) -> Bookmark:
        bookmark = Bookmark(id=new_record_id(), user_id=user_id, hadith_id=hadith_id)
        self._bookmarks[bookmark.id] = bookmark
        return bookmark

    def delete(self, user_id: str, hadith_id: str) -> bool:
        """Remove the first bookmark matching user and hadith."""
        for bookmark_id, bookmark in self._bookmarks.items():
            if bookmark.user_id == user_id and bookmark.hadith_id == hadith_id:
                del self._bookmarks[bookmark_id]
                return True
        return False


class PreferencesStore:
    """In-memory preferences, one record per user."""

    def __init__(self):
        self._by_user: Dict[str, UserPreferences] = {}

    def get(self, user_id: str) -> Optional[UserPreferences]:
        return self._by_user.get(user_id)

    def update(self, user_id: str, /, **changes) -> UserPreferences:
        """
        Apply a partial update, creating the record with defaults first
        if the user has none.

        Raises:
            ValueError: if `changes` names an unknown preference
        """
        unknown = set(changes) - _PREFERENCE_FIELDS
        if unknown:
            raise ValueError(f"Unknown preference fields: {sorted(unknown)}")

        current = self._by_user.get(user_id)
        if current is None:
            current = UserPreferences(id=new_record_id(), user_id=user_id)

        updated = replace(current, **changes)
        self._by_user[user_id] = updated
        return updated


class VisitorLedger:
    """
    Flat-file count of distinct visitors.

    File format: {"count": n, "visitors": [visitor_id, ...]}.
    Read and write failures are logged, never raised.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict:
        try:
            if self._path.exists():
                with open(self._path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict) and isinstance(data.get('visitors'), list):
                    data.setdefault('count', len(data['visitors']))
                    return data
                logger.error("Unexpected visitor ledger format in %s", self._path)
        except (OSError, ValueError) as exc:
            logger.error("Error reading visitor ledger %s: %s", self._path, exc)
        return {'count': 1, 'visitors': []}

    def _write(self, data: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as exc:
            logger.error("Error writing visitor ledger %s: %s", self._path, exc)

    def track(self, visitor_id: str) -> int:
        """Record a visitor if unseen and return the current count."""
        data = self.read()
        if visitor_id not in data['visitors']:
            data['visitors'].append(visitor_id)
            data['count'] = len(data['visitors'])
            self._write(data)
        return data['count']

    @property
    def count(self) -> int:
        return self.read()['count']
