"""
Query Interfaces

RESPONSIBILITY: Read-only filter, search and pagination over the store
ALLOWED INPUTS: HadithFilter with explicit, optional parameters
OUTPUTS: Lists of contracts (possibly empty) or single contracts / None

WHAT THIS LAYER MUST NOT DO:
============================
- Mutate the store
- Rank or re-sort results (store order is the result order)
- Raise for "no matches" or "not found"
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..contracts import HadithCollection, Hadith, SUPPORTED_LANGUAGES
from ..storage import HadithStore


@dataclass(frozen=True)
class HadithFilter:
    """Optional criteria for listing hadiths. All fields may be omitted."""
    collection_id: Optional[str] = None
    search: Optional[str] = None
    limit: Optional[int] = None
    offset: Optional[int] = None


def matches_search(hadith: Hadith, term: str) -> bool:
    """
    True if any searchable field contains `term`.

    Arabic text and the Urdu translation are matched case-sensitively,
    every other field case-insensitively.
    """
    folded = term.lower()

    def folded_in(value: Optional[str]) -> bool:
        return value is not None and folded in value.lower()

    def exact_in(value: Optional[str]) -> bool:
        return value is not None and term in value

    return (
        folded_in(hadith.english_translation)
        or exact_in(hadith.arabic_text)
        or exact_in(hadith.urdu_translation)
        or folded_in(hadith.roman_urdu_translation)
        or folded_in(hadith.narrator)
        or folded_in(hadith.book)
        or folded_in(hadith.chapter)
        or folded_in(hadith.hadith_number)
    )


def paginate(items: List, limit: Optional[int], offset: Optional[int]) -> List:
    """
    Slice `items` by offset then limit.

    A missing or zero limit means "the rest". Negative values clamp to 0.
    """
    start = max(0, offset or 0)
    if not limit or limit < 0:
        return items[start:]
    return items[start:start + limit]


class QueryEngine:
    """
    Stateless query operations over a HadithStore.

    The store is injected and never modified.
    """

    def __init__(self, store: HadithStore):
        self._store = store

    def list_collections(self) -> List[HadithCollection]:
        return self._store.collections()

    def get_collection(self, collection_id: str) -> Optional[HadithCollection]:
        return self._store.get_collection(collection_id)

    def get_hadith(self, hadith_id: str) -> Optional[Hadith]:
        return self._store.get_hadith(hadith_id)

    def list_hadiths(self, query: Optional[HadithFilter] = None) -> List[Hadith]:
        """
        List hadiths in store order.

        1. Keep only `collection_id` (exact match), if given
        2. Keep only entries matching `search`, if given
        3. Apply `offset`, then `limit`
        """
        query = query or HadithFilter()
        predicates: List[Callable[[Hadith], bool]] = []

        if query.collection_id:
            collection_id = query.collection_id
            predicates.append(lambda h: h.collection_id == collection_id)

        if query.search:
            term = query.search
            predicates.append(lambda h: matches_search(h, term))

        results = [
            h for h in self._store.hadiths()
            if all(p(h) for p in predicates)
        ]
        return paginate(results, query.limit, query.offset)

    def search_hadiths(self, term: str, collection_id: Optional[str] = None) -> List[Hadith]:
        """Same as list_hadiths with a search term."""
        return self.list_hadiths(HadithFilter(search=term, collection_id=collection_id))

    def daily_hadith(self) -> Optional[Hadith]:
        """The first hadith in store order."""
        first = self.list_hadiths(HadithFilter(limit=1))
        return first[0] if first else None

    def stats(self, visitor_count: int) -> dict:
        return {
            'total_hadiths': self._store.hadith_count,
            'collections': self._store.collection_count,
            'languages': SUPPORTED_LANGUAGES,
            'users': visitor_count
        }


__all__ = [
    'HadithFilter',
    'QueryEngine',
    'matches_search',
    'paginate',
]
