"""
Corpus Storage Layer

RESPONSIBILITY: Hold all collections and hadiths for the process lifetime
ALLOWED INPUTS: HadithCollection and Hadith contracts from the ingestion layer
OUTPUTS: The same contracts, in insertion order

WHAT THIS LAYER MUST NOT DO:
============================
- Transform or interpret data
- Filter, search or rank (that is the query layer's job)
- Accept writes after loading has finished

LIFECYCLE:
==========
1. Constructed empty at process start
2. Populated once by the ingestion service
3. Frozen; read-only for the rest of the process

The per-user side stores (bookmarks, preferences, visitor ledger) live in
`user_state` and are independent of the corpus store.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Iterator

from ..contracts import HadithCollection, Hadith, StoreFrozenError
from .user_state import BookmarkStore, PreferencesStore, VisitorLedger


class HadithStore:
    """
    In-memory keyed store of collections and hadiths.

    Iteration order is insertion order: collections in registry order,
    hadiths in the order their files were loaded and, within a file,
    source order. A hadith whose composite id collides with an earlier
    one replaces it in place.
    """

    def __init__(self):
        self._collections: Dict[str, HadithCollection] = {}
        self._hadiths: Dict[str, Hadith] = {}
        self._frozen = False

    # =========================================================================
    # WRITES (load phase only)
    # =========================================================================

    def add_collection(self, collection: HadithCollection) -> None:
        self._check_writable()
        self._collections[collection.id] = collection

    def put_hadith(self, hadith: Hadith) -> None:
        """Insert a hadith, silently replacing any entry with the same id."""
        self._check_writable()
        self._hadiths[hadith.id] = hadith

    def freeze(self) -> None:
        """End the load phase. Further writes raise StoreFrozenError."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_writable(self) -> None:
        if self._frozen:
            raise StoreFrozenError("HadithStore is read-only after loading")

    # =========================================================================
    # READS
    # =========================================================================

    def collections(self) -> List[HadithCollection]:
        return list(self._collections.values())

    def get_collection(self, collection_id: str) -> Optional[HadithCollection]:
        return self._collections.get(collection_id)

    def hadiths(self) -> Iterator[Hadith]:
        yield from self._hadiths.values()

    def get_hadith(self, hadith_id: str) -> Optional[Hadith]:
        return self._hadiths.get(hadith_id)

    @property
    def hadith_count(self) -> int:
        return len(self._hadiths)

    @property
    def collection_count(self) -> int:
        return len(self._collections)

    def get_stats(self) -> dict:
        """Get per-collection entry counts."""
        per_collection = {cid: 0 for cid in self._collections}
        for hadith in self._hadiths.values():
            per_collection[hadith.collection_id] = per_collection.get(hadith.collection_id, 0) + 1
        return {
            'collections': self.collection_count,
            'hadiths': self.hadith_count,
            'by_collection': per_collection,
            'frozen': self._frozen
        }


__all__ = [
    'HadithStore',
    'BookmarkStore',
    'PreferencesStore',
    'VisitorLedger',
]
