"""
Collection Registry

Holds the fixed list of hadith collections and the order in which their
data files are loaded. The built-in list can be replaced by a JSON file.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Iterator, Tuple
import json
from pathlib import Path

from backend.contracts import HadithCollection


DEFAULT_COLLECTIONS: Tuple[HadithCollection, ...] = (
    HadithCollection(
        id="bukhari",
        name="Sahih al-Bukhari",
        arabic_name="صحيح البخاري",
        compiler="Imam al-Bukhari",
        description=(
            "The most authentic collection of Hadith compiled by Imam "
            "al-Bukhari, containing over 7,000 verified narrations."
        ),
        total_hadiths=7563
    ),
    HadithCollection(
        id="muslim",
        name="Sahih Muslim",
        arabic_name="صحيح مسلم",
        compiler="Imam Muslim",
        description=(
            "The second most authentic collection, compiled by Imam Muslim "
            "with strict criteria for authenticity."
        ),
        total_hadiths=7190
    ),
    HadithCollection(
        id="abudawud",
        name="Sunan Abu Dawood",
        arabic_name="سنن أبي داود",
        compiler="Imam Abu Dawood",
        description=(
            "A comprehensive collection focusing on legal matters and "
            "practical guidance for daily life."
        ),
        total_hadiths=5274
    ),
    HadithCollection(
        id="tirmidhi",
        name="Jami` at-Tirmidhi",
        arabic_name="جامع الترمذي",
        compiler="Imam at-Tirmidhi",
        description=(
            "A collection known for its detailed commentary and grading of "
            "Hadith authenticity."
        ),
        total_hadiths=3956
    ),
)

DEFAULT_LOAD_ORDER: Tuple[str, ...] = ("bukhari", "muslim", "tirmidhi", "abudawud")


@dataclass
class CollectionRegistry:
    """
    Registry of all declared collections.

    Collections keep their declaration order. `load_order` controls the
    order in which data files are read, which in turn fixes the store's
    iteration order.
    """

    _collections: Dict[str, HadithCollection]
    _load_order: Tuple[str, ...]

    @classmethod
    def default(cls) -> 'CollectionRegistry':
        return cls.from_collections(DEFAULT_COLLECTIONS, DEFAULT_LOAD_ORDER)

    @classmethod
    def from_collections(
        cls,
        collections: List[HadithCollection] | Tuple[HadithCollection, ...],
        load_order: Optional[Tuple[str, ...]] = None
    ) -> 'CollectionRegistry':
        by_id = {}
        for collection in collections:
            if collection.id in by_id:
                raise ValueError(f"Duplicate collection id: {collection.id}")
            by_id[collection.id] = collection

        order = tuple(load_order) if load_order else tuple(by_id)
        unknown = [cid for cid in order if cid not in by_id]
        if unknown:
            raise ValueError(f"Load order names unknown collections: {unknown}")

        return cls(_collections=by_id, _load_order=order)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'CollectionRegistry':
        """
        Load registry from a JSON file.

        Format: {"collections": [{id, name, arabicName, compiler,
        description, totalHadiths}, ...], "loadOrder": [...]}.
        Without a path the built-in list is used.
        """
        if config_path is None:
            return cls.default()

        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)

        collections = [
            HadithCollection(
                id=data['id'],
                name=data['name'],
                compiler=data['compiler'],
                arabic_name=data.get('arabicName'),
                description=data.get('description'),
                total_hadiths=int(data.get('totalHadiths', 0))
            )
            for data in config.get('collections', [])
        ]
        load_order = config.get('loadOrder')

        return cls.from_collections(
            collections,
            tuple(load_order) if load_order else None
        )

    def get(self, collection_id: str) -> Optional[HadithCollection]:
        """Get collection by ID."""
        return self._collections.get(collection_id)

    def all_collections(self) -> Iterator[HadithCollection]:
        """Iterate collections in declaration order."""
        yield from self._collections.values()

    @property
    def load_order(self) -> Tuple[str, ...]:
        return self._load_order

    @property
    def total_count(self) -> int:
        """Total number of collections."""
        return len(self._collections)
