"""
Ingestion Service

Orchestrates the one-time corpus load at process start.
"""

from __future__ import annotations
from typing import List, Optional
import logging

from backend.storage import HadithStore

from .contracts import LoadReport
from .registry import CollectionRegistry
from .loader import CollectionLoader


logger = logging.getLogger(__name__)


class IngestionService:
    """
    Coordinates registry and loader.

    DESIGN:
    =======
    1. Register every declared collection, loaded or not
    2. Load each collection file in the registry's load order
    3. Freeze the store
    """

    def __init__(
        self,
        registry: Optional[CollectionRegistry] = None,
        loader: Optional[CollectionLoader] = None
    ):
        self._registry = registry or CollectionRegistry.default()
        self._loader = loader or CollectionLoader()
        self._reports: List[LoadReport] = []

    def build_store(self) -> HadithStore:
        """Create, populate and freeze a new store."""
        store = HadithStore()
        self.populate(store)
        store.freeze()
        return store

    def populate(self, store: HadithStore) -> List[LoadReport]:
        """Load all collections into an existing, writable store."""
        logger.info("Loading hadith data from JSON files...")

        for collection in self._registry.all_collections():
            store.add_collection(collection)

        reports = [
            self._loader.load(collection_id, store)
            for collection_id in self._registry.load_order
        ]
        self._reports.extend(reports)

        logger.info(
            "Loaded %d hadiths from %d collections",
            store.hadith_count, store.collection_count
        )
        return reports

    @property
    def reports(self) -> List[LoadReport]:
        return list(self._reports)

    @property
    def registry(self) -> CollectionRegistry:
        return self._registry

    def get_stats(self) -> dict:
        """Get ingestion statistics."""
        return {
            'collections': self._registry.total_count,
            'reports': [r.to_dict() for r in self._reports]
        }
