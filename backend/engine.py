"""
Engine Orchestration Module

Builds the backend once at process start and hands the store, by
reference, to the query layer and the side stores to the API layer.

DESIGN PRINCIPLES:
==================
1. No module-level store; the backend object owns it
2. The corpus store is frozen before the first request
3. Side stores are swappable without touching corpus queries
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import logging
import os

from ingestion import (
    CollectionLoader, CollectionRegistry, HadithNormalizer, IngestionService,
    LoaderConfig, LoadReport, NormalizationConfig
)

from .storage import HadithStore, BookmarkStore, PreferencesStore, VisitorLedger
from .query import QueryEngine


logger = logging.getLogger(__name__)

DEFAULT_VISITORS_FILE = Path('data') / 'visitors.json'


@dataclass
class BackendConfig:
    """Unified configuration for the entire backend."""
    normalization: NormalizationConfig = None
    loader: LoaderConfig = None
    registry_path: Optional[Path] = None
    visitors_file: Path = field(default_factory=lambda: DEFAULT_VISITORS_FILE)

    def __post_init__(self):
        self.normalization = self.normalization or NormalizationConfig()
        self.loader = self.loader or LoaderConfig()

    @classmethod
    def from_env(cls) -> 'BackendConfig':
        """
        Read configuration from the environment.

        HADITH_DATA_DIRS        os.pathsep-separated corpus directories
        HADITH_DEFAULT_GRADE    grade for records without one
        HADITH_COLLECTIONS_FILE JSON collection list replacing the built-in one
        HADITH_VISITORS_FILE    visitor ledger path
        """
        config = cls()

        data_dirs = os.environ.get("HADITH_DATA_DIRS")
        if data_dirs:
            config.loader = LoaderConfig(
                data_dirs=tuple(Path(d) for d in data_dirs.split(os.pathsep) if d)
            )

        default_grade = os.environ.get("HADITH_DEFAULT_GRADE")
        if default_grade:
            config.normalization = NormalizationConfig(default_grade=default_grade)

        registry_path = os.environ.get("HADITH_COLLECTIONS_FILE")
        if registry_path:
            config.registry_path = Path(registry_path)

        visitors_file = os.environ.get("HADITH_VISITORS_FILE")
        if visitors_file:
            config.visitors_file = Path(visitors_file)

        return config


class HadithReaderBackend:
    """
    Unified backend for the hadith reader.

    LAYER FLOW:
    ===========
    1. Ingestion: corpus files -> Hadith contracts
    2. Storage: contracts -> frozen HadithStore
    3. Query: read-only access to the store
    """

    def __init__(self, config: Optional[BackendConfig] = None):
        self._config = config or BackendConfig()

        self._ingestion = IngestionService(
            registry=CollectionRegistry.load(self._config.registry_path),
            loader=CollectionLoader(
                normalizer=HadithNormalizer(self._config.normalization),
                config=self._config.loader
            )
        )
        self._store = self._ingestion.build_store()
        self._query = QueryEngine(self._store)

        self._bookmarks = BookmarkStore()
        self._preferences = PreferencesStore()
        self._visitors = VisitorLedger(self._config.visitors_file)

        logger.info(
            "Backend ready: %d hadiths in %d collections",
            self._store.hadith_count, self._store.collection_count
        )

    @property
    def store(self) -> HadithStore:
        return self._store

    @property
    def query(self) -> QueryEngine:
        return self._query

    @property
    def bookmarks(self) -> BookmarkStore:
        return self._bookmarks

    @property
    def preferences(self) -> PreferencesStore:
        return self._preferences

    @property
    def visitors(self) -> VisitorLedger:
        return self._visitors

    @property
    def load_reports(self) -> List[LoadReport]:
        return self._ingestion.reports

    def get_stats(self) -> dict:
        return {
            'store': self._store.get_stats(),
            'ingestion': self._ingestion.get_stats()
        }
