"""
Corpus Ingestion

Loads bundled hadith collection files into the in-memory store.
"""

from .contracts import LoadReport, LoadStatus, SkippedRecord, ChapterRef
from .normalizer import HadithNormalizer, NormalizationConfig
from .registry import CollectionRegistry, DEFAULT_COLLECTIONS
from .loader import CollectionLoader, LoaderConfig, directory_resolver
from .service import IngestionService

__all__ = [
    'LoadReport',
    'LoadStatus',
    'SkippedRecord',
    'ChapterRef',
    'HadithNormalizer',
    'NormalizationConfig',
    'CollectionRegistry',
    'DEFAULT_COLLECTIONS',
    'CollectionLoader',
    'LoaderConfig',
    'directory_resolver',
    'IngestionService',
]
