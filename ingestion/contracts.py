"""
Corpus Ingestion Contracts

Data structures for the corpus loading pipeline.

BOUNDARY: Ingestion Layer
All corpus data enters the store through these contracts.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional
from datetime import datetime
from pathlib import Path
from enum import Enum


# A resolver maps a collection id to the path where its data file may live.
PathResolver = Callable[[str], Path]


# =============================================================================
# ENUMS
# =============================================================================

class LoadStatus(Enum):
    """Outcome of loading one collection file."""
    LOADED = "loaded"
    FILE_NOT_FOUND = "file_not_found"
    PARSE_ERROR = "parse_error"


# =============================================================================
# CORPUS FILE CONTRACTS
# =============================================================================

@dataclass(frozen=True)
class ChapterRef:
    """Chapter id to display name. Used only while loading."""
    chapter_id: object
    name: Optional[str]

    @classmethod
    def from_raw(cls, raw: dict) -> 'ChapterRef':
        name = raw.get('english')
        if name is not None and not isinstance(name, str):
            name = str(name)
        return cls(chapter_id=raw.get('id'), name=name or None)


def build_chapter_map(chapters: List[dict]) -> Dict[object, Optional[str]]:
    """Build chapter id -> display name, skipping non-mapping entries."""
    chapter_map = {}
    for raw in chapters:
        if not isinstance(raw, dict):
            continue
        ref = ChapterRef.from_raw(raw)
        try:
            chapter_map[ref.chapter_id] = ref.name
        except TypeError:
            # unhashable id, cannot be referenced by any record
            continue
    return chapter_map


# =============================================================================
# REPORTS
# =============================================================================

@dataclass(frozen=True)
class SkippedRecord:
    """Record of a corpus entry that failed normalization."""
    collection_id: str
    raw_id: Optional[str]
    error: str
    raw_content_sample: str  # First 200 chars for debugging

    def to_dict(self) -> dict:
        return {
            'collection_id': self.collection_id,
            'raw_id': self.raw_id,
            'error': self.error,
            'raw_content_sample': self.raw_content_sample
        }


@dataclass
class LoadReport:
    """
    Complete report of loading one collection.

    TRACEABLE:
    Every raw record results in exactly one of:
    - A hadith counted in `loaded_count`
    - An entry in `skipped`
    """
    collection_id: str
    status: LoadStatus
    file_path: Optional[Path] = None
    loaded_count: int = 0
    skipped: List[SkippedRecord] = field(default_factory=list)
    error: Optional[str] = None
    started_at: Optional[datetime] = None

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED

    def to_dict(self) -> dict:
        return {
            'collection_id': self.collection_id,
            'status': self.status.value,
            'file_path': str(self.file_path) if self.file_path else None,
            'loaded_count': self.loaded_count,
            'skipped_count': self.skipped_count,
            'skipped': [s.to_dict() for s in self.skipped],
            'error': self.error,
            'started_at': self.started_at.isoformat() if self.started_at else None
        }
