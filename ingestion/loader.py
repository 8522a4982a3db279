"""
Collection Loader
=================

Reads one collection's corpus file and populates the store.

FAILURE MODEL:
- Missing file: logged, zero entries, no exception
- Malformed file: logged, zero entries, no exception
- Malformed record: logged and skipped, the rest of the file still loads
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple
import json
import logging

from backend.contracts import utc_now
from backend.storage import HadithStore

from .contracts import (
    LoadReport, LoadStatus, PathResolver, SkippedRecord, build_chapter_map
)
from .normalizer import HadithNormalizer


logger = logging.getLogger(__name__)

DEFAULT_DATA_DIRS: Tuple[Path, ...] = (
    Path('data') / 'hadith-collections',
    Path('.'),
)


def directory_resolver(directory: Path) -> PathResolver:
    """Resolve `<directory>/<collection_id>.json`."""
    directory = Path(directory)

    def resolve(collection_id: str) -> Path:
        return directory / f"{collection_id}.json"

    return resolve


@dataclass
class LoaderConfig:
    """
    Where to look for corpus files.

    `resolvers` are tried in order; when empty, one directory resolver is
    built per entry of `data_dirs`.
    """
    data_dirs: Tuple[Path, ...] = DEFAULT_DATA_DIRS
    resolvers: List[PathResolver] = field(default_factory=list)

    def build_resolvers(self) -> List[PathResolver]:
        if self.resolvers:
            return list(self.resolvers)
        return [directory_resolver(d) for d in self.data_dirs]


class CollectionLoader:
    """
    Loads corpus files into a HadithStore.

    Expected file shape:
        {"chapters": [{"id", "english"}], "hadiths": [{...raw record...}]}
    """

    def __init__(
        self,
        normalizer: Optional[HadithNormalizer] = None,
        config: Optional[LoaderConfig] = None
    ):
        self._normalizer = normalizer or HadithNormalizer()
        self._resolvers = (config or LoaderConfig()).build_resolvers()

    def locate(self, collection_id: str) -> Optional[Path]:
        """Return the first candidate path that exists, if any."""
        for resolve in self._resolvers:
            path = resolve(collection_id)
            if path.is_file():
                return path
        return None

    def load(self, collection_id: str, store: HadithStore) -> LoadReport:
        """
        Load one collection's file into `store`.

        Never raises for missing or malformed data; the outcome is in the
        returned report.
        """
        started_at = utc_now()
        path = self.locate(collection_id)

        if path is None:
            logger.warning("%s.json not found in any expected location", collection_id)
            return LoadReport(
                collection_id=collection_id,
                status=LoadStatus.FILE_NOT_FOUND,
                started_at=started_at
            )

        logger.info("Loading %s from %s", collection_id, path)

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"top-level value is {type(data).__name__}, expected object")
        except (OSError, ValueError) as exc:
            logger.error("Error parsing %s - skipping this file: %s", path, exc)
            return LoadReport(
                collection_id=collection_id,
                status=LoadStatus.PARSE_ERROR,
                file_path=path,
                error=str(exc),
                started_at=started_at
            )

        report = LoadReport(
            collection_id=collection_id,
            status=LoadStatus.LOADED,
            file_path=path,
            started_at=started_at
        )
        self._load_records(
            collection_id,
            _as_list(data.get('chapters')),
            _as_list(data.get('hadiths')),
            store,
            report
        )

        logger.info(
            "Loaded %d hadiths from %s (%d skipped)",
            report.loaded_count, path.name, report.skipped_count
        )
        return report

    def _load_records(
        self,
        collection_id: str,
        chapters: Sequence,
        records: Sequence,
        store: HadithStore,
        report: LoadReport
    ) -> None:
        chapter_map = build_chapter_map(chapters)
        loaded_at = report.started_at

        for raw in records:
            try:
                chapter_name = _chapter_name(chapter_map, raw)
                hadith = self._normalizer.normalize(
                    raw,
                    collection_id,
                    chapter_name=chapter_name,
                    loaded_at=loaded_at
                )
            except Exception as exc:
                # One bad record must not discard the rest of the file
                raw_id = raw.get('id') if isinstance(raw, dict) else None
                logger.error(
                    "Error loading hadith %s from %s: %s", raw_id, collection_id, exc
                )
                report.skipped.append(SkippedRecord(
                    collection_id=collection_id,
                    raw_id=None if raw_id is None else str(raw_id),
                    error=str(exc),
                    raw_content_sample=str(raw)[:200]
                ))
            else:
                store.put_hadith(hadith)
                report.loaded_count += 1


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _chapter_name(chapter_map: dict, raw) -> Optional[str]:
    if not isinstance(raw, dict):
        return None
    try:
        return chapter_map.get(raw.get('chapterId'))
    except TypeError:
        # unhashable chapterId
        return None
