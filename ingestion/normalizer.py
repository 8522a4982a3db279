"""
Hadith Normalizer
=================

Converts raw corpus records to canonical Hadith entries.

GUARANTEES:
- Primary and translation text are always strings
- Field-level anomalies degrade to empty/default values, never raise
- Only a record that is not a mapping at all is rejected
- No semantic processing (no grading, no text cleanup)
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from backend.contracts import (
    DEFAULT_GRADE, Hadith, MalformedRecordError, utc_now
)


@dataclass
class NormalizationConfig:
    """Configuration for record normalization."""
    # Applied when a record has no grade. Set to UNGRADED to avoid
    # implying a verification that never happened.
    default_grade: str = DEFAULT_GRADE


def _text(value: Any) -> Optional[str]:
    """Coerce a loosely typed field to a non-empty string or None."""
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return value or None


class HadithNormalizer:
    """
    Normalizes raw corpus records to Hadith entries.

    Raw field names follow the bundled corpus files:
    `id`, `idInBook`, `arabic`, `english: {narrator, text}`,
    `urdu`, `romanUrdu`, `grade`, `chapterId`.
    """

    def __init__(self, config: Optional[NormalizationConfig] = None):
        self._config = config or NormalizationConfig()

    @property
    def default_grade(self) -> str:
        return self._config.default_grade

    def normalize(
        self,
        raw: Mapping[str, Any],
        collection_id: str,
        chapter_name: Optional[str] = None,
        loaded_at: Optional[datetime] = None
    ) -> Hadith:
        """
        Normalize a single corpus record.

        Args:
            raw: Record as parsed from the corpus file
            collection_id: Owning collection
            chapter_name: Display name resolved from the record's chapterId
            loaded_at: Load timestamp (defaults to now)

        Raises:
            MalformedRecordError: if `raw` is not a mapping
        """
        if not isinstance(raw, Mapping):
            raise MalformedRecordError(
                f"Expected an object, got {type(raw).__name__}"
            )

        english = raw.get('english')
        if not isinstance(english, Mapping):
            english = {}

        # Falsy grades (0, False, "") count as missing.
        raw_grade = raw.get('grade')
        grade = _text(raw_grade) if raw_grade else None

        return Hadith(
            id=Hadith.composite_id(collection_id, raw.get('id')),
            collection_id=collection_id,
            hadith_number=self._hadith_number(raw),
            arabic_text=_text(raw.get('arabic')) or "",
            english_translation=_text(english.get('text')) or "",
            narrator=_text(english.get('narrator')),
            book=chapter_name or None,
            chapter=None,
            urdu_translation=_text(raw.get('urdu')),
            roman_urdu_translation=_text(raw.get('romanUrdu')),
            grade=grade or self._config.default_grade,
            graded=grade is not None,
            created_at=loaded_at or utc_now()
        )

    @staticmethod
    def _hadith_number(raw: Mapping[str, Any]) -> str:
        # Book-relative number first, then the raw id.
        for key in ('idInBook', 'id'):
            number = _text(raw.get(key))
            if number:
                return number
        return "0"
