"""
Base Contracts and Shared Types

These are the foundational types used across all layers.
Corpus types are IMMUTABLE and represent pure data.

BOUNDARY ENFORCEMENT:
=====================
- This module is READ-ONLY from all layers
- Corpus types (collections, hadiths) are frozen dataclasses
- Side records (bookmarks, preferences) are replaced, never patched in place
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid


# =============================================================================
# CONSTANTS
# =============================================================================

# Placeholder identity until a real user system exists. Every bookmark and
# preference record in this deployment belongs to this user.
DEFAULT_USER_ID = "default-user"

# Grade applied when a corpus record carries none.
DEFAULT_GRADE = "Sahih"

# Sentinel for deployments that must not overstate authenticity.
UNGRADED = "Ungraded"

# Arabic, English, Urdu, Roman Urdu
SUPPORTED_LANGUAGES = 4


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_record_id() -> str:
    return uuid.uuid4().hex


# =============================================================================
# CORPUS TYPES (Immutable)
# =============================================================================

@dataclass(frozen=True)
class HadithCollection:
    """
    One named source corpus.

    `total_hadiths` is the declared size of the corpus and is independent
    of how many entries were actually loaded.
    """
    id: str
    name: str
    compiler: str
    arabic_name: Optional[str] = None
    description: Optional[str] = None
    total_hadiths: int = 0

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("HadithCollection id must be a non-empty string")


@dataclass(frozen=True)
class Hadith:
    """
    One narration record in canonical shape.

    `id` is the composite `<collection_id>-<raw_id>`. `arabic_text` and
    `english_translation` are always strings. `graded` is False when
    `grade` was filled in from the configured default rather than the
    source record.
    """
    id: str
    collection_id: str
    hadith_number: str
    arabic_text: str
    english_translation: str
    grade: str
    graded: bool = True
    book: Optional[str] = None
    chapter: Optional[str] = None
    urdu_translation: Optional[str] = None
    roman_urdu_translation: Optional[str] = None
    narrator: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)

    @staticmethod
    def composite_id(collection_id: str, raw_id: object) -> str:
        return f"{collection_id}-{raw_id}"


# =============================================================================
# SIDE RECORDS (per-user state)
# =============================================================================

@dataclass(frozen=True)
class Bookmark:
    """A user's saved reference to a hadith."""
    id: str
    user_id: str
    hadith_id: str
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class UserPreferences:
    """Reading preferences for one user."""
    id: str
    user_id: str
    font_size: str = "medium"
    theme: str = "light"
    show_diacritics: bool = True
    auto_play_audio: bool = False


# =============================================================================
# ERRORS
# =============================================================================

class MalformedRecordError(ValueError):
    """A corpus record could not be turned into a Hadith at all."""


class StoreFrozenError(RuntimeError):
    """A write was attempted on a store that finished loading."""
