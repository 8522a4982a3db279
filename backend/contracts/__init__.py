"""
Contracts Module

This module defines the data types shared between the ingestion,
storage, query and API layers. No layer may import implementation
details from another layer; they exchange these types only.

DESIGN PRINCIPLES:
==================
1. Corpus types are immutable (frozen dataclasses)
2. "Not found" is an absent value, never an exception
3. All timestamps use UTC
"""

from .base import (
    DEFAULT_USER_ID,
    DEFAULT_GRADE,
    UNGRADED,
    SUPPORTED_LANGUAGES,
    HadithCollection,
    Hadith,
    Bookmark,
    UserPreferences,
    MalformedRecordError,
    StoreFrozenError,
    utc_now,
    new_record_id,
)

__all__ = [
    'DEFAULT_USER_ID',
    'DEFAULT_GRADE',
    'UNGRADED',
    'SUPPORTED_LANGUAGES',
    'HadithCollection',
    'Hadith',
    'Bookmark',
    'UserPreferences',
    'MalformedRecordError',
    'StoreFrozenError',
    'utc_now',
    'new_record_id',
]
