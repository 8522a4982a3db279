"""
API Mapper
==========

Transforms internal contracts into the JSON shapes the web client reads.
Keys are camelCase to match the client.
"""
from typing import Any, Dict, Optional

from ..contracts import HadithCollection, Hadith, Bookmark, UserPreferences


def _iso(value) -> str:
    return value.isoformat().replace('+00:00', 'Z')


def map_collection(collection: HadithCollection) -> Dict[str, Any]:
    return {
        "id": collection.id,
        "name": collection.name,
        "arabicName": collection.arabic_name,
        "compiler": collection.compiler,
        "description": collection.description,
        "totalHadiths": collection.total_hadiths,
    }


def map_hadith(hadith: Optional[Hadith]) -> Optional[Dict[str, Any]]:
    """Map a Hadith to its DTO. `gradeVerified` is False for defaulted grades."""
    if hadith is None:
        return None
    return {
        "id": hadith.id,
        "collectionId": hadith.collection_id,
        "hadithNumber": hadith.hadith_number,
        "book": hadith.book,
        "chapter": hadith.chapter,
        "arabicText": hadith.arabic_text,
        "englishTranslation": hadith.english_translation,
        "urduTranslation": hadith.urdu_translation,
        "romanUrduTranslation": hadith.roman_urdu_translation,
        "narrator": hadith.narrator,
        "grade": hadith.grade,
        "gradeVerified": hadith.graded,
        "createdAt": _iso(hadith.created_at),
    }


def map_bookmark(bookmark: Bookmark) -> Dict[str, Any]:
    return {
        "id": bookmark.id,
        "userId": bookmark.user_id,
        "hadithId": bookmark.hadith_id,
        "createdAt": _iso(bookmark.created_at),
    }


def map_preferences(preferences: Optional[UserPreferences]) -> Optional[Dict[str, Any]]:
    if preferences is None:
        return None
    return {
        "id": preferences.id,
        "userId": preferences.user_id,
        "fontSize": preferences.font_size,
        "theme": preferences.theme,
        "showDiacritics": preferences.show_diacritics,
        "autoPlayAudio": preferences.auto_play_audio,
    }


def map_stats(stats: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "totalHadiths": stats["total_hadiths"],
        "collections": stats["collections"],
        "languages": stats["languages"],
        "users": stats["users"],
    }
