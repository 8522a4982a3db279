"""
Test Fixtures

Explicit corpus records and builders. No random generation here;
property tests build their own inputs with hypothesis.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from backend.contracts import Hadith, HadithCollection
from backend.storage import HadithStore


LOADED_AT = datetime(2026, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# RAW CORPUS RECORDS
# =============================================================================

CHAPTERS = [
    {"id": 1, "english": "Revelation"},
    {"id": 2, "english": "Belief"},
]

RECORD_FULL = {
    "id": 7,
    "idInBook": 3,
    "chapterId": 2,
    "arabic": "إنما الأعمال بالنيات",
    "english": {
        "narrator": "Narrated 'Umar bin Al-Khattab",
        "text": "The reward of deeds depends upon the intentions.",
    },
    "urdu": "اعمال کا دارومدار نیتوں پر ہے",
    "romanUrdu": "Aamaal ka daromadar niyyaton par hai",
    "grade": "Sahih",
}

RECORD_MINIMAL = {"id": 8}


def demo_corpus() -> dict:
    """Two records; only id 2 carries a grade."""
    return {
        "chapters": CHAPTERS,
        "hadiths": [
            {
                "id": 1,
                "chapterId": 1,
                "arabic": "بدء الوحي",
                "english": {"narrator": "Narrated Aisha", "text": "How the Divine Inspiration started."},
            },
            {
                "id": 2,
                "chapterId": 2,
                "arabic": "بني الإسلام على خمس",
                "english": {"narrator": "Narrated Ibn 'Umar", "text": "Islam is based on five principles."},
                "grade": "Hasan",
            },
        ],
    }


def write_corpus(directory: Path, collection_id: str, data) -> Path:
    """Write `data` as `<directory>/<collection_id>.json`."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{collection_id}.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


# =============================================================================
# CANONICAL ENTRIES
# =============================================================================

def make_collection(collection_id: str, name: Optional[str] = None) -> HadithCollection:
    return HadithCollection(
        id=collection_id,
        name=name or collection_id.title(),
        compiler=f"Compiler of {collection_id}",
        total_hadiths=100
    )


def make_hadith(
    collection_id: str,
    raw_id: int,
    english: str = "",
    arabic: str = "",
    **overrides
) -> Hadith:
    fields = dict(
        id=Hadith.composite_id(collection_id, raw_id),
        collection_id=collection_id,
        hadith_number=str(raw_id),
        arabic_text=arabic,
        english_translation=english,
        grade="Sahih",
        created_at=LOADED_AT,
    )
    fields.update(overrides)
    return Hadith(**fields)


def build_store(hadiths: List[Hadith], collection_ids=("bukhari", "muslim")) -> HadithStore:
    store = HadithStore()
    for cid in collection_ids:
        store.add_collection(make_collection(cid))
    for hadith in hadiths:
        store.put_hadith(hadith)
    store.freeze()
    return store


def sample_hadiths() -> List[Hadith]:
    return [
        make_hadith(
            "bukhari", 1,
            english="This hadith discusses Prayer obligations",
            arabic="الصلاة عماد الدين",
            narrator="Narrated Abu Huraira",
            book="Prayers",
        ),
        make_hadith(
            "bukhari", 2,
            english="Fasting in Ramadan",
            arabic="صوم رمضان",
            urdu_translation="رمضان کے روزے",
            roman_urdu_translation="Ramzan ke Roze",
        ),
        make_hadith(
            "muslim", 10,
            english="On charity",
            arabic="ABC Zakat",
            narrator="Narrated Anas",
            book="Zakat",
            hadith_number="1010",
        ),
        make_hadith(
            "muslim", 11,
            english="On pilgrimage",
            arabic="الحج",
            chapter="Hajj Rites",
        ),
    ]
