"""
Request Schemas

Pydantic models for request bodies. Field aliases follow the client's
camelCase keys; unknown keys are ignored.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class BookmarkCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    hadith_id: str = Field(..., alias="hadithId", min_length=1, description="Composite hadith id")


class PreferencesUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    font_size: Optional[str] = Field(None, alias="fontSize", description="small / medium / large")
    theme: Optional[str] = Field(None, description="light / dark")
    show_diacritics: Optional[bool] = Field(None, alias="showDiacritics")
    auto_play_audio: Optional[bool] = Field(None, alias="autoPlayAudio")


class VisitorTrack(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    visitor_id: Optional[str] = Field(None, alias="visitorId", description="Client-generated visitor id")
