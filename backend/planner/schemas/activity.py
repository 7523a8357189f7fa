"""
Schémas Pydantic pour les activités et les liens d'un voyage.

Note : on importe datetime en tant que module (dt) pour éviter le conflit de nommage
entre le champ `date` de DailyActivities et le type `datetime.date`.
"""

import uuid
import datetime as dt
from typing import List

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator

TITLE_MIN_LENGTH = 4


def _check_title(v: str) -> str:
    if len(v.strip()) < TITLE_MIN_LENGTH:
        raise ValueError(f"Le titre doit contenir au moins {TITLE_MIN_LENGTH} caractères.")
    return v.strip()


class ActivityCreate(BaseModel):
    title: str
    accours_at: dt.datetime

    @field_validator("title")
    @classmethod
    def title_min_length(cls, v: str) -> str:
        return _check_title(v)


class ActivityCreated(BaseModel):
    activity_id: uuid.UUID = Field(alias="activityId")

    model_config = {"populate_by_name": True}


class ActivityResponse(BaseModel):
    id: uuid.UUID
    title: str
    accours_at: dt.datetime

    model_config = {"from_attributes": True}


class DailyActivities(BaseModel):
    """Activités d'un jour calendaire du voyage (liste vide si aucune)."""
    date: dt.date
    activities: List[ActivityResponse] = []


class LinkCreate(BaseModel):
    title: str
    url: AnyHttpUrl

    @field_validator("title")
    @classmethod
    def title_min_length(cls, v: str) -> str:
        return _check_title(v)


class LinkCreated(BaseModel):
    link_id: uuid.UUID = Field(alias="linkId")

    model_config = {"populate_by_name": True}


class LinkResponse(BaseModel):
    id: uuid.UUID
    title: str
    url: str

    model_config = {"from_attributes": True}
