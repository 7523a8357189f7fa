"""
Schémas Pydantic pour les voyages.

Les règles de dates (passé, ordre début/fin) ne sont pas ici : elles dépendent
de l'heure courante et de l'état en base, trip_service les applique et lève
InvalidDate.
"""

import unicodedata
import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

DESTINATION_MIN_LENGTH = 4


def _reject_control_chars(v: str) -> str:
    # Ces valeurs finissent dans les en-têtes des emails (Subject, To)
    if any(unicodedata.category(c) == "Cc" for c in v):
        raise ValueError("Les caractères de contrôle (retour à la ligne, tabulation...) sont interdits.")
    return v


def _check_destination(v: str) -> str:
    _reject_control_chars(v)
    if len(v.strip()) < DESTINATION_MIN_LENGTH:
        raise ValueError(
            f"La destination doit contenir au moins {DESTINATION_MIN_LENGTH} caractères."
        )
    return v.strip()


class TripCreate(BaseModel):
    destination: str
    starts_at: datetime
    ends_at: datetime
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: List[EmailStr] = []

    @field_validator("destination")
    @classmethod
    def destination_min_length(cls, v: str) -> str:
        return _check_destination(v)

    @field_validator("owner_name")
    @classmethod
    def owner_name_not_empty(cls, v: str) -> str:
        _reject_control_chars(v)
        if not v.strip():
            raise ValueError("Le nom du propriétaire ne peut pas être vide.")
        return v.strip()

    @field_validator("emails_to_invite")
    @classmethod
    def unique_emails(cls, v: List[str]) -> List[str]:
        # Ensemble d'adresses : doublons retirés sans tenir compte de la casse, ordre conservé
        seen = set()
        unique = []
        for email in v:
            key = email.lower()
            if key not in seen:
                seen.add(key)
                unique.append(email)
        return unique


class TripUpdate(BaseModel):
    destination: Optional[str] = None
    starts_at: Optional[datetime] = None
    ends_at: Optional[datetime] = None

    @field_validator("destination")
    @classmethod
    def destination_min_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_destination(v)


class TripCreated(BaseModel):
    trip_id: uuid.UUID = Field(alias="tripId")

    model_config = {"populate_by_name": True}


class TripResponse(BaseModel):
    id: uuid.UUID
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool

    model_config = {"from_attributes": True}
