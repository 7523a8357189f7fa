"""
Schémas Pydantic pour les participants d'un voyage.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class InviteCreate(BaseModel):
    """Invitation d'une nouvelle adresse sur un voyage existant."""
    email: EmailStr


class ParticipantCreated(BaseModel):
    participant_id: uuid.UUID = Field(alias="participantId")

    model_config = {"populate_by_name": True}


class ParticipantResponse(BaseModel):
    id: uuid.UUID
    trip_id: uuid.UUID
    name: Optional[str]
    email: str
    is_owner: bool
    is_confirmed: bool

    model_config = {"from_attributes": True}
