"""
Routers pour les participants.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from planner.config import settings
from planner.database import get_db
from planner.schemas.participant import InviteCreate, ParticipantCreated, ParticipantResponse
from planner.services import participant_service

# GET /trips/{trip_id}/participants, POST /trips/{trip_id}/invites
router = APIRouter(prefix="/trips", tags=["Participants"])

# GET /participants/{participant_id}, GET /participants/{participant_id}/confirm
participants_router = APIRouter(prefix="/participants", tags=["Participants"])


@router.get(
    "/{trip_id}/participants",
    response_model=List[ParticipantResponse],
    summary="Participants d'un voyage",
)
def list_participants(trip_id: uuid.UUID, db: Session = Depends(get_db)):
    return participant_service.list_participants(db, trip_id)


@router.post("/{trip_id}/invites", response_model=ParticipantCreated, summary="Inviter une personne")
def invite_participant(trip_id: uuid.UUID, data: InviteCreate, db: Session = Depends(get_db)):
    """
    Ajoute un invité au voyage.
    L'email d'invitation part immédiatement si le voyage est déjà confirmé.
    """
    return ParticipantCreated(participant_id=participant_service.invite_participant(db, trip_id, data))


@participants_router.get(
    "/{participant_id}",
    response_model=ParticipantResponse,
    summary="Détail d'un participant",
)
def get_participant(participant_id: uuid.UUID, db: Session = Depends(get_db)):
    return participant_service.get_participant(db, participant_id)


@participants_router.get("/{participant_id}/confirm", summary="Confirmer sa participation")
def confirm_participant(participant_id: uuid.UUID, db: Session = Depends(get_db)):
    """Lien reçu par email par l'invité ; redirige vers la page du voyage."""
    participant = participant_service.confirm_participant(db, participant_id)
    return RedirectResponse(f"{settings.WEB_BASE_URL}/trips/{participant.trip_id}")
