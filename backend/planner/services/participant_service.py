"""
Service métier pour les participants : lecture, invitation, confirmation.
"""

import uuid
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from planner.errors import NotFound
from planner.models.trip import Participant
from planner.schemas.participant import InviteCreate, ParticipantResponse
from planner.services import mail_service
from planner.services.trip_service import require_trip

logger = logging.getLogger(__name__)


def _require_participant(db: Session, participant_id: uuid.UUID) -> Participant:
    participant = db.get(Participant, participant_id)
    if participant is None:
        raise NotFound("Participant introuvable.")
    return participant


def list_participants(db: Session, trip_id: uuid.UUID) -> list[ParticipantResponse]:
    """Participants d'un voyage, propriétaire en premier."""
    require_trip(db, trip_id)
    participants = db.execute(
        select(Participant)
        .where(Participant.trip_id == trip_id)
        .order_by(Participant.is_owner.desc(), Participant.email)
    ).scalars().all()
    return [ParticipantResponse.model_validate(p) for p in participants]


def get_participant(db: Session, participant_id: uuid.UUID) -> ParticipantResponse:
    return ParticipantResponse.model_validate(_require_participant(db, participant_id))


def confirm_participant(db: Session, participant_id: uuid.UUID) -> Participant:
    """
    Confirme la participation (invited → confirmed).
    Idempotent : un participant déjà confirmé est retourné tel quel.
    """
    participant = _require_participant(db, participant_id)
    if participant.is_confirmed:
        return participant

    participant.is_confirmed = True
    db.commit()
    db.refresh(participant)

    logger.info("Participant %s confirmé (voyage %s)", participant.id, participant.trip_id)
    return participant


def invite_participant(db: Session, trip_id: uuid.UUID, data: InviteCreate) -> uuid.UUID:
    """
    Ajoute un invité non confirmé au voyage.
    Si le voyage est déjà confirmé, l'invitation part tout de suite (outbox) ;
    sinon elle partira à la confirmation du voyage.
    """
    trip = require_trip(db, trip_id)

    participant = Participant(
        id=uuid.uuid4(),
        trip_id=trip.id,
        email=data.email,
        is_owner=False,
        is_confirmed=False,
    )
    db.add(participant)

    invitation = None
    if trip.is_confirmed:
        invitation = mail_service.build_trip_invitation(trip, participant)
        db.add(invitation)

    participant_id = participant.id
    db.commit()

    logger.info("Invitation de %s sur le voyage %s", data.email, trip_id)

    if invitation is not None:
        mail_service.deliver(db, [invitation])
    return participant_id
