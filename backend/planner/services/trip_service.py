"""
Service métier pour les voyages.
Gère la création, la lecture, la modification et la confirmation des voyages.
"""

import uuid
import logging
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from planner.config import settings
from planner.dates import as_utc, is_after, is_before, utcnow
from planner.errors import InvalidDate, NotFound
from planner.models.activity import Activity
from planner.models.trip import Participant, Trip
from planner.schemas.trip import TripCreate, TripResponse, TripUpdate
from planner.services import mail_service

logger = logging.getLogger(__name__)


def require_trip(db: Session, trip_id: uuid.UUID) -> Trip:
    """Retourne le voyage ou lève NotFound."""
    trip = db.get(Trip, trip_id)
    if trip is None:
        raise NotFound("Voyage introuvable.")
    return trip


def _check_not_past(value: datetime, label: str) -> None:
    if is_before(value, utcnow()):
        raise InvalidDate(f"La date de {label} du voyage ne peut pas être dans le passé.")


def _check_range(starts_at: datetime, ends_at: datetime) -> None:
    if is_before(ends_at, starts_at):
        raise InvalidDate("La date de fin du voyage doit être postérieure à la date de début.")
    if as_utc(ends_at) - as_utc(starts_at) > timedelta(days=settings.MAX_TRIP_DAYS):
        raise InvalidDate(f"Un voyage ne peut pas durer plus de {settings.MAX_TRIP_DAYS} jours.")


def create_trip(db: Session, data: TripCreate) -> uuid.UUID:
    """
    Crée un voyage avec son propriétaire et ses invités.

    Étapes :
    1. Vérifier les dates (ni début ni fin dans le passé, fin >= début,
       durée <= MAX_TRIP_DAYS)
    2. Insérer le voyage puis, en bulk, le propriétaire (confirmé) et les invités
    3. Mettre l'email de confirmation dans l'outbox, dans la même transaction
    4. Tenter l'envoi ; un échec SMTP reste dans l'outbox pour le scheduler
    """
    _check_not_past(data.starts_at, "début")
    _check_not_past(data.ends_at, "fin")
    _check_range(data.starts_at, data.ends_at)

    trip = Trip(
        id=uuid.uuid4(),
        destination=data.destination,
        starts_at=as_utc(data.starts_at),
        ends_at=as_utc(data.ends_at),
        is_confirmed=False,
    )
    db.add(trip)
    db.flush()  # Le voyage doit exister avant l'insert bulk (clé étrangère)

    participants = [{
        "id": uuid.uuid4(),
        "trip_id": trip.id,
        "name": data.owner_name,
        "email": data.owner_email,
        "is_owner": True,
        "is_confirmed": True,
    }]
    participants += [
        {
            "id": uuid.uuid4(),
            "trip_id": trip.id,
            "email": email,
            "is_owner": False,
            "is_confirmed": False,
        }
        for email in data.emails_to_invite
    ]
    db.bulk_insert_mappings(Participant, participants)

    confirmation = mail_service.build_trip_confirmation(trip, data.owner_name, data.owner_email)
    db.add(confirmation)

    trip_id = trip.id
    db.commit()

    logger.info(
        "Voyage créé : %s (%s) — %d invités",
        data.destination, trip_id, len(data.emails_to_invite),
    )

    mail_service.deliver(db, [confirmation])
    return trip_id


def get_trip(db: Session, trip_id: uuid.UUID) -> TripResponse:
    return TripResponse.model_validate(require_trip(db, trip_id))


def update_trip(db: Session, trip_id: uuid.UUID, data: TripUpdate) -> TripResponse:
    """
    Met à jour destination et/ou dates. Seuls les champs fournis sont modifiés.

    Une nouvelle date ne peut pas être dans le passé, la période doit rester
    ordonnée et contenir toutes les activités déjà planifiées.
    """
    trip = require_trip(db, trip_id)

    if data.starts_at is not None:
        _check_not_past(data.starts_at, "début")
    if data.ends_at is not None:
        _check_not_past(data.ends_at, "fin")

    starts_at = as_utc(data.starts_at) if data.starts_at is not None else trip.starts_at
    ends_at = as_utc(data.ends_at) if data.ends_at is not None else trip.ends_at
    _check_range(starts_at, ends_at)

    first, last = db.execute(
        select(func.min(Activity.accours_at), func.max(Activity.accours_at))
        .where(Activity.trip_id == trip_id)
    ).one()
    if first is not None and (is_before(first, starts_at) or is_after(last, ends_at)):
        raise InvalidDate("Des activités planifiées sortiraient de la nouvelle période du voyage.")

    if data.destination is not None:
        trip.destination = data.destination
    trip.starts_at = starts_at
    trip.ends_at = ends_at

    db.commit()
    db.refresh(trip)
    return TripResponse.model_validate(trip)


def confirm_trip(db: Session, trip_id: uuid.UUID) -> Trip:
    """
    Confirme un voyage (created → confirmed) et invite les participants.

    Un email d'invitation par participant non propriétaire est mis dans
    l'outbox avec la confirmation. Idempotent : un voyage déjà confirmé
    n'est pas modifié et aucun email n'est renvoyé.
    """
    trip = require_trip(db, trip_id)
    if trip.is_confirmed:
        logger.info("Voyage %s déjà confirmé", trip_id)
        return trip

    trip.is_confirmed = True

    guests = db.execute(
        select(Participant).where(
            Participant.trip_id == trip_id,
            Participant.is_owner.is_(False),
        )
    ).scalars().all()

    invitations = [mail_service.build_trip_invitation(trip, guest) for guest in guests]
    for invitation in invitations:
        db.add(invitation)
    db.commit()

    logger.info("Voyage %s confirmé — %d invitations", trip_id, len(invitations))

    if invitations:
        mail_service.deliver(db, invitations)
    return trip
