"""
Router pour les voyages : création, détail, modification, confirmation.
Les erreurs métier (NotFound, InvalidDate) sont traduites par le handler de main.py.
"""

import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from planner.config import settings
from planner.database import get_db
from planner.schemas.trip import TripCreate, TripCreated, TripResponse, TripUpdate
from planner.services import trip_service

router = APIRouter(prefix="/trips", tags=["Voyages"])


@router.post("", response_model=TripCreated, summary="Créer un voyage")
def create_trip(data: TripCreate, db: Session = Depends(get_db)):
    """
    Crée un voyage, son propriétaire (confirmé) et les invités (non confirmés),
    puis envoie au propriétaire l'email de confirmation.

    Retourne 400 si le début ou la fin est dans le passé, ou si la fin précède le début.
    """
    return TripCreated(trip_id=trip_service.create_trip(db, data))


@router.get("/{trip_id}", response_model=TripResponse, summary="Détail d'un voyage")
def get_trip(trip_id: uuid.UUID, db: Session = Depends(get_db)):
    return trip_service.get_trip(db, trip_id)


@router.put("/{trip_id}", response_model=TripResponse, summary="Modifier un voyage")
def update_trip(trip_id: uuid.UUID, data: TripUpdate, db: Session = Depends(get_db)):
    """
    Met à jour la destination et/ou les dates.
    La nouvelle période doit contenir toutes les activités déjà planifiées.
    """
    return trip_service.update_trip(db, trip_id, data)


@router.get("/{trip_id}/confirm", summary="Confirmer un voyage")
def confirm_trip(trip_id: uuid.UUID, db: Session = Depends(get_db)):
    """
    Lien reçu par email par le propriétaire.
    Confirme le voyage, invite les participants et redirige vers le front.
    """
    trip_service.confirm_trip(db, trip_id)
    return RedirectResponse(f"{settings.WEB_BASE_URL}/trips/{trip_id}")
