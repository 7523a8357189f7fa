"""
Routers pour les activités et les liens d'un voyage.
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from planner.database import get_db
from planner.schemas.activity import (
    ActivityCreate,
    ActivityCreated,
    DailyActivities,
    LinkCreate,
    LinkCreated,
    LinkResponse,
)
from planner.services import activity_service

router = APIRouter(prefix="/trips", tags=["Activités"])


@router.post(
    "/{trip_id}/activities",
    response_model=ActivityCreated,
    summary="Planifier une activité",
)
def create_activity(trip_id: uuid.UUID, data: ActivityCreate, db: Session = Depends(get_db)):
    """
    Planifie une activité dans la période du voyage.

    Retourne 404 si le voyage est introuvable,
    400 si accours_at est hors de [starts_at, ends_at].
    """
    return ActivityCreated(activity_id=activity_service.create_activity(db, trip_id, data))


@router.get(
    "/{trip_id}/activities",
    response_model=List[DailyActivities],
    summary="Activités d'un voyage, jour par jour",
)
def list_activities(trip_id: uuid.UUID, db: Session = Depends(get_db)):
    return activity_service.list_activities(db, trip_id)


@router.post("/{trip_id}/links", response_model=LinkCreated, summary="Ajouter un lien")
def create_link(trip_id: uuid.UUID, data: LinkCreate, db: Session = Depends(get_db)):
    return LinkCreated(link_id=activity_service.create_link(db, trip_id, data))


@router.get("/{trip_id}/links", response_model=List[LinkResponse], summary="Liens d'un voyage")
def list_links(trip_id: uuid.UUID, db: Session = Depends(get_db)):
    return activity_service.list_links(db, trip_id)
