"""
Service métier pour les activités et les liens d'un voyage.
"""

import uuid
import logging
from collections import defaultdict

from sqlalchemy import select
from sqlalchemy.orm import Session

from planner.dates import as_utc, days_between, is_after, is_before
from planner.errors import InvalidDate
from planner.models.activity import Activity, Link
from planner.schemas.activity import (
    ActivityCreate,
    ActivityResponse,
    DailyActivities,
    LinkCreate,
    LinkResponse,
)
from planner.services.trip_service import require_trip

logger = logging.getLogger(__name__)


def create_activity(db: Session, trip_id: uuid.UUID, data: ActivityCreate) -> uuid.UUID:
    """
    Planifie une activité dans la période du voyage (bornes incluses).

    Lève NotFound si le voyage est introuvable, InvalidDate si accours_at
    tombe avant le début ou après la fin du voyage.
    """
    trip = require_trip(db, trip_id)

    if is_before(data.accours_at, trip.starts_at):
        raise InvalidDate("L'activité ne peut pas avoir lieu avant le début du voyage.")
    if is_after(data.accours_at, trip.ends_at):
        raise InvalidDate("L'activité ne peut pas avoir lieu après la fin du voyage.")

    activity = Activity(
        id=uuid.uuid4(),
        trip_id=trip_id,
        title=data.title,
        accours_at=as_utc(data.accours_at),
    )
    activity_id = activity.id
    db.add(activity)
    db.commit()

    logger.info("Activité %s planifiée le %s (voyage %s)", activity_id, data.accours_at, trip_id)
    return activity_id


def list_activities(db: Session, trip_id: uuid.UUID) -> list[DailyActivities]:
    """Une entrée par jour du voyage, activités triées par horaire."""
    trip = require_trip(db, trip_id)

    activities = db.execute(
        select(Activity)
        .where(Activity.trip_id == trip_id)
        .order_by(Activity.accours_at)
    ).scalars().all()

    by_day = defaultdict(list)
    for activity in activities:
        by_day[as_utc(activity.accours_at).date()].append(ActivityResponse.model_validate(activity))

    return [
        DailyActivities(date=day, activities=by_day.get(day, []))
        for day in days_between(trip.starts_at, trip.ends_at)
    ]


def create_link(db: Session, trip_id: uuid.UUID, data: LinkCreate) -> uuid.UUID:
    require_trip(db, trip_id)

    link_id = uuid.uuid4()
    db.add(Link(id=link_id, trip_id=trip_id, title=data.title, url=str(data.url)))
    db.commit()
    return link_id


def list_links(db: Session, trip_id: uuid.UUID) -> list[LinkResponse]:
    require_trip(db, trip_id)
    links = db.execute(
        select(Link).where(Link.trip_id == trip_id).order_by(Link.title)
    ).scalars().all()
    return [LinkResponse.model_validate(link) for link in links]
