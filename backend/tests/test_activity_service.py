"""
Tests unitaires pour le service des activités et des liens.
Couverture : create_activity, list_activities, create_link, list_links.
"""

import uuid
from datetime import date, datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError

from planner.errors import InvalidDate, NotFound
from planner.models.activity import Activity, Link
from planner.models.trip import Trip
from planner.schemas.activity import ActivityCreate, LinkCreate
from planner.services.activity_service import (
    create_activity,
    create_link,
    list_activities,
    list_links,
)


# ----------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------

def make_trip(starts_at=datetime(2025, 1, 10), ends_at=datetime(2025, 1, 20)) -> Trip:
    return Trip(
        id=uuid.uuid4(),
        destination="Florianópolis",
        starts_at=starts_at,
        ends_at=ends_at,
        is_confirmed=True,
    )


def make_db(trip=None, rows=None):
    db = MagicMock()
    db.get.return_value = trip
    db.execute.return_value.scalars.return_value.all.return_value = rows or []
    return db


# ----------------------------------------------------------------
# Validation des schémas
# ----------------------------------------------------------------

def test_activity_titre_trop_court():
    with pytest.raises(ValidationError):
        ActivityCreate(title="Bar", accours_at=datetime(2025, 1, 15))


def test_activity_date_non_convertible():
    with pytest.raises(ValidationError):
        ActivityCreate(title="Passeio de barco", accours_at="demain")


def test_link_url_invalide():
    with pytest.raises(ValidationError):
        LinkCreate(title="Reserva do hotel", url="pas une url")


# ----------------------------------------------------------------
# create_activity
# ----------------------------------------------------------------

class TestCreateActivity:
    def test_voyage_introuvable(self):
        db = make_db(trip=None)
        with pytest.raises(NotFound, match="introuvable"):
            create_activity(db, uuid.uuid4(), ActivityCreate(title="Passeio", accours_at=datetime(2025, 1, 15)))
        db.add.assert_not_called()

    def test_activite_dans_la_periode(self):
        trip = make_trip()
        db = make_db(trip=trip)

        activity_id = create_activity(
            db, trip.id, ActivityCreate(title="Passeio de barco", accours_at=datetime(2025, 1, 15)),
        )

        assert isinstance(activity_id, uuid.UUID)
        activity = db.add.call_args[0][0]
        assert isinstance(activity, Activity)
        assert activity.id == activity_id
        assert activity.trip_id == trip.id
        assert activity.title == "Passeio de barco"
        db.commit.assert_called_once()

    def test_activite_avant_le_debut(self):
        trip = make_trip()
        db = make_db(trip=trip)
        with pytest.raises(InvalidDate, match="début"):
            create_activity(db, trip.id, ActivityCreate(title="Passeio", accours_at=datetime(2025, 1, 5)))
        db.commit.assert_not_called()

    def test_activite_apres_la_fin(self):
        trip = make_trip()
        db = make_db(trip=trip)
        with pytest.raises(InvalidDate, match="fin"):
            create_activity(db, trip.id, ActivityCreate(title="Passeio", accours_at=datetime(2025, 1, 25)))
        db.commit.assert_not_called()

    @pytest.mark.parametrize("moment", [datetime(2025, 1, 10), datetime(2025, 1, 20)])
    def test_bornes_incluses(self, moment):
        trip = make_trip()
        db = make_db(trip=trip)
        assert create_activity(db, trip.id, ActivityCreate(title="Passeio", accours_at=moment))

    def test_activite_avec_fuseau_convertie_en_utc(self):
        """20/01 02:00 à -03:00 = 20/01 05:00 UTC, après la fin (20/01 00:00)."""
        trip = make_trip()
        db = make_db(trip=trip)
        brt = timezone(timedelta(hours=-3))
        with pytest.raises(InvalidDate):
            create_activity(
                db, trip.id,
                ActivityCreate(title="Passeio", accours_at=datetime(2025, 1, 20, 2, 0, tzinfo=brt)),
            )

    def test_activite_stockee_en_utc_naif(self):
        trip = make_trip()
        db = make_db(trip=trip)
        brt = timezone(timedelta(hours=-3))
        create_activity(
            db, trip.id,
            ActivityCreate(title="Passeio", accours_at=datetime(2025, 1, 15, 9, 0, tzinfo=brt)),
        )
        assert db.add.call_args[0][0].accours_at == datetime(2025, 1, 15, 12, 0)


# ----------------------------------------------------------------
# list_activities
# ----------------------------------------------------------------

class TestListActivities:
    def test_voyage_introuvable(self):
        with pytest.raises(NotFound):
            list_activities(make_db(trip=None), uuid.uuid4())

    def test_regroupe_par_jour_avec_jours_vides(self):
        trip = make_trip(starts_at=datetime(2025, 1, 10, 8, 0), ends_at=datetime(2025, 1, 12, 22, 0))
        rows = [
            Activity(id=uuid.uuid4(), trip_id=trip.id, title="Café da manhã", accours_at=datetime(2025, 1, 10, 9, 0)),
            Activity(id=uuid.uuid4(), trip_id=trip.id, title="Trilha da lagoa", accours_at=datetime(2025, 1, 10, 14, 0)),
            Activity(id=uuid.uuid4(), trip_id=trip.id, title="Volta para casa", accours_at=datetime(2025, 1, 12, 18, 0)),
        ]
        db = make_db(trip=trip, rows=rows)

        days = list_activities(db, trip.id)

        assert [d.date for d in days] == [date(2025, 1, 10), date(2025, 1, 11), date(2025, 1, 12)]
        assert [a.title for a in days[0].activities] == ["Café da manhã", "Trilha da lagoa"]
        assert days[1].activities == []
        assert [a.title for a in days[2].activities] == ["Volta para casa"]


# ----------------------------------------------------------------
# Liens
# ----------------------------------------------------------------

class TestLinks:
    def test_create_link(self):
        trip = make_trip()
        db = make_db(trip=trip)

        link_id = create_link(
            db, trip.id, LinkCreate(title="Reserva do hotel", url="https://airbnb.com/rooms/104700011"),
        )

        link = db.add.call_args[0][0]
        assert isinstance(link, Link)
        assert link.id == link_id
        assert link.url == "https://airbnb.com/rooms/104700011"
        db.commit.assert_called_once()

    def test_create_link_voyage_introuvable(self):
        db = make_db(trip=None)
        with pytest.raises(NotFound):
            create_link(db, uuid.uuid4(), LinkCreate(title="Reserva do hotel", url="https://airbnb.com"))
        db.add.assert_not_called()

    def test_list_links(self):
        trip = make_trip()
        rows = [Link(id=uuid.uuid4(), trip_id=trip.id, title="Reserva do hotel", url="https://airbnb.com/rooms/1")]
        db = make_db(trip=trip, rows=rows)

        links = list_links(db, trip.id)

        assert len(links) == 1
        assert links[0].title == "Reserva do hotel"
