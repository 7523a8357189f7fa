"""
Tests d'intégration API pour les participants.
Testent GET /trips/{trip_id}/participants, POST /trips/{trip_id}/invites,
      GET /participants/{participant_id}, GET /participants/{participant_id}/confirm
"""

import uuid
from unittest.mock import patch

from planner.config import settings
from planner.errors import NotFound
from planner.models.trip import Participant
from planner.schemas.participant import ParticipantResponse


def make_participant_response(**kwargs) -> ParticipantResponse:
    return ParticipantResponse(
        id=kwargs.get("id", uuid.uuid4()),
        trip_id=kwargs.get("trip_id", uuid.uuid4()),
        name=kwargs.get("name", None),
        email=kwargs.get("email", "bruno@example.com"),
        is_owner=kwargs.get("is_owner", False),
        is_confirmed=kwargs.get("is_confirmed", False),
    )


def test_list_participants(client):
    trip_id = uuid.uuid4()
    with patch("planner.routers.participants.participant_service.list_participants") as mock:
        mock.return_value = [
            make_participant_response(trip_id=trip_id, name="Ana Souza", email="ana@example.com",
                                      is_owner=True, is_confirmed=True),
            make_participant_response(trip_id=trip_id),
        ]
        response = client.get(f"/trips/{trip_id}/participants")

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert data[0]["is_owner"] is True
    assert data[1]["name"] is None


def test_list_participants_voyage_introuvable(client):
    with patch("planner.routers.participants.participant_service.list_participants") as mock:
        mock.side_effect = NotFound("Voyage introuvable.")
        response = client.get(f"/trips/{uuid.uuid4()}/participants")

    assert response.status_code == 404


def test_invite_participant(client):
    participant_id = uuid.uuid4()
    with patch("planner.routers.participants.participant_service.invite_participant") as mock:
        mock.return_value = participant_id
        response = client.post(f"/trips/{uuid.uuid4()}/invites", json={"email": "diego@example.com"})

    assert response.status_code == 200
    assert response.json() == {"participantId": str(participant_id)}


def test_invite_participant_email_invalide(client):
    response = client.post(f"/trips/{uuid.uuid4()}/invites", json={"email": "diego"})
    assert response.status_code == 422


def test_get_participant(client):
    participant_id = uuid.uuid4()
    with patch("planner.routers.participants.participant_service.get_participant") as mock:
        mock.return_value = make_participant_response(id=participant_id)
        response = client.get(f"/participants/{participant_id}")

    assert response.status_code == 200
    assert response.json()["id"] == str(participant_id)


def test_confirm_participant_redirige_vers_le_voyage(client, mock_db):
    participant = Participant(
        id=uuid.uuid4(),
        trip_id=uuid.uuid4(),
        email="bruno@example.com",
        is_owner=False,
        is_confirmed=False,
    )
    mock_db.get.return_value = participant

    response = client.get(f"/participants/{participant.id}/confirm", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == f"{settings.WEB_BASE_URL}/trips/{participant.trip_id}"
    assert participant.is_confirmed is True


def test_confirm_participant_introuvable(client, mock_db):
    mock_db.get.return_value = None
    response = client.get(f"/participants/{uuid.uuid4()}/confirm", follow_redirects=False)

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
