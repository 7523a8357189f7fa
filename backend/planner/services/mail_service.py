"""
Service des emails transactionnels (outbox).

Flux :
  1. Le service métier construit le message (build_*) et l'ajoute à la session
     avec son propre changement : un seul commit pour les deux.
  2. Après commit, deliver() tente l'envoi inline.
  3. Un échec d'envoi est enregistré sur le message (attempts, last_error) sans
     remonter à l'appelant ; le scheduler relance via dispatch_pending()
     jusqu'à OUTBOX_MAX_ATTEMPTS, après quoi le message passe en FAILED.
"""

import html
import logging
import uuid
from datetime import timedelta
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from planner.config import settings
from planner.dates import format_long_date, utcnow
from planner.models.outbox import OutboxMessage
from planner.models.trip import Participant, Trip
from planner.schemas.outbox import DispatchReport
from planner.services.email_service import send_email

logger = logging.getLogger(__name__)


def trip_confirmation_link(trip_id: uuid.UUID) -> str:
    return f"{settings.API_BASE_URL}/trips/{trip_id}/confirm"


def participant_confirmation_link(participant_id: uuid.UUID) -> str:
    return f"{settings.API_BASE_URL}/participants/{participant_id}/confirm"


def _render(intro: str, action: str, link: str, link_label: str) -> str:
    return f"""
    <div style="font-family: sans-serif; font-size: 16px; line-height: 1.6;">
      <p>{intro}</p>
      <p></p>
      <p>{action}</p>
      <p></p>
      <p><a href="{link}">{link_label}</a></p>
      <p></p>
      <p>Caso você não saiba do que se trata esse e-mail, apenas ignore esse e-mail.</p>
    </div>
    """.strip()


def build_trip_confirmation(trip: Trip, owner_name: str, owner_email: str) -> OutboxMessage:
    """Email au propriétaire avec le lien de confirmation du voyage."""
    destination = html.escape(trip.destination)
    starts = format_long_date(trip.starts_at)
    ends = format_long_date(trip.ends_at)
    body = _render(
        intro=(
            f"Você solicitou a criação de uma viagem para <strong>{destination}</strong> "
            f"nas datas de <strong>{starts}</strong> até <strong>{ends}</strong>."
        ),
        action="Para confirmar sua viagem, clique no link abaixo:",
        link=trip_confirmation_link(trip.id),
        link_label="Confirmar viagem",
    )
    return OutboxMessage(
        id=uuid.uuid4(),
        trip_id=trip.id,
        recipient_email=owner_email,
        recipient_name=owner_name,
        subject=f"Confirme sua viagem para {trip.destination} em {starts}",
        html=body,
        status="PENDING",
        attempts=0,
        created_at=utcnow(),
    )


def build_trip_invitation(trip: Trip, participant: Participant) -> OutboxMessage:
    """Email à un invité avec le lien de confirmation de sa participation."""
    destination = html.escape(trip.destination)
    starts = format_long_date(trip.starts_at)
    ends = format_long_date(trip.ends_at)
    body = _render(
        intro=(
            f"Você foi convidado(a) para participar de uma viagem para "
            f"<strong>{destination}</strong> nas datas de <strong>{starts}</strong> "
            f"até <strong>{ends}</strong>."
        ),
        action="Para confirmar sua presença na viagem, clique no link abaixo:",
        link=participant_confirmation_link(participant.id),
        link_label="Confirmar presença",
    )
    return OutboxMessage(
        id=uuid.uuid4(),
        trip_id=trip.id,
        recipient_email=participant.email,
        recipient_name=participant.name,
        subject=f"Confirme sua presença na viagem para {trip.destination} em {starts}",
        html=body,
        status="PENDING",
        attempts=0,
        created_at=utcnow(),
    )


def deliver(db: Session, messages: Iterable[OutboxMessage]) -> DispatchReport:
    """
    Tente d'envoyer chaque message puis commit l'état de tous en une fois.

    Succès → SENT + sent_at. Tout échec (SMTP, en-tête refusé...) → attempts++,
    last_error, et FAILED une fois OUTBOX_MAX_ATTEMPTS atteint (sinon reste
    PENDING). Un message en échec n'empêche ni les suivants ni le commit.
    """
    report = DispatchReport(sent_count=0, failed_count=0, errors=[])

    for message in messages:
        message.attempts = (message.attempts or 0) + 1
        try:
            send_email(
                to_email=message.recipient_email,
                to_name=message.recipient_name,
                subject=message.subject,
                html_content=message.html,
            )
        except Exception as exc:
            message.last_error = str(exc)
            if message.attempts >= settings.OUTBOX_MAX_ATTEMPTS:
                message.status = "FAILED"
            report.failed_count += 1
            report.errors.append(f"Erreur envoi email {message.recipient_email} : {exc}")
            logger.error(
                "Échec envoi email %s (tentative %d/%d) : %s",
                message.recipient_email, message.attempts, settings.OUTBOX_MAX_ATTEMPTS, exc,
            )
            continue

        message.status = "SENT"
        message.sent_at = utcnow()
        message.last_error = None
        report.sent_count += 1

    db.commit()
    return report


def dispatch_pending(db: Session) -> DispatchReport:
    """
    Délivre les plus anciens messages PENDING (lot de OUTBOX_BATCH_SIZE).

    Les messages plus récents que OUTBOX_RETRY_DELAY_SECONDS sont laissés à
    l'envoi inline en cours ; les lignes verrouillées par un autre worker
    sont sautées (SKIP LOCKED) jusqu'au commit de deliver().
    """
    cutoff = utcnow() - timedelta(seconds=settings.OUTBOX_RETRY_DELAY_SECONDS)
    messages = db.execute(
        select(OutboxMessage)
        .where(
            OutboxMessage.status == "PENDING",
            OutboxMessage.created_at < cutoff,
        )
        .order_by(OutboxMessage.created_at)
        .limit(settings.OUTBOX_BATCH_SIZE)
        .with_for_update(skip_locked=True)
    ).scalars().all()

    if not messages:
        return DispatchReport(sent_count=0, failed_count=0, errors=[])

    return deliver(db, messages)
