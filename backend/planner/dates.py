"""
Comparaisons de dates partagées par les services et formatage pt-BR des emails.

Les colonnes DateTime sont stockées en UTC naïf : toute valeur avec fuseau
est convertie avant comparaison ou écriture.
"""

from datetime import date, datetime, timedelta, timezone

MESES = (
    "janeiro", "fevereiro", "março", "abril", "maio", "junho",
    "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
)


def as_utc(value: datetime) -> datetime:
    """Convertit en datetime UTC naïf (format de stockage)."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_before(value: datetime, reference: datetime) -> bool:
    return as_utc(value) < as_utc(reference)


def is_after(value: datetime, reference: datetime) -> bool:
    return as_utc(value) > as_utc(reference)


def is_within(value: datetime, starts_at: datetime, ends_at: datetime) -> bool:
    """Bornes incluses."""
    return not is_before(value, starts_at) and not is_after(value, ends_at)


def days_between(starts_at: datetime, ends_at: datetime) -> list[date]:
    """Jours calendaires de starts_at à ends_at inclus (liste vide si inversés)."""
    first = as_utc(starts_at).date()
    last = as_utc(ends_at).date()
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def format_long_date(value: datetime) -> str:
    """Format long brésilien, ex. « 10 de janeiro de 2025 »."""
    return f"{value.day} de {MESES[value.month - 1]} de {value.year}"
