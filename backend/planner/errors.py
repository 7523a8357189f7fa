"""
Exceptions métier de l'API plann.er.

Chaque exception porte un ErrorCode ; le handler enregistré dans main.py
traduit ce code en statut HTTP. Les services lèvent, les routers ne
rattrapent rien.

Usage :
    from planner.errors import NotFound

    raise NotFound("Voyage introuvable.")
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Codes d'erreur exposés aux clients dans le champ `code`."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_DATE = "INVALID_DATE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


HTTP_STATUS: dict[ErrorCode, int] = {
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.INVALID_DATE: 400,
    ErrorCode.VALIDATION_ERROR: 422,
    ErrorCode.INTERNAL_ERROR: 500,
}


class PlannerError(Exception):
    """Exception de base ; les sous-classes fixent `code`."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.code]

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code.value}


class NotFound(PlannerError):
    """Ressource (voyage, participant) inexistante."""

    code = ErrorCode.NOT_FOUND


class InvalidDate(PlannerError):
    """Date refusée par une règle métier (passé, hors de la période du voyage)."""

    code = ErrorCode.INVALID_DATE
