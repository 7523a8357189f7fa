"""
Schémas Pydantic pour la délivrance des emails de l'outbox.
"""

from typing import List

from pydantic import BaseModel


class DispatchReport(BaseModel):
    """Rapport d'un passage de délivrance (inline ou planifié)."""

    sent_count: int
    failed_count: int
    errors: List[str]
