# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles
# (participants.trip_id → trips.id, etc.).

from planner.models.trip import Trip, Participant  # noqa: F401  — doit précéder les autres
from planner.models.activity import Activity, Link  # noqa: F401
from planner.models.outbox import OutboxMessage  # noqa: F401
