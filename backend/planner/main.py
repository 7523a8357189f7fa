"""
Point d'entrée principal de l'API plann.er.
Démarrage : uvicorn planner.main:app --port 3333 --reload (ou python -m planner)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import planner.models  # noqa: F401 — enregistre tous les modèles dans Base.metadata avant les routers
from planner.errors import ErrorCode, HTTP_STATUS, PlannerError
from planner.routers import activities, participants, trips
from planner.scheduler import start_scheduler, stop_scheduler

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Cycle de vie de l'application : démarre et arrête le scheduler de l'outbox."""
    start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(
    title="plann.er API",
    description="API de planification de voyages : participants, confirmations, activités",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS ouvert à toutes les origines (pas d'authentification, pas de cookies).
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(trips.router)
app.include_router(participants.router)
app.include_router(participants.participants_router)
app.include_router(activities.router)


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    """Traduit le code d'erreur métier en statut HTTP (404, 400...)."""
    logger.info("%s %s → %s : %s", request.method, request.url.path, exc.code.value, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Erreurs de forme (schéma Pydantic, UUID invalide) → 422 avec code VALIDATION_ERROR."""
    return JSONResponse(
        status_code=HTTP_STATUS[ErrorCode.VALIDATION_ERROR],
        content={
            "detail": jsonable_encoder(exc.errors()),
            "code": ErrorCode.VALIDATION_ERROR.value,
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Intercepte toutes les exceptions non gérées (BDD indisponible, bug) pour
    renvoyer un 500 distinct des erreurs client, avec les headers CORS.
    """
    logger.error("Exception non gérée : %s", exc, exc_info=True)
    return JSONResponse(
        status_code=HTTP_STATUS[ErrorCode.INTERNAL_ERROR],
        content={"detail": "Une erreur interne est survenue.", "code": ErrorCode.INTERNAL_ERROR.value},
    )


@app.get("/health", tags=["Santé"])
def health_check():
    """Vérifie que l'API est opérationnelle."""
    return {"status": "ok", "service": "plann.er API", "version": "0.1.0"}
