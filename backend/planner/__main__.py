"""
Lancement local : python -m planner
"""

import logging

import uvicorn

from planner.config import settings
from planner.database import init_db

logger = logging.getLogger("planner")


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s — %(message)s",
    )
    if settings.ENV == "development":
        init_db()
        logger.info("Tables créées/vérifiées sur %s", settings.DATABASE_URL.rsplit("@", 1)[-1])
    uvicorn.run("planner.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    main()
