"""Run the service: python -m vessel_tracker"""
import uvicorn

from vessel_tracker.core.config import settings
from vessel_tracker.core.logging import logger


def main() -> None:
    logger.info(f"Vessel Tracker running on http://{settings.host}:{settings.port}")
    logger.info(f"Health: http://localhost:{settings.port}/health")
    logger.info(f"Lookup: http://localhost:{settings.port}/vessel/XXXXXXX (7-digit IMO)")
    uvicorn.run(
        "vessel_tracker.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
