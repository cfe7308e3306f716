"""Auth service entrypoint.

Run with:
  python -m auth_platform.auth_platform.auth_service
"""

import logging
import sys

import uvicorn

from .config import settings
from .db import init_db
from .errors import DatabaseConnectionError
from .main import app
from .utils.logging_setup import configure_logging

logger = logging.getLogger(__name__)


def main() -> None:
    configure_logging(settings.LOG_LEVEL, settings.LOG_DIR)

    try:
        users = init_db(settings)
    except DatabaseConnectionError as e:
        logger.error("Could not connect to MongoDB, exiting: %s", e)
        sys.exit(1)

    app.state.users = users
    logger.info("Server is running on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    main()
