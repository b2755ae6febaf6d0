"""Logging setup and Logfire cloud observability."""

import logging

import logfire

from bookstore import __version__
from bookstore.config import Settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure root logging at the configured level."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(settings.log_level)


def initialize_logfire(settings: Settings) -> None:
    """
    Initialize Logfire and instrument the MongoDB driver.

    Call once at startup, before any database client is created, so that
    the pymongo command listener is registered for every MongoClient.

    Instruments:
    - PyMongo (one span per database command)
    - Python logging (bridges to Logfire)

    Args:
        settings: Application settings containing Logfire token
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="bookstore",
            service_version=__version__,
        )

        logfire.instrument_pymongo()

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logger.info("Logfire cloud tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
