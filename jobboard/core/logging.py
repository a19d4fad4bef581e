import logging

from jobboard.core.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(settings: Settings) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)
    # uvicorn installs its own handlers; keep our level on the package logger
    logging.getLogger("jobboard").setLevel(settings.log_level.upper())
