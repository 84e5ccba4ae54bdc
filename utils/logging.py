"""Process-wide logging for the portal and its startup tasks."""
import logging
import sys

# Driver chatter that drowns out request logs at DEBUG
NOISY_LOGGERS = ("pymongo", "pymongo.topology", "pymongo.connection", "pymongo.serverSelection")


def configure_logging(level: str = "INFO") -> None:
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return  # uvicorn or pytest installed handlers already
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    )
    root.setLevel(level.upper())
    root.addHandler(handler)


logger = logging.getLogger("operator_portal")
