import logging
import os


def configure_logging() -> None:
    """Configure application logging; driver chatter stays at WARNING."""
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    for noisy in ("pymongo", "stripe"):
        logging.getLogger(noisy).setLevel(max(logging.WARNING, logging.getLogger().level))
