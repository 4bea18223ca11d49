import logging
import sys

from studentdb_config import settings


def setup_logging(level=None):
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    return logging.getLogger("studentdb")


logger = setup_logging()
