import logging
import sys

from config import settings

LOG_LEVEL = logging.getLevelName(settings.LOG_LEVEL.upper())
if not isinstance(LOG_LEVEL, int):
    LOG_LEVEL = logging.INFO

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

def get_logger(name: str):
    return logging.getLogger(name)
