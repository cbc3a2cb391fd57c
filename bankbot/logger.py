import logging
import sys

from .config import APP_CONFIG

logger = logging.getLogger("bankbot")
logger.setLevel(APP_CONFIG["log_level"].upper())

handler = logging.StreamHandler(sys.stdout)

formatter = logging.Formatter(
    '%(asctime)s - [%(levelname)s] - %(name)s - (%(filename)s).%(funcName)s(%(lineno)d) - %(message)s'
)
handler.setFormatter(formatter)

if not logger.handlers:
    logger.addHandler(handler)
