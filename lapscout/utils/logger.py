# lapscout/utils/logger.py
from loguru import logger
import os
import sys

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")

logger.remove()
logger.add(
    sys.stderr,
    level=LOG_LEVEL,
    colorize=True,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <magenta>lapscout</magenta> | <cyan>{message}</cyan>",
)

# optional plain-text copy for long-running servers
if LOG_FILE:
    logger.add(
        LOG_FILE,
        level=LOG_LEVEL,
        rotation="10 MB",
        retention=5,
        enqueue=True,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
    )
