'''
Logging configuration for the gitkit client.
This module sets up logging to both a file and the console using Loguru.
'''
import sys
from pathlib import Path
from loguru import logger
from gitkit.config import config

LOG_PATH = Path(config.LOG_FILE)

# Ensure log directory exists
LOG_PATH.parent.mkdir(parents=True, exist_ok=True)

# Remove any default handlers
logger.remove()

# File handler (10MB max, keep 5 backups)
logger.add(
    LOG_PATH,
    rotation="10 MB",
    retention=5,
    level="DEBUG",
    format=
    "{time:YYYY-MM-DD HH:mm:ss,SSS} {level: <8} [{file}:{line}] {message}",
)

# Console handler
logger.add(
    sys.stdout,
    level=config.LOG_LEVEL,
    format=
    "{time:YYYY-MM-DD HH:mm:ss,SSS} {level: <8} [{file}:{line}] {message}",
)
