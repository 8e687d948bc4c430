"""dirtree - in-memory directory tree simulator."""

from loguru import logger

__version__ = "0.1.0"

# Silent when used as a library; setup_logging() turns it back on
logger.disable("dirtree")
