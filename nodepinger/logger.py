"""Console logging setup."""

import sys
from loguru import logger

LOG_FORMAT = (
    "{extra[prefix]} | <cyan>{time:YYYY-MM-DD}</cyan> | <cyan>{time:HH:mm:ss}</cyan> | "
    "<level>{level: <7}</level> | <level>{message}</level>"
)


def setup_logging(level: str = "INFO", prefix: str = "BLESS NETWORK") -> None:
    """Replace loguru's default sink with the leveled console format."""
    logger.remove()
    logger.configure(extra={"prefix": prefix})
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)
