# market_insights/core/logging.py
# -----------------------------------------------------------------------------
# Loguru setup
# - rotating file sink + stderr
# - imported once from main.py
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from market_insights.core.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(exist_ok=True, parents=True)

logger.remove()  # drop the default handler
logger.add(sys.stderr, level=settings.LOG_LEVEL)
logger.add(
    LOG_DIR / "app.log",
    rotation="10 MB",
    retention=10,  # rotated files kept
    enqueue=True,  # safe across worker processes
    backtrace=True,
    diagnose=settings.ENV == "dev",
    level=settings.LOG_LEVEL,
)
