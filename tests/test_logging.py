from loguru import logger

from market_insights.core import logging as log_setup


def test_file_sink_is_installed():
    logger.info("[Test] file sink check")
    logger.complete()
    assert (log_setup.LOG_DIR / "app.log").exists()
