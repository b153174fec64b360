"""Session entry point for browser driver adapters."""

from typing import List

from autosolver.core.config import Settings, settings
from autosolver.core.logging import get_logger, setup_logging
from autosolver.models.models import LessonResult
from autosolver.session.orchestrator import LessonOrchestrator
from autosolver.session.page import Page

logger = get_logger(__name__)


def run(page: Page, config: Settings = settings) -> List[LessonResult]:
    """Log in on ``page`` and solve every lesson with a fresh translation cache."""
    setup_logging(config.log_level, config.log_file)
    logger.info("Logging initialized successfully")

    orchestrator = LessonOrchestrator(config=config)
    try:
        return orchestrator.run_session(page)
    finally:
        orchestrator.shutdown()
