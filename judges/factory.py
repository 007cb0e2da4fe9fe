"""Factory for creating judges from their stored configuration."""

import logging

from debate_engine.models import Judge
from models.manager import ModelManager
from .ai_judge import AIJudge
from .base import BaseJudge

logger = logging.getLogger(__name__)


def create_judges(judges: list[Judge], model_manager: ModelManager) -> list[BaseJudge]:
    """Create one AI judge per active judge configuration, in order."""
    if not judges:
        logger.info("No judges specified - debate will complete without evaluation")
        return []

    created: list[BaseJudge] = []
    for judge in judges:
        if not judge.is_active:
            logger.info(f"Skipping inactive judge {judge.name}")
            continue
        created.append(AIJudge(judge, model_manager))

    logger.info(f"Created {len(created)} AI judge(s)")
    return created
