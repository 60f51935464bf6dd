from contextlib import asynccontextmanager
import logging

from app.ai.client import ModelClient
from app.core.config.tuning import get_tuning
from app.integrations.authorship import AuthorshipDetector
from app.services.orchestrator import TailoringOrchestrator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    tuning = get_tuning()
    model_client = ModelClient.from_config()
    detector = AuthorshipDetector.from_settings()
    app.state.model_client = model_client
    app.state.detector = detector
    app.state.orchestrator = TailoringOrchestrator(model_client, detector, tuning=tuning)
    logger.info("tailoring_ready model=%s max_retries=%s", model_client.model, model_client.max_retries)
    try:
        yield
    finally:
        await detector.aclose()
