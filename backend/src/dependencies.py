"""Global FastAPI dependencies and service wiring.

The match orchestrator is built once at startup (catalog repository, oracle
provider, analytics sink) and shared read-only by every request.
"""

import logging

from fastapi import HTTPException, Request, status
from sqlalchemy.orm import sessionmaker

from catalog.repository import SqlCatalogRepository
from config import Settings
from infrastructure.ai.openai_provider import OpenAIOracleProvider
from matching.analytics import AnalyticsSinkPort, BackgroundAnalyticsSink, NullAnalyticsSink, SqlAnalyticsSink
from matching.config import MatchingConfig
from matching.orchestrator import MatchOrchestrator
from matching.ports import MatcherPort

logger = logging.getLogger(__name__)


def build_analytics_sink(settings: Settings, session_factory: sessionmaker) -> AnalyticsSinkPort:
    """Background SQL sink, or a no-op sink when analytics is disabled."""
    if not settings.ANALYTICS_ENABLED:
        return NullAnalyticsSink()
    return BackgroundAnalyticsSink(SqlAnalyticsSink(session_factory), max_workers=settings.ANALYTICS_WORKERS)


def build_orchestrator(
    settings: Settings,
    session_factory: sessionmaker,
    analytics: AnalyticsSinkPort
) -> MatchOrchestrator:
    """Wire the matching pipeline from settings.

    Without OPENAI_API_KEY the generative stage is disabled.
    """
    config = MatchingConfig.from_settings(settings)
    catalog = SqlCatalogRepository(session_factory, text_search_config=config.text_search_language)

    oracle = None
    if settings.OPENAI_API_KEY:
        oracle = OpenAIOracleProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.ORACLE_MODEL,
            temperature=settings.ORACLE_TEMPERATURE,
        )
    else:
        logger.warning("OPENAI_API_KEY not set, generative fallback disabled")

    return MatchOrchestrator(catalog=catalog, config=config, oracle=oracle, analytics=analytics)


def get_orchestrator(request: Request) -> MatcherPort:
    """Dependency returning the shared match orchestrator.

    Raises:
        HTTPException 503: If the application has not finished starting up
    """
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Matching service is not initialized",
        )
    return orchestrator
