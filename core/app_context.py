import logging
from dataclasses import dataclass
from typing import Optional

from core.cache import ExpiringCache
from core.config_loader import AppConfig, LlmConfig
from core.llm.credentials import AccessTokenProvider
from core.llm.interfaces import LLMProvider
from core.llm.vertex_service import VertexAIService
from database.database import Database
from etl.resume.orchestrator import ExtractionPolicy, ResumeExtractionOrchestrator
from etl.resume.text_extractor import TextExtractor
from storage.blob_store import BlobStore, build_blob_store

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    One instance per process. The cache is the only shared mutable state;
    it is handed explicitly to whatever needs it. DB access should be
    obtained via resume_uow(context.database) per request.
    """
    config: AppConfig
    cache: ExpiringCache
    database: Database
    blob_store: BlobStore
    orchestrator: ResumeExtractionOrchestrator
    llm_provider: Optional[LLMProvider] = None

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        cache = ExpiringCache()

        database = Database(config.database.url)
        database.create_all()

        llm_provider = cls._build_llm_provider(config.llm, cache)

        orchestrator = ResumeExtractionOrchestrator(
            text_extractor=TextExtractor(),
            llm_provider=llm_provider,
            policy=ExtractionPolicy.from_config(config.llm),
        )

        return cls(
            config=config,
            cache=cache,
            database=database,
            blob_store=build_blob_store(config.storage),
            orchestrator=orchestrator,
            llm_provider=llm_provider,
        )

    @staticmethod
    def _build_llm_provider(llm_config: LlmConfig, cache: ExpiringCache) -> Optional[LLMProvider]:
        """Build the Vertex AI client, or None when AI is disabled or unconfigured."""
        if not llm_config.enabled:
            logger.info("LLM extraction disabled by configuration")
            return None
        if not llm_config.project_id:
            logger.warning("No Google Cloud project configured; LLM extraction unavailable")
            return None

        token_provider = AccessTokenProvider(
            cache=cache,
            refresh_margin_seconds=llm_config.token_refresh_margin_seconds,
        )
        logger.info(
            f"Using Vertex AI model {llm_config.model} in {llm_config.region} "
            f"(strict={llm_config.strict})"
        )
        return VertexAIService(llm_config, token_provider)

    def close(self) -> None:
        """Drop cached tokens and counters and release database connections."""
        self.cache.clear()
        self.database.dispose()
