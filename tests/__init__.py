#!/usr/bin/env python3
"""
Test suite for the CareerGenie API.

All tests run without network access or external services:

    # Run all tests
    uv run python -m pytest tests/ -v

    # Using unittest (TestCase-based modules only)
    uv run python -m unittest discover tests -v

The database is in-memory SQLite, the blob store writes to a temporary
directory, and the LLM provider and Firebase verifier are replaced by the
fakes in tests/mocks.
"""

AUTH_HEADERS = {"Authorization": "Bearer valid-token"}
OTHER_USER_HEADERS = {"Authorization": "Bearer other-token"}


def build_test_config(blob_root: str, **web_overrides):
    """AppConfig wired for in-memory SQLite and a local blob directory."""
    from core.config_loader import AppConfig, DatabaseConfig, StorageConfig, WebConfig

    web = WebConfig(**{"environment": "development", **web_overrides})
    return AppConfig(
        database=DatabaseConfig(url="sqlite://"),
        storage=StorageConfig(backend="local", local_root=blob_root),
        web=web,
    )


def build_test_context(config, llm_provider=None, strict: bool = False, llm_enabled: bool = True):
    """AppContext with real extraction, persistence and storage, and a fake LLM."""
    from core.app_context import AppContext
    from core.cache import ExpiringCache
    from database.database import Database
    from etl.resume.orchestrator import ExtractionPolicy, ResumeExtractionOrchestrator
    from etl.resume.text_extractor import TextExtractor
    from storage.blob_store import build_blob_store

    database = Database(config.database.url)
    database.create_all()

    orchestrator = ResumeExtractionOrchestrator(
        text_extractor=TextExtractor(),
        llm_provider=llm_provider,
        policy=ExtractionPolicy(llm_enabled=llm_enabled, strict=strict),
    )
    return AppContext(
        config=config,
        cache=ExpiringCache(),
        database=database,
        blob_store=build_blob_store(config.storage),
        orchestrator=orchestrator,
        llm_provider=llm_provider,
    )


def build_test_app(context, identity_verifier=None):
    """FastAPI app around ``context`` with upload rate limiting disabled."""
    from tests.mocks.llm_mocks import StaticIdentityVerifier
    from web.backend.app import create_app
    from web.backend.routers.resume import limiter

    limiter.enabled = False
    return create_app(
        context=context,
        identity_verifier=identity_verifier or StaticIdentityVerifier(),
    )
