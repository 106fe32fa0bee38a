"""
Access token provider for Google Cloud APIs.

Tokens come from Application Default Credentials (service account, workload
identity or gcloud user credentials) and are kept in the process cache
until shortly before they expire.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

import google.auth
import google.auth.transport.requests
from google.auth.exceptions import GoogleAuthError

from core.cache import ExpiringCache
from core.errors import LLMExtractionError

logger = logging.getLogger(__name__)

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
TOKEN_CACHE_KEY = "gcp:access_token"

# Used when the credentials do not report an expiry
DEFAULT_TOKEN_LIFETIME_SECONDS = 3600


class AccessTokenProvider:
    """Hands out short-lived bearer tokens, renewing them before expiry."""

    def __init__(
        self,
        cache: ExpiringCache,
        refresh_margin_seconds: int = 300,
        credentials=None,
    ):
        self.cache = cache
        self.refresh_margin_seconds = refresh_margin_seconds
        self._credentials = credentials

    def _load_credentials(self):
        if self._credentials is None:
            self._credentials, _ = google.auth.default(scopes=[CLOUD_PLATFORM_SCOPE])
        return self._credentials

    def get_token(self) -> str:
        """Return a cached token or fetch a fresh one.

        Raises:
            LLMExtractionError: If no credentials are available or refresh fails
        """
        token = self.cache.get(TOKEN_CACHE_KEY)
        if token:
            return token

        try:
            credentials = self._load_credentials()
            credentials.refresh(google.auth.transport.requests.Request())
        except GoogleAuthError as e:
            raise LLMExtractionError(f"Could not obtain Google Cloud access token: {e}") from e

        token = credentials.token
        if not token:
            raise LLMExtractionError("Google Cloud credentials returned an empty access token")

        ttl = self._seconds_until(credentials.expiry) - self.refresh_margin_seconds
        self.cache.set(TOKEN_CACHE_KEY, token, ttl)
        logger.info(f"Refreshed Google Cloud access token (cached for {max(ttl, 0):.0f}s)")
        return token

    @staticmethod
    def _seconds_until(expiry: Optional[datetime]) -> float:
        if expiry is None:
            return DEFAULT_TOKEN_LIFETIME_SECONDS
        # google-auth reports naive UTC datetimes
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=timezone.utc)
        return (expiry - datetime.now(timezone.utc)).total_seconds()
