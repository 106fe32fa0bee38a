import yaml
import os
from typing import List, Optional, Dict, Any, Literal
from pydantic import BaseModel, Field


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///./careergenie.db"


class StorageConfig(BaseModel):
    """Blob store for the original uploaded files."""
    backend: Literal["local", "supabase"] = "local"
    local_root: str = "./uploads"
    base_url: Optional[str] = None  # Public prefix for local file URLs
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    bucket: str = "resumes"
    timeout_seconds: int = 30


class GenerationProfile(BaseModel):
    """Output-size and temperature defaults for one LLM call type."""
    max_output_tokens: int = 1024
    temperature: float = 0.3


def _default_profiles() -> Dict[str, GenerationProfile]:
    return {
        "resume_extraction": GenerationProfile(max_output_tokens=2048, temperature=0.3),
        "cover_letter": GenerationProfile(max_output_tokens=1024, temperature=0.7),
        "interview_questions": GenerationProfile(max_output_tokens=2048, temperature=0.6),
        "skill_gap": GenerationProfile(max_output_tokens=2048, temperature=0.5),
        "chat": GenerationProfile(max_output_tokens=1024, temperature=0.7),
        "health_probe": GenerationProfile(max_output_tokens=5, temperature=0.0),
    }


class LlmConfig(BaseModel):
    enabled: bool = True
    project_id: Optional[str] = None
    region: str = "us-central1"
    model: str = "gemini-2.0-flash"

    # Strict mode: an LLM failure aborts the request instead of falling back
    # to heuristic extraction. Either flag turns it on.
    require_real_ai: bool = False
    allow_fallbacks: bool = True

    timeout_seconds: float = 60.0
    # Access tokens are renewed this long before they actually expire
    token_refresh_margin_seconds: int = 300
    profiles: Dict[str, GenerationProfile] = Field(default_factory=_default_profiles)

    @property
    def strict(self) -> bool:
        return self.require_real_ai or not self.allow_fallbacks

    def profile_for(self, call_type: str) -> GenerationProfile:
        """Return the generation profile for a call type, falling back to defaults."""
        if call_type in self.profiles:
            return self.profiles[call_type]
        return _default_profiles().get(call_type, GenerationProfile())


class AuthConfig(BaseModel):
    firebase_project_id: Optional[str] = None
    credentials_file: Optional[str] = None  # Service account JSON; ADC when unset
    check_revoked: bool = True


class RateLimitConfig(BaseModel):
    ai_max_requests: int = 15
    ai_window_seconds: int = 60
    upload_limit: str = "10/minute"  # slowapi limit string, keyed by client IP


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "production"  # "development" exposes error details
    max_upload_bytes: int = 10 * 1024 * 1024
    cors_origins: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    llm: LlmConfig = Field(default_factory=LlmConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    web: WebConfig = Field(default_factory=WebConfig)


_TRUTHY = {"1", "true", "yes", "on"}

# (env var, config section, key, converter)
_ENV_OVERRIDES = [
    ("DATABASE_URL", "database", "url", str),
    ("STORAGE_BACKEND", "storage", "backend", str),
    ("SUPABASE_URL", "storage", "supabase_url", str),
    ("SUPABASE_SERVICE_ROLE_KEY", "storage", "supabase_service_key", str),
    ("GOOGLE_CLOUD_PROJECT", "llm", "project_id", str),
    ("VERTEX_REGION", "llm", "region", str),
    ("VERTEX_MODEL", "llm", "model", str),
    ("AI_ENABLED", "llm", "enabled", lambda v: v.strip().lower() in _TRUTHY),
    ("REQUIRE_REAL_AI", "llm", "require_real_ai", lambda v: v.strip().lower() in _TRUTHY),
    ("ALLOW_AI_FALLBACKS", "llm", "allow_fallbacks", lambda v: v.strip().lower() in _TRUTHY),
    ("FIREBASE_PROJECT_ID", "auth", "firebase_project_id", str),
    ("GOOGLE_APPLICATION_CREDENTIALS", "auth", "credentials_file", str),
    ("AI_RATE_MAX", "rate_limit", "ai_max_requests", int),
    ("AI_RATE_WINDOW_SECONDS", "rate_limit", "ai_window_seconds", int),
    ("WEB_HOST", "web", "host", str),
    ("WEB_PORT", "web", "port", int),
    ("APP_ENV", "web", "environment", str),
]


def apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay environment variables onto raw config data."""
    for env_name, section, key, convert in _ENV_OVERRIDES:
        value = os.environ.get(env_name)
        if value is None or value == "":
            continue
        if section not in data or data[section] is None:
            data[section] = {}
        data[section][key] = convert(value)
    return data


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another dir), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

    return AppConfig(**apply_env_overrides(data))
