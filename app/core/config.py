"""
Settings for the job board matching service.

Values come from environment variables or a local ``.env`` file. They cover
the HTTP surface, PostgreSQL, the embedding model, the pgvector index and the
matching limits.
"""

from functools import lru_cache
from typing import List, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import structlog

from app.core.system_constants import DEFAULT_EMBEDDING_DIMENSION, JOB_EMBEDDING_INDEX_NAME

logger = structlog.get_logger(__name__)

KNOWN_ENVIRONMENTS = ("local", "development", "staging", "production", "test")
DETAIL_EXPOSING_ENVIRONMENTS = ("local", "development", "test")


class Settings(BaseSettings):
    """
    Runtime configuration. Defaults target a developer laptop with a local
    PostgreSQL and the small MiniLM embedding model.
    """

    # Deployment
    ENVIRONMENT: str = Field(
        default="local",
        description="Deployment stage; one of local, development, staging, production, test"
    )
    DEBUG: bool = Field(
        default=False,
        description="Echo SQL and enable verbose diagnostics"
    )
    APP_NAME: str = Field(
        default="Job Board Matching API",
        description="Title shown in OpenAPI docs and the root endpoint"
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Version reported by health endpoints"
    )

    # HTTP
    HOST: str = Field(
        default="0.0.0.0",
        description="Bind address for uvicorn"
    )
    PORT: int = Field(
        default=8000,
        description="Bind port for uvicorn"
    )
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed browser origins, comma separated, or *"
    )
    USER_ID_HEADER: str = Field(
        default="X-User-Id",
        description="Request header the gateway fills with the authenticated user id"
    )

    # Logging
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Minimum structlog level"
    )
    LOG_FORMAT: str = Field(
        default="auto",
        description="json, console, or auto (console on a TTY)"
    )

    # PostgreSQL
    POSTGRES_URL: Optional[str] = Field(
        default=None,
        description="Full DSN; overrides the individual POSTGRES_* parts"
    )
    POSTGRES_HOST: str = Field(
        default="localhost",
        description="Database host"
    )
    POSTGRES_PORT: int = Field(
        default=5432,
        description="Database port"
    )
    POSTGRES_USER: str = Field(
        default="jobboard",
        description="Database role"
    )
    POSTGRES_PASSWORD: str = Field(
        default="jobboard",
        description="Database role password"
    )
    POSTGRES_DB: str = Field(
        default="jobboard",
        description="Database holding jobs and candidate_profiles"
    )
    DATABASE_POOL_SIZE: int = Field(
        default=10,
        description="Persistent connections kept by the async engine"
    )
    DATABASE_MAX_OVERFLOW: int = Field(
        default=20,
        description="Extra connections allowed above the pool size under load"
    )

    # CV upload and extraction
    MAX_FILE_SIZE: int = Field(
        default=10 * 1024 * 1024,
        description="Largest accepted CV upload, in bytes"
    )
    CV_MIN_TEXT_LENGTH: int = Field(
        default=50,
        description="Minimum characters of cleaned text required from a CV"
    )
    CV_MAX_TEXT_LENGTH: int = Field(
        default=30000,
        description="Cap on stored and embedded CV text"
    )

    # Embeddings
    EMBEDDING_MODEL_NAME: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="sentence-transformers model used for jobs and CVs"
    )
    EMBEDDING_DIMENSION: int = Field(
        default=DEFAULT_EMBEDDING_DIMENSION,
        description="Vector length produced by the model and stored on jobs"
    )
    EMBEDDING_DEVICE: Optional[str] = Field(
        default=None,
        description="Torch device for the model; unset lets the library choose"
    )
    EMBEDDING_PRELOAD: bool = Field(
        default=False,
        description="Load the model during startup instead of on first request"
    )

    # pgvector index
    VECTOR_INDEX_ENABLED: bool = Field(
        default=True,
        description="Use the HNSW index when it is available"
    )
    VECTOR_INDEX_NAME: str = Field(
        default=JOB_EMBEDDING_INDEX_NAME,
        description="Name of the HNSW index on jobs.embedding"
    )
    VECTOR_CANDIDATE_POOL_SIZE: int = Field(
        default=200,
        description="Candidates examined by the native index per query"
    )

    # Free-text search
    SEARCH_SIMILARITY_THRESHOLD: float = Field(
        default=0.3,
        description="Relevance floor applied to free-text semantic search"
    )
    SEARCH_MAX_RESULTS: int = Field(
        default=20,
        description="Semantic results returned per query"
    )
    LEXICAL_MAX_RESULTS: int = Field(
        default=50,
        description="Keyword results returned per query"
    )

    # CV matching
    MATCH_DEFAULT_LIMIT: int = Field(
        default=20,
        description="Matches returned when the caller gives no limit"
    )
    MATCH_MAX_LIMIT: int = Field(
        default=50,
        description="Upper bound on requested CV matches"
    )
    MATCH_MIN_RESULTS: int = Field(
        default=10,
        description="Pad CV matches with recent jobs below this count"
    )
    SKILL_TAG_LIMIT: int = Field(
        default=30,
        description="Maximum skill tags stored on a candidate profile"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator('ENVIRONMENT')
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in KNOWN_ENVIRONMENTS:
            logger.warning("Unrecognised ENVIRONMENT, using 'local'", value=v)
            return 'local'
        return v

    @field_validator('SEARCH_SIMILARITY_THRESHOLD')
    @classmethod
    def validate_similarity_threshold(cls, v: float) -> float:
        if not -1.0 <= v <= 1.0:
            raise ValueError("SEARCH_SIMILARITY_THRESHOLD must be within [-1, 1]")
        return v

    def is_production(self) -> bool:
        return self.ENVIRONMENT == 'production'

    def exposes_error_details(self) -> bool:
        """Whether 500 responses may carry the underlying exception message."""
        return self.ENVIRONMENT in DETAIL_EXPOSING_ENVIRONMENTS

    def get_cors_origins(self) -> List[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def get_postgres_url(self) -> str:
        """DSN in the plain ``postgresql://`` form; callers pick the driver."""
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process; tests call ``get_settings.cache_clear()``."""
    settings = Settings()

    logger.info(
        "Settings loaded",
        environment=settings.ENVIRONMENT,
        embedding_model=settings.EMBEDDING_MODEL_NAME,
        embedding_dimension=settings.EMBEDDING_DIMENSION,
        vector_index_enabled=settings.VECTOR_INDEX_ENABLED,
        similarity_threshold=settings.SEARCH_SIMILARITY_THRESHOLD
    )

    return settings
