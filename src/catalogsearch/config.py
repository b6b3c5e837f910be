"""
Configuration management for Catalog Search.
"""
import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

from .utils.validators import is_valid_url

load_dotenv()


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    SRC_DIR = PROJECT_ROOT / "src"

    # Catalog source
    CATALOG_URL: str = os.getenv("CATALOG_URL", "https://cumbakuruyemis.com/Kategori")
    # Bump to roll out a new target/schema without clearing the old marker
    CATALOG_VERSION: str = os.getenv("CATALOG_VERSION", "26")
    FLAG_DIR: Path = Path(os.getenv("FLAG_DIR", "flags"))
    # None means the HTTP client's own default (no timeout)
    REQUEST_TIMEOUT_S: Optional[float] = _optional_float(os.getenv("REQUEST_TIMEOUT_S"))

    # Document store
    # Options: "elasticsearch" or "memory" (in-process, nothing persisted)
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "elasticsearch")
    ELASTICSEARCH_URL: str = os.getenv("ELASTICSEARCH_URL", "http://localhost:9200")
    INDEX_NAME: str = os.getenv("INDEX_NAME", "cumbakuruyemish")

    # Search
    SEARCH_QUERY: str = os.getenv("SEARCH_QUERY", "badem")
    SEARCH_BOOST: float = float(os.getenv("SEARCH_BOOST", "3.0"))
    SEARCH_FUZZINESS: str = os.getenv("SEARCH_FUZZINESS", "AUTO")
    SEARCH_FETCH_SIZE: int = int(os.getenv("SEARCH_FETCH_SIZE", "50"))
    RESULT_LIMIT: int = int(os.getenv("RESULT_LIMIT", "10"))

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def marker_name(cls) -> str:
        """File name of the completion marker for the current catalog version."""
        return f"indexing_done_{cls.CATALOG_VERSION}.flag"

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Parse CORS_ORIGINS into a list (``["*"]`` allows everything)."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not is_valid_url(cls.CATALOG_URL):
            errors.append(f"Invalid CATALOG_URL: {cls.CATALOG_URL}")

        if cls.STORE_BACKEND not in ("elasticsearch", "memory"):
            errors.append(f"Invalid STORE_BACKEND: {cls.STORE_BACKEND}. Must be 'elasticsearch' or 'memory'")
        elif cls.STORE_BACKEND == "elasticsearch" and not is_valid_url(cls.ELASTICSEARCH_URL):
            errors.append(f"Invalid ELASTICSEARCH_URL: {cls.ELASTICSEARCH_URL}")

        if not cls.INDEX_NAME or cls.INDEX_NAME != cls.INDEX_NAME.lower():
            errors.append(f"INDEX_NAME must be a non-empty lowercase name, got: {cls.INDEX_NAME!r}")

        if not cls.SEARCH_QUERY.strip():
            errors.append("SEARCH_QUERY is empty")

        if cls.RESULT_LIMIT < 1:
            errors.append(f"RESULT_LIMIT must be positive, got: {cls.RESULT_LIMIT}")

        if cls.SEARCH_FETCH_SIZE < cls.RESULT_LIMIT:
            errors.append("SEARCH_FETCH_SIZE is smaller than RESULT_LIMIT; results will be cut short")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "catalog_url": cls.CATALOG_URL,
            "catalog_version": cls.CATALOG_VERSION,
            "store_backend": cls.STORE_BACKEND,
            "elasticsearch_url": cls.ELASTICSEARCH_URL,
            "index_name": cls.INDEX_NAME,
            "search_query": cls.SEARCH_QUERY,
            "result_limit": cls.RESULT_LIMIT,
            "flask_env": cls.FLASK_ENV,
            "log_level": cls.LOG_LEVEL,
        }
