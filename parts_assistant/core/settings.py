"""Centralized settings and configuration management."""

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)


def load_env_for_development() -> bool:
    """Load .env from the working directory only for local development"""
    if os.getenv("ENVIRONMENT", "development") != "development":
        return False
    return load_dotenv(find_dotenv(usecwd=True))


# Settings read the environment at class definition, so .env must load first
load_env_for_development()


class Settings:
    """Application settings and configuration"""

    # Base paths
    BASE_DIR = Path(__file__).parent.parent
    CONFIG_DIR = BASE_DIR / "config"
    DATA_DIR = Path(os.getenv("PARTS_DATA_DIR", Path.cwd() / "data"))

    # Catalog database
    DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/catalog.db")

    # Vector database
    VECTOR_DB_PATH = os.getenv("CHROMA_PATH", str(DATA_DIR / "chroma_db"))
    CHROMA_COLLECTION = os.getenv("CHROMA_COLLECTION", "partselect_products")
    EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "all-MiniLM-L6-v2")
    VECTOR_BATCH_SIZE = 50

    # Application settings
    ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Retrieval settings
    SEMANTIC_RESULT_LIMIT = int(os.getenv("SEMANTIC_RESULT_LIMIT", "3"))
    SEMANTIC_OVERSAMPLE_FACTOR = 3  # Extra candidates to survive brand filtering
    ROUTER_MAX_WORKERS = 2

    # Context block bounds
    MAX_CONTEXT_PRODUCTS = int(os.getenv("MAX_CONTEXT_PRODUCTS", "10"))
    MAX_LONG_TEXT_LENGTH = 1500  # Installation / troubleshooting text

    # Query pattern configuration
    QUERY_PATTERNS_PATH = os.getenv(
        "QUERY_PATTERNS_PATH", str(CONFIG_DIR / "query_patterns.yaml")
    )

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist"""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
