# database.py
"""Database initialization utilities."""

import logging
from pathlib import Path
from typing import Optional

from .models import DatabaseManager, db_manager

logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """Handles catalog database initialization"""

    @staticmethod
    def initialize_database(manager: Optional[DatabaseManager] = None) -> DatabaseManager:
        """Initialize database with tables and indexes"""
        manager = manager or db_manager
        try:
            logger.info("Initializing catalog database...")
            logger.info(f"Database URL: {manager.database_url}")

            # Ensure data directory exists
            if manager.database_url.startswith("sqlite:///"):
                db_path = Path(manager.database_url.replace("sqlite:///", ""))
                db_path.parent.mkdir(parents=True, exist_ok=True)

            manager.create_tables()

            stats = manager.get_table_stats()
            logger.info(f"Database initialized successfully: {stats}")
            return manager

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    @staticmethod
    def get_database_info(manager: Optional[DatabaseManager] = None):
        """Get database connection information"""
        manager = manager or db_manager
        try:
            return {
                "database_type": "SQLite" if "sqlite" in manager.database_url else "Other",
                "connection_status": "Connected",
                "stats": manager.get_table_stats(),
            }
        except Exception as e:
            return {
                "database_type": "Unknown",
                "connection_status": "Failed",
                "error": str(e),
            }


def init_database(manager: Optional[DatabaseManager] = None) -> DatabaseManager:
    """Convenience function to initialize database"""
    return DatabaseInitializer.initialize_database(manager)
