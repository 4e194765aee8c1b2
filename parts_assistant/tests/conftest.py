# conftest.py
"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from unittest.mock import Mock

import pytest

from parts_assistant.core import ProductRecord, VectorSearchService
from parts_assistant.data import DatabaseManager, InMemoryProductRepository
from parts_assistant.query_handlers import QueryConfigLoader
from parts_assistant.services import DataLoader


@pytest.fixture
def sample_products():
    """Built-in sample catalog."""
    return DataLoader.get_sample_products()


@pytest.fixture
def catalog(sample_products):
    """In-memory catalog loaded with the sample products."""
    return InMemoryProductRepository(sample_products)


@pytest.fixture
def query_config():
    """Query configuration loaded from the packaged YAML file."""
    return QueryConfigLoader()


@pytest.fixture
def mock_vector_service():
    """Create a mock vector service with no hits."""
    vector_service = Mock(spec=VectorSearchService)
    vector_service.embed.return_value = [0.1, 0.2, 0.3]
    vector_service.similarity_search.return_value = []
    return vector_service


@pytest.fixture
def make_product():
    """Factory for small catalog records."""

    def _make(part_number, brand="Whirlpool", **fields):
        return ProductRecord.from_dict(
            {
                "part_number": part_number,
                "name": fields.pop("name", f"Part {part_number}"),
                "brand": brand,
                **fields,
            }
        )

    return _make


@pytest.fixture
def temp_db():
    """Create a temporary test database for each test."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as tmp_file:
        temp_db_path = tmp_file.name

    manager = DatabaseManager(f"sqlite:///{temp_db_path}")
    manager.create_tables()
    try:
        yield manager
    finally:
        manager.engine.dispose()
        Path(temp_db_path).unlink(missing_ok=True)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "test_sqlalchemy_repository" in item.nodeid or "test_vector_service" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
