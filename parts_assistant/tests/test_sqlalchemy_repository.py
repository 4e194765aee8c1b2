# test_sqlalchemy_repository.py
"""Tests for the SQLAlchemy catalog repository."""

from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError

from parts_assistant.core.exceptions import CatalogServiceError
from parts_assistant.data import DatabaseInitializer, SQLAlchemyProductRepository


@pytest.fixture
def repo(temp_db, sample_products):
    repository = SQLAlchemyProductRepository(temp_db)
    repository.add_many(sample_products)
    return repository


class TestSQLAlchemyProductRepository:
    """Test cases for catalog repository operations."""

    def test_add_many_and_count(self, repo, sample_products):
        assert repo.count() == len(sample_products)

    def test_get_by_part_number(self, repo):
        product = repo.get_by_part_number("PS11752778")

        assert product is not None
        assert product.id == "ps11752778"
        assert product.name == "Refrigerator Door Shelf Bin"
        assert product.brand == "Whirlpool"
        assert product.in_stock is True

    def test_get_by_part_number_ignores_case(self, repo):
        assert repo.get_by_part_number("ps11752778").part_number == "PS11752778"

    def test_get_missing_part_number(self, repo):
        assert repo.get_by_part_number("PS00000000") is None

    def test_list_fields_keep_order(self, repo, sample_products):
        stored = repo.get_by_part_number("PS11752778")

        assert stored.compatible_models == sample_products[0].compatible_models
        assert stored.replacement_parts == sample_products[0].replacement_parts
        assert stored.symptoms == sample_products[0].symptoms

    def test_find_by_replacement_part(self, repo):
        products = repo.find_by_replacement_part("w10321304")
        assert [p.part_number for p in products] == ["PS11752778"]

    def test_find_by_compatible_model(self, repo):
        products = repo.find_by_compatible_model("WDT780SAEM1")
        assert [p.part_number for p in products] == ["PS11746591", "PS11752778"]

    def test_find_by_unknown_model(self, repo):
        assert repo.find_by_compatible_model("NOPE123") == []

    def test_add_replaces_existing_product(self, repo, make_product):
        repo.add(make_product("PS11752778", name="Door Bin v2", compatible_models=["ABC123"]))

        updated = repo.get_by_part_number("PS11752778")
        assert updated.name == "Door Bin v2"
        assert updated.compatible_models == ["ABC123"]
        assert [p.part_number for p in repo.find_by_compatible_model("WDT780SAEM1")] == [
            "PS11746591"
        ]

    def test_repeated_ids_in_one_batch(self, temp_db, make_product):
        repository = SQLAlchemyProductRepository(temp_db)
        repository.add_many(
            [make_product("PS11111111", name="First"), make_product("PS11111111", name="Second")]
        )

        assert repository.count() == 1
        assert repository.get_by_part_number("PS11111111").name == "Second"

    def test_get_all_with_limit(self, repo):
        products = repo.get_all(limit=2)
        assert [p.part_number for p in products] == ["PS10065979", "PS11701542"]

    def test_clear(self, repo):
        repo.clear()
        assert repo.count() == 0
        assert repo.find_by_compatible_model("WDT780SAEM1") == []

    def test_database_errors_become_catalog_errors(self):
        database = Mock()
        database.get_session.side_effect = OperationalError("SELECT", {}, Exception("locked"))

        with pytest.raises(CatalogServiceError):
            SQLAlchemyProductRepository(database).get_by_part_number("PS11752778")


class TestDatabaseInitializer:

    def test_initialize_creates_tables(self, tmp_path):
        from parts_assistant.data import DatabaseManager

        manager = DatabaseManager(f"sqlite:///{tmp_path}/nested/catalog.db")
        try:
            DatabaseInitializer.initialize_database(manager)
            info = DatabaseInitializer.get_database_info(manager)
        finally:
            manager.engine.dispose()

        assert info["database_type"] == "SQLite"
        assert info["stats"]["total_products"] == 0
