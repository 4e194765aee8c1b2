# test_vector_service.py
"""Tests for the ChromaDB-backed vector service."""

import uuid
from unittest.mock import Mock

import chromadb
import numpy as np
import pytest

from parts_assistant.core.exceptions import VectorServiceError
from parts_assistant.services import ProductVectorService

VOCABULARY = ["ice", "maker", "drain", "pump", "door", "bin", "spray", "valve", "rack"]


class KeywordEmbedding:
    """Deterministic bag-of-words embedding for tests"""

    def encode(self, text):
        words = text.lower().replace(".", " ").replace(",", " ").split()
        # Constant first dimension keeps every vector non-zero
        return np.array([1.0] + [float(words.count(term)) for term in VOCABULARY])


@pytest.fixture
def vector_service():
    return ProductVectorService(
        collection_name=f"test_{uuid.uuid4().hex}",
        client=chromadb.EphemeralClient(),
        embedding_model=KeywordEmbedding(),
    )


class TestProductVectorService:

    def test_empty_collection_returns_no_matches(self, vector_service):
        assert vector_service.search_products("drain pump") == []

    def test_add_and_search(self, vector_service, sample_products):
        added = vector_service.add_products(sample_products)

        matches = vector_service.search_products("drain pump drain pump", limit=2)

        assert added == len(sample_products)
        assert vector_service.count() == len(sample_products)
        assert len(matches) == 2
        record, score = matches[0]
        assert record.part_number == "PS10065979"
        assert 0.0 <= score <= 1.0
        assert matches[0][1] >= matches[1][1]

    def test_search_round_trips_record_fields(self, vector_service, sample_products):
        vector_service.add_products(sample_products)

        record, _ = vector_service.search_products("ice maker ice maker", limit=1)[0]
        original = next(p for p in sample_products if p.id == record.id)

        assert record.compatible_models == original.compatible_models
        assert record.replacement_parts == original.replacement_parts
        assert record.in_stock == original.in_stock

    def test_upsert_does_not_duplicate(self, vector_service, sample_products):
        vector_service.add_products(sample_products)
        vector_service.add_products(sample_products[:2])

        assert vector_service.count() == len(sample_products)

    def test_clear_collection(self, vector_service, sample_products):
        vector_service.add_products(sample_products)
        vector_service.clear_collection()

        assert vector_service.count() == 0

    def test_collection_stats(self, vector_service):
        stats = vector_service.get_collection_stats()
        assert stats["total_products"] == 0
        assert stats["collection_name"] == vector_service.collection_name

    def test_embedding_failure(self, vector_service):
        vector_service.embedding_model = Mock()
        vector_service.embedding_model.encode.side_effect = RuntimeError("out of memory")

        with pytest.raises(VectorServiceError):
            vector_service.embed("drain pump")

    def test_initialization_failure(self):
        client = Mock()
        client.get_or_create_collection.side_effect = RuntimeError("bad settings")

        with pytest.raises(VectorServiceError):
            ProductVectorService(client=client, embedding_model=KeywordEmbedding())
