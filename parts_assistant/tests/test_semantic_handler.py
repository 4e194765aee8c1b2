# test_semantic_handler.py
"""Tests for similarity search with brand and model constraints."""

import pytest

from parts_assistant.core.exceptions import VectorServiceError
from parts_assistant.query_handlers import (
    ExtractedEntities,
    MatchOrigin,
    MatchReason,
    SemanticHandler,
)


@pytest.fixture
def products_by_number(sample_products):
    return {product.part_number: product for product in sample_products}


@pytest.fixture
def handler(mock_vector_service, catalog):
    return SemanticHandler(mock_vector_service, catalog, default_limit=2, oversample_factor=3)


class TestSemanticHandler:
    """Similarity search layered over model-compatibility fetches."""

    def test_search_text_includes_brands(self):
        entities = ExtractedEntities(brands=("whirlpool",))
        assert (
            SemanticHandler.build_search_text("ice maker not working", entities)
            == "ice maker not working whirlpool"
        )

    def test_search_text_without_brands(self):
        assert SemanticHandler.build_search_text("hello", ExtractedEntities()) == "hello"

    def test_oversamples_candidates(self, handler, mock_vector_service):
        handler.lookup("drain pump", ExtractedEntities())

        mock_vector_service.embed.assert_called_once_with("drain pump")
        mock_vector_service.similarity_search.assert_called_once_with([0.1, 0.2, 0.3], k=6)

    def test_similarity_hits_are_limited(self, handler, mock_vector_service, sample_products):
        mock_vector_service.similarity_search.return_value = [
            (product, 0.9 - i * 0.1) for i, product in enumerate(sample_products)
        ]

        results = handler.lookup("appliance part", ExtractedEntities())

        assert len(results) == 2
        assert all(r.origin == MatchOrigin.SEMANTIC for r in results)
        assert all(r.match_reason == MatchReason.SIMILARITY for r in results)
        assert results[0].relevance_score == pytest.approx(0.9)

    def test_brand_filter_skips_other_brands(
        self, handler, mock_vector_service, products_by_number
    ):
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS2358880"], 0.95),
            (products_by_number["PS11701542"], 0.80),
            (products_by_number["PS10065979"], 0.70),
        ]
        entities = ExtractedEntities(brands=("whirlpool",))

        results = handler.lookup("ice maker not working on my Whirlpool fridge", entities)

        assert [r.record.part_number for r in results] == ["PS11701542"]
        mock_vector_service.embed.assert_called_once_with(
            "ice maker not working on my Whirlpool fridge whirlpool"
        )

    def test_model_compatible_records_included(self, handler):
        entities = ExtractedEntities(model_numbers=("WDT780SAEM1",))

        results = handler.lookup("parts for WDT780SAEM1", entities)

        assert {r.record.part_number for r in results} == {"PS11752778", "PS11746591"}
        assert all(r.match_reason == MatchReason.MODEL_COMPATIBILITY for r in results)
        assert all(r.origin == MatchOrigin.SEMANTIC for r in results)

    def test_model_compatible_record_gains_similarity_score(
        self, handler, mock_vector_service, products_by_number
    ):
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS11746591"], 0.88),
        ]
        entities = ExtractedEntities(model_numbers=("WDT780SAEM1",))

        results = handler.lookup("rack for WDT780SAEM1", entities)

        by_number = {r.record.part_number: r for r in results}
        assert by_number["PS11746591"].relevance_score == pytest.approx(0.88)
        assert by_number["PS11746591"].match_reason == MatchReason.MODEL_COMPATIBILITY
        assert by_number["PS11752778"].relevance_score is None

    def test_vector_failure_propagates(self, handler, mock_vector_service):
        mock_vector_service.similarity_search.side_effect = VectorServiceError("index offline")

        with pytest.raises(VectorServiceError):
            handler.lookup("drain pump", ExtractedEntities())
