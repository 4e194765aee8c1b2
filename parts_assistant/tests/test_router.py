# test_router.py
"""Tests for the hybrid query router."""

from unittest.mock import Mock

import pytest

from parts_assistant.core.exceptions import (
    CatalogServiceError,
    RetrievalError,
    VectorServiceError,
)
from parts_assistant.query_handlers import HybridQueryRouter, MatchOrigin


@pytest.fixture
def router(catalog, mock_vector_service, query_config):
    return HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)


@pytest.fixture
def products_by_number(sample_products):
    return {product.part_number: product for product in sample_products}


class TestRouteQuery:
    """End-to-end routing scenarios."""

    def test_compatibility_question_runs_both_strategies(
        self, router, mock_vector_service, products_by_number
    ):
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS11701542"], 0.91),
        ]
        query = "Is PS11752778 compatible with WDT780SAEM1?"

        routed = router.route_query(query)

        assert routed.analysis.query_type == "compatibility"
        assert routed.analysis.part_numbers == ("PS11752778",)
        assert routed.analysis.model_numbers == ("WDT780SAEM1",)
        mock_vector_service.similarity_search.assert_called_once()
        assert routed.structured_matches
        assert routed.combined[0].record.part_number == "PS11752778"
        assert routed.combined[0].origin == MatchOrigin.STRUCTURED

    def test_brand_troubleshooting_is_semantic_only(
        self, router, catalog, mock_vector_service, products_by_number
    ):
        catalog.get_by_part_number = Mock(wraps=catalog.get_by_part_number)
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS2358880"], 0.93),
            (products_by_number["PS11701542"], 0.85),
        ]
        query = "ice maker not working on my Whirlpool fridge"

        routed = router.route_query(query)

        assert routed.analysis.query_type == "troubleshooting"
        assert routed.analysis.brands == ("whirlpool",)
        assert routed.structured_matches == []
        catalog.get_by_part_number.assert_not_called()
        mock_vector_service.embed.assert_called_once_with(f"{query} whirlpool")
        assert [r.record.part_number for r in routed.combined] == ["PS11701542"]

    def test_general_query_with_no_hits_is_empty(self, router):
        routed = router.route_query("hello")

        assert routed.analysis.query_type == "general"
        assert routed.combined == []
        assert routed.is_empty
        assert router.format_context(routed, "hello") is None

    def test_catalog_connectivity_failure_raises(self, mock_vector_service, query_config):
        catalog = Mock()
        catalog.get_by_part_number.side_effect = ConnectionError("catalog unreachable")
        router = HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)

        with pytest.raises(RetrievalError) as exc_info:
            router.route_query("Is PS11752778 compatible with WDT780SAEM1?")

        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_domain_failure_is_not_rewrapped(self, mock_vector_service, query_config):
        catalog = Mock()
        catalog.get_by_part_number.side_effect = CatalogServiceError("database down")
        router = HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)

        with pytest.raises(CatalogServiceError):
            router.route_query("PS11752778")

    def test_vector_failure_raises(self, catalog, mock_vector_service, query_config):
        mock_vector_service.embed.side_effect = RuntimeError("model not loaded")
        router = HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)

        with pytest.raises(RetrievalError):
            router.route_query("ice maker not working")

    def test_vector_failure_raises_while_both_strategies_run(
        self, catalog, mock_vector_service, query_config
    ):
        mock_vector_service.embed.side_effect = RuntimeError("model not loaded")
        router = HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)

        with pytest.raises(RetrievalError) as exc_info:
            router.route_query("Is PS11752778 compatible with WDT780SAEM1?")

        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_vector_domain_failure_passes_through_while_both_run(
        self, catalog, mock_vector_service, query_config
    ):
        mock_vector_service.similarity_search.side_effect = VectorServiceError("index offline")
        router = HybridQueryRouter(catalog, mock_vector_service, query_config=query_config)

        with pytest.raises(VectorServiceError):
            router.route_query("Is PS11752778 compatible with WDT780SAEM1?")

    def test_part_query_without_catalog_hit_falls_back_to_semantic(
        self, router, mock_vector_service, products_by_number
    ):
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS10065979"], 0.7),
        ]

        routed = router.route_query("PS99999999")

        assert routed.analysis.query_type == "part_lookup"
        assert routed.structured_matches == []
        assert [r.record.part_number for r in routed.combined] == ["PS10065979"]

    def test_combined_keeps_identifier_order(self, router):
        routed = router.route_query("PS12364199 or PS11746591?")

        assert [r.record.part_number for r in routed.combined] == ["PS12364199", "PS11746591"]

    def test_routing_is_repeatable(self, router, mock_vector_service, products_by_number):
        mock_vector_service.similarity_search.return_value = [
            (products_by_number["PS11746591"], 0.8),
            (products_by_number["PS12364199"], 0.6),
        ]
        query = "parts for WDT780SAEM1"

        first = router.route_query(query)
        second = router.route_query(query)

        assert [r.record_id for r in first.combined] == [r.record_id for r in second.combined]
        assert first.combined[0].origin == MatchOrigin.STRUCTURED


class TestAnalyzeQuery:
    """Analysis without retrieval."""

    def test_analyze_does_not_touch_collaborators(self, router, mock_vector_service):
        analysis = router.analyze_query("How to install PS11752778")

        assert analysis.query_type == "installation"
        mock_vector_service.embed.assert_not_called()
