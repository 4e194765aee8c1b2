# repository.py
"""In-memory catalog repository for local runs and tests."""

from collections import defaultdict
from typing import Dict, List, Optional

from ..core import ProductRecord
from .base_repository import BaseProductRepository


class InMemoryProductRepository(BaseProductRepository):
    """Dict-backed catalog with uppercase secondary indexes"""

    def __init__(self, products: Optional[List[ProductRecord]] = None):
        self._products: Dict[str, ProductRecord] = {}
        self._by_part_number: Dict[str, str] = {}
        self._by_replacement: Dict[str, List[str]] = defaultdict(list)
        self._by_model: Dict[str, List[str]] = defaultdict(list)
        if products:
            self.add_many(products)

    def get_by_part_number(self, part_number: str) -> Optional[ProductRecord]:
        product_id = self._by_part_number.get(part_number.upper())
        return self._products.get(product_id) if product_id else None

    def find_by_replacement_part(self, part_number: str) -> List[ProductRecord]:
        return [self._products[i] for i in self._by_replacement.get(part_number.upper(), [])]

    def find_by_compatible_model(self, model_number: str) -> List[ProductRecord]:
        return [self._products[i] for i in self._by_model.get(model_number.upper(), [])]

    def add(self, product: ProductRecord) -> None:
        """Add or replace a single product"""
        if product.id in self._products:
            self._remove(product.id)
        self._products[product.id] = product
        self._by_part_number[product.part_number.upper()] = product.id
        for part in product.replacement_parts:
            ids = self._by_replacement[part.upper()]
            if product.id not in ids:
                ids.append(product.id)
        for model in product.compatible_models:
            ids = self._by_model[model.upper()]
            if product.id not in ids:
                ids.append(product.id)

    def add_many(self, products: List[ProductRecord]) -> None:
        for product in products:
            self.add(product)

    def count(self) -> int:
        return len(self._products)

    def clear(self) -> None:
        self._products.clear()
        self._by_part_number.clear()
        self._by_replacement.clear()
        self._by_model.clear()

    def get_all(self, limit: Optional[int] = None) -> List[ProductRecord]:
        products = list(self._products.values())
        return products[:limit] if limit else products

    def _remove(self, product_id: str) -> None:
        old = self._products.pop(product_id)
        self._by_part_number.pop(old.part_number.upper(), None)
        for index in (self._by_replacement, self._by_model):
            for ids in index.values():
                if product_id in ids:
                    ids.remove(product_id)
