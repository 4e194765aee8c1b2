from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from .models import ProductRecord


class ProductCatalog(ABC):
    """Abstract interface for exact-match catalog lookups"""

    @abstractmethod
    def get_by_part_number(self, part_number: str) -> Optional[ProductRecord]:
        """Direct keyed fetch of a single product"""
        pass

    @abstractmethod
    def find_by_replacement_part(self, part_number: str) -> List[ProductRecord]:
        """Products whose replacement list contains the part number"""
        pass

    @abstractmethod
    def find_by_compatible_model(self, model_number: str) -> List[ProductRecord]:
        """Products whose compatible-model list contains the model number"""
        pass


class VectorSearchService(ABC):
    """Abstract interface for embedding and similarity search"""

    @abstractmethod
    def embed(self, text: str) -> List[float]:
        pass

    @abstractmethod
    def similarity_search(
        self, vector: Sequence[float], k: int
    ) -> List[Tuple[ProductRecord, float]]:
        """Return up to k (record, similarity) pairs, most similar first"""
        pass
