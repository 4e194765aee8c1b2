# vector_service.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import chromadb
from sentence_transformers import SentenceTransformer

from ..core import ProductRecord, VectorSearchService, settings
from ..core.exceptions import VectorServiceError

logger = logging.getLogger(__name__)


class ProductVectorService(VectorSearchService):
    """Service for product embeddings and similarity search on ChromaDB"""

    def __init__(
        self,
        persist_directory: Optional[str] = None,
        collection_name: Optional[str] = None,
        model_name: Optional[str] = None,
        client=None,
        embedding_model=None,
    ):
        """Initialize the vector service with ChromaDB and embedding model"""
        self.persist_directory = persist_directory or settings.VECTOR_DB_PATH
        self.collection_name = collection_name or settings.CHROMA_COLLECTION
        self.model_name = model_name or settings.EMBEDDING_MODEL
        self.client = client
        self.embedding_model = embedding_model
        self.collection = None
        self._initialize()

    def _initialize(self):
        """Initialize ChromaDB client and embedding model"""
        try:
            if self.client is None:
                logger.info(
                    f"Initializing ChromaDB with persist directory: {self.persist_directory}"
                )
                self.client = chromadb.PersistentClient(path=self.persist_directory)

            self.collection = self._get_or_create_collection()

            if self.embedding_model is None:
                # Runs locally, no API costs
                logger.info(f"Loading sentence transformer model {self.model_name}...")
                self.embedding_model = SentenceTransformer(self.model_name)
            logger.info("Vector service initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize vector service: {str(e)}")
            raise VectorServiceError(
                f"Failed to initialize vector service: {str(e)}"
            ) from e

    def _get_or_create_collection(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={
                "description": "Replacement parts catalog with embeddings",
                "hnsw:space": "cosine",
            },
        )

    def embed(self, text: str) -> List[float]:
        """Generate embedding for a given text"""
        if not self.embedding_model:
            raise VectorServiceError("Embedding model not initialized")
        try:
            embedding = self.embedding_model.encode(text)
            return embedding.tolist()
        except Exception as e:
            raise VectorServiceError(f"Failed to embed text: {str(e)}") from e

    def similarity_search(
        self, vector: Sequence[float], k: int
    ) -> List[Tuple[ProductRecord, float]]:
        """Nearest products to a query vector, most similar first"""
        try:
            if self.collection.count() == 0:
                return []
            results = self.collection.query(
                query_embeddings=[list(vector)],
                n_results=k,
                include=["metadatas", "distances"],
            )
        except Exception as e:
            logger.error(f"Similarity search failed: {str(e)}")
            raise VectorServiceError(f"Similarity search failed: {str(e)}") from e

        matches = []
        if results and results.get("ids") and results["ids"][0]:
            for i, record_id in enumerate(results["ids"][0]):
                metadata = results["metadatas"][0][i]
                distance = results["distances"][0][i]
                if not metadata or not metadata.get("part_number") or not metadata.get("name"):
                    continue
                # Cosine distance to similarity
                similarity = max(0.0, 1.0 - distance)
                matches.append((ProductRecord.from_metadata(record_id, metadata), similarity))

        logger.info(f"Similarity search returned {len(matches)} products")
        return matches

    def search_products(self, query: str, limit: int = 3) -> List[Tuple[ProductRecord, float]]:
        """Embed a text query and search in one step"""
        return self.similarity_search(self.embed(query), k=limit)

    def add_products(self, products: List[ProductRecord]) -> int:
        """Upsert products into the collection in batches"""
        added = 0
        batch_size = settings.VECTOR_BATCH_SIZE
        try:
            for start in range(0, len(products), batch_size):
                batch = products[start : start + batch_size]
                documents = [product.to_document_text() for product in batch]
                self.collection.upsert(
                    ids=[product.id for product in batch],
                    documents=documents,
                    metadatas=[product.to_metadata() for product in batch],
                    embeddings=[self.embed(document) for document in documents],
                )
                added += len(batch)
                logger.info(f"Upserted {added}/{len(products)} products")
        except VectorServiceError:
            raise
        except Exception as e:
            logger.error(f"Batch upsert failed: {str(e)}")
            raise VectorServiceError(f"Failed to add products: {str(e)}") from e

        return added

    def count(self) -> int:
        try:
            return self.collection.count()
        except Exception as e:
            raise VectorServiceError(f"Failed to count products: {str(e)}") from e

    def get_collection_stats(self) -> Dict[str, Any]:
        """Get statistics about the vector database"""
        try:
            return {
                "total_products": self.collection.count(),
                "collection_name": self.collection.name,
                "persist_directory": self.persist_directory,
                "embedding_model": self.model_name,
            }
        except Exception as e:
            logger.error(f"Failed to get collection stats: {str(e)}")
            return {"error": str(e)}

    def clear_collection(self) -> None:
        """Clear all data from the collection"""
        try:
            self.client.delete_collection(name=self.collection_name)
            self.collection = self._get_or_create_collection()
            logger.info("Vector database cleared successfully")
        except Exception as e:
            logger.error(f"Failed to clear collection: {str(e)}")
            raise VectorServiceError(f"Failed to clear collection: {str(e)}") from e
