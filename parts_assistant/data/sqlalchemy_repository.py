# sqlalchemy_repository.py
"""SQLAlchemy-based catalog repository with indexed cross-reference lookups."""

from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..core import ProductRecord
from ..core.exceptions import CatalogServiceError
from .base_repository import BaseProductRepository
from .models import (
    CompatibleModelEntry,
    DatabaseManager,
    ProductModel,
    ReplacementPartEntry,
    db_manager,
)


def _unique_ignoring_case(values: List[str]) -> List[str]:
    seen = set()
    unique = []
    for value in values:
        if value.upper() not in seen:
            seen.add(value.upper())
            unique.append(value)
    return unique


class SQLAlchemyProductRepository(BaseProductRepository):
    """Catalog repository backed by SQLAlchemy.

    Every call opens its own short-lived session, so one repository can be
    shared by the router's concurrent strategy workers.
    """

    def __init__(self, database: Optional[DatabaseManager] = None):
        self.database = database or db_manager

    def _query_products(self, session: Session):
        return session.query(ProductModel).options(
            selectinload(ProductModel.compatible_models),
            selectinload(ProductModel.replacement_parts),
        )

    def get_by_part_number(self, part_number: str) -> Optional[ProductRecord]:
        """Direct lookup on the unique part number index"""
        try:
            with self.database.get_session() as session:
                db_product = (
                    self._query_products(session)
                    .filter(ProductModel.part_number == part_number.upper())
                    .first()
                )
                return self._to_record(db_product) if db_product else None
        except SQLAlchemyError as e:
            raise CatalogServiceError(
                f"Failed to get product {part_number}: {str(e)}"
            ) from e

    def find_by_replacement_part(self, part_number: str) -> List[ProductRecord]:
        """Products that supersede the given part number"""
        try:
            with self.database.get_session() as session:
                db_products = (
                    self._query_products(session)
                    .join(ReplacementPartEntry)
                    .filter(ReplacementPartEntry.part_number_upper == part_number.upper())
                    .order_by(ProductModel.part_number)
                    .all()
                )
                return [self._to_record(p) for p in db_products]
        except SQLAlchemyError as e:
            raise CatalogServiceError(
                f"Failed to find replacements for {part_number}: {str(e)}"
            ) from e

    def find_by_compatible_model(self, model_number: str) -> List[ProductRecord]:
        """Products listing the model number as compatible"""
        try:
            with self.database.get_session() as session:
                db_products = (
                    self._query_products(session)
                    .join(CompatibleModelEntry)
                    .filter(CompatibleModelEntry.model_number_upper == model_number.upper())
                    .order_by(ProductModel.part_number)
                    .all()
                )
                return [self._to_record(p) for p in db_products]
        except SQLAlchemyError as e:
            raise CatalogServiceError(
                f"Failed to find products for model {model_number}: {str(e)}"
            ) from e

    def add(self, product: ProductRecord) -> None:
        """Add or replace a single product"""
        self.add_many([product])

    def add_many(self, products: List[ProductRecord]) -> None:
        """Add or replace multiple products in one transaction"""
        # Last write wins for repeated ids within one batch
        unique_products = {product.id: product for product in products}
        with self.database.get_session() as session:
            try:
                for product in unique_products.values():
                    existing = session.get(ProductModel, product.id)
                    if existing is not None:
                        session.delete(existing)
                        session.flush()
                    session.add(self._to_model(product))
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise CatalogServiceError(f"Failed to add products: {str(e)}") from e

    def count(self) -> int:
        try:
            with self.database.get_session() as session:
                return session.query(ProductModel).count()
        except SQLAlchemyError as e:
            raise CatalogServiceError(f"Failed to count products: {str(e)}") from e

    def clear(self) -> None:
        """Clear all products - USE WITH CAUTION"""
        with self.database.get_session() as session:
            try:
                session.query(CompatibleModelEntry).delete()
                session.query(ReplacementPartEntry).delete()
                session.query(ProductModel).delete()
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise CatalogServiceError(f"Failed to clear products: {str(e)}") from e

    def get_all(self, limit: Optional[int] = None) -> List[ProductRecord]:
        try:
            with self.database.get_session() as session:
                query = self._query_products(session).order_by(ProductModel.part_number)
                if limit:
                    query = query.limit(limit)
                return [self._to_record(p) for p in query.all()]
        except SQLAlchemyError as e:
            raise CatalogServiceError(f"Failed to get products: {str(e)}") from e

    @staticmethod
    def _to_model(product: ProductRecord) -> ProductModel:
        """Convert a ProductRecord into ORM rows"""
        db_product = ProductModel(
            id=product.id,
            part_number=product.part_number.upper(),
            name=product.name,
            description=product.description,
            category=product.category,
            brand=product.brand,
            manufacturer_part_number=product.manufacturer_part_number,
            product_type=product.product_type,
            symptoms=", ".join(product.symptoms),
            installation=product.installation,
            troubleshooting=product.troubleshooting,
            price=product.price,
            in_stock=product.in_stock,
            url=product.url,
            image_url=product.image_url,
        )
        db_product.compatible_models = [
            CompatibleModelEntry(
                model_number=model, model_number_upper=model.upper(), position=i
            )
            for i, model in enumerate(_unique_ignoring_case(product.compatible_models))
        ]
        db_product.replacement_parts = [
            ReplacementPartEntry(
                part_number=part, part_number_upper=part.upper(), position=i
            )
            for i, part in enumerate(_unique_ignoring_case(product.replacement_parts))
        ]
        return db_product

    @staticmethod
    def _to_record(db_product: ProductModel) -> ProductRecord:
        """Convert ORM rows into a ProductRecord"""
        return ProductRecord.from_dict(
            {
                "id": db_product.id,
                "part_number": db_product.part_number,
                "name": db_product.name,
                "description": db_product.description,
                "category": db_product.category,
                "brand": db_product.brand,
                "compatible_models": [e.model_number for e in db_product.compatible_models],
                "replacement_parts": [e.part_number for e in db_product.replacement_parts],
                "installation": db_product.installation,
                "troubleshooting": db_product.troubleshooting,
                "price": db_product.price,
                "in_stock": db_product.in_stock,
                "url": db_product.url,
                "manufacturer_part_number": db_product.manufacturer_part_number,
                "product_type": db_product.product_type,
                "symptoms": db_product.symptoms,
                "image_url": db_product.image_url,
            }
        )
