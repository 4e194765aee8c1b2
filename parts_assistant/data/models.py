# models.py
"""SQLAlchemy database models for the parts catalog."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, create_engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from ..core.settings import settings

Base = declarative_base()


class ProductModel(Base):
    """SQLAlchemy model for a catalog product"""

    __tablename__ = "products"

    # Primary key derived from the part number (ps11752778)
    id = Column(String(64), primary_key=True)

    # Product information
    part_number = Column(String(32), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    brand = Column(String(100), nullable=True)
    manufacturer_part_number = Column(String(64), nullable=True)
    product_type = Column(String(100), nullable=True)
    symptoms = Column(Text, nullable=True)  # ", "-joined
    installation = Column(Text, nullable=True)
    troubleshooting = Column(Text, nullable=True)
    price = Column(String(50), nullable=True)
    in_stock = Column(Boolean, default=True)
    url = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)

    # Timestamps for auditing
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    compatible_models = relationship(
        "CompatibleModelEntry",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="CompatibleModelEntry.position",
    )
    replacement_parts = relationship(
        "ReplacementPartEntry",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ReplacementPartEntry.position",
    )

    __table_args__ = (
        Index("idx_products_part_number", "part_number"),
        Index("idx_products_brand", "brand"),
    )

    def __repr__(self):
        return f"<ProductModel(id='{self.id}', part_number='{self.part_number}', brand='{self.brand}')>"


class CompatibleModelEntry(Base):
    """One appliance model a product fits"""

    __tablename__ = "compatible_models"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(64), ForeignKey("products.id"), nullable=False)
    model_number = Column(String(64), nullable=False)
    model_number_upper = Column(String(64), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="compatible_models")

    __table_args__ = (
        Index("idx_compatible_models_model", "model_number_upper"),
        Index("idx_compatible_models_product", "product_id"),
    )


class ReplacementPartEntry(Base):
    """One superseded part number a product replaces"""

    __tablename__ = "replacement_parts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(String(64), ForeignKey("products.id"), nullable=False)
    part_number = Column(String(64), nullable=False)
    part_number_upper = Column(String(64), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="replacement_parts")

    __table_args__ = (
        Index("idx_replacement_parts_part", "part_number_upper"),
        Index("idx_replacement_parts_product", "product_id"),
    )


class DatabaseManager:
    """Manages database connections and sessions"""

    def __init__(self, database_url: str = None):
        self.database_url = database_url or settings.DATABASE_URL
        self.engine = None
        self.SessionLocal = None
        self._initialize()

    def _initialize(self):
        """Initialize database engine and session factory"""
        connect_args = {}
        if "sqlite" in self.database_url:
            connect_args = {
                "check_same_thread": False,  # Router strategies run on worker threads
                "timeout": 20,
            }

        self.engine = create_engine(
            self.database_url,
            connect_args=connect_args,
            echo=False,
            pool_pre_ping=True,
            pool_recycle=3600,
        )

        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def create_tables(self):
        """Create all tables with indexes"""
        Base.metadata.create_all(bind=self.engine)

    def get_session(self):
        """Get a database session"""
        return self.SessionLocal()

    def get_table_stats(self):
        """Get database statistics for monitoring"""
        with self.get_session() as session:
            return {
                "total_products": session.query(ProductModel).count(),
                "total_compatible_models": session.query(CompatibleModelEntry).count(),
                "total_replacement_parts": session.query(ReplacementPartEntry).count(),
                "database_url": self.database_url.split("@")[-1],
            }


# Global database manager instance
db_manager = DatabaseManager()
