"""
SQLAlchemy 데이터베이스 모델

도메인 엔티티와 매핑되는 데이터베이스 테이블 모델을 정의합니다.
커스텀 필드는 JSON 컬럼으로 저장합니다.
"""

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    JSON,
)
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


class ProductModel(Base):
    """상품 테이블 모델"""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    product_number = Column(String(64), unique=True, nullable=False, index=True)
    manufacturer_number = Column(String(255), index=True)  # DDMMYY MHD 토큰
    created_at = Column(DateTime, server_default=func.now(), index=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # 관계 설정
    translations = relationship(
        "ProductTranslationModel",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="ProductTranslationModel.language_id",
    )


class ProductTranslationModel(Base):
    """상품 번역 테이블 모델"""

    __tablename__ = "product_translations"

    product_id = Column(String(36), ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    language_id = Column(String(64), primary_key=True)
    name = Column(Text)
    description = Column(Text)
    custom_fields = Column(JSON)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("idx_product_translations_language", "language_id"),
    )

    # 관계 설정
    product = relationship("ProductModel", back_populates="translations")
