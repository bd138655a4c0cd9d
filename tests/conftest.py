"""
테스트 공용 픽스처

저장소 포트의 메모리 구현과 기록용 로거를 제공합니다.
"""

import uuid
from datetime import date
from typing import Dict, List, Optional

import pytest

from adapters.clock import FixedClockAdapter
from core.domain.date_token import DateTokenCodec
from core.domain.entities import Product, TextVariant, VariantUpdate
from core.domain.ports import LoggerPort, ProductRepositoryPort
from core.domain.synchronizer import FieldSynchronizer


class InMemoryProductRepository(ProductRepositoryPort):
    """메모리 기반 상품 저장소"""

    def __init__(self):
        self.products: Dict[str, Product] = {}
        self.update_calls: List[tuple] = []
        self.failing_ids = set()

    async def create(self, product: Product) -> Product:
        self.products[product.id] = product.model_copy(deep=True)
        return product.model_copy(deep=True)

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        product = self.products.get(product_id)
        return product.model_copy(deep=True) if product else None

    async def get_by_product_number(self, product_number: str) -> Optional[Product]:
        for product in self.products.values():
            if product.product_number == product_number:
                return product.model_copy(deep=True)
        return None

    def _sorted(self) -> List[Product]:
        return sorted(self.products.values(), key=lambda p: p.product_number)

    async def list_all(self, skip: int = 0, limit: int = 100) -> List[Product]:
        return [p.model_copy(deep=True) for p in self._sorted()[skip:skip + limit]]

    async def count_with_token(self) -> int:
        return len([p for p in self.products.values() if p.manufacturer_number])

    async def list_with_token(self, skip: int = 0, limit: int = 100) -> List[Product]:
        products = [p for p in self._sorted() if p.manufacturer_number]
        return [p.model_copy(deep=True) for p in products[skip:skip + limit]]

    async def update_variants(self, product_id: str, updates: List[VariantUpdate]) -> None:
        if product_id in self.failing_ids:
            raise RuntimeError("저장 실패")

        product = self.products[product_id]
        self.update_calls.append((product_id, updates))

        for update in updates:
            variant = product.get_variant(update.language_id)
            if variant is None:
                variant = TextVariant(language_id=update.language_id)
                product.variants.append(variant)
            if update.title is not None:
                variant.title = update.title
            if update.description is not None:
                variant.description = update.description
            if update.custom_fields is not None:
                variant.custom_fields = dict(update.custom_fields)

    async def update_token(self, product_id: str, manufacturer_number: Optional[str]) -> None:
        self.products[product_id].manufacturer_number = manufacturer_number

    async def delete(self, product_id: str) -> bool:
        return self.products.pop(product_id, None) is not None


class RecordingLogger(LoggerPort):
    """로그 메시지를 레벨별로 기록하는 로거"""

    def __init__(self):
        self.records: List[tuple] = []

    def info(self, message: str, **kwargs) -> None:
        self.records.append(("info", message))

    def warning(self, message: str, **kwargs) -> None:
        self.records.append(("warning", message))

    def error(self, message: str, **kwargs) -> None:
        self.records.append(("error", message))

    def debug(self, message: str, **kwargs) -> None:
        self.records.append(("debug", message))

    def messages(self, level: str) -> List[str]:
        return [message for lvl, message in self.records if lvl == level]


def make_product(
    product_number: str = "P-1",
    token: Optional[str] = None,
    title: Optional[str] = "Milk",
    description: Optional[str] = None,
    languages=("de-DE",),
    custom_fields: Optional[dict] = None,
) -> Product:
    """테스트용 상품 생성"""
    return Product(
        id=str(uuid.uuid4()),
        product_number=product_number,
        manufacturer_number=token,
        variants=[
            TextVariant(
                language_id=language_id,
                title=title,
                description=description,
                custom_fields=dict(custom_fields or {}),
            )
            for language_id in languages
        ],
    )


@pytest.fixture
def codec():
    return DateTokenCodec()


@pytest.fixture
def synchronizer():
    return FieldSynchronizer()


@pytest.fixture
def repository():
    return InMemoryProductRepository()


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def clock():
    return FixedClockAdapter(date(2024, 12, 1))
