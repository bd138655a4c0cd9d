"""
데이터베이스 Repository 어댑터

Core 레이어의 Repository 포트를 구현하는 SQLAlchemy 기반 어댑터입니다.
상품과 번역(언어별 제목, 설명, 커스텀 필드)을 함께 읽고 씁니다.
"""

import uuid
from typing import List, Optional

from sqlalchemy import and_, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from core.domain.entities import Product, TextVariant, VariantUpdate
from core.domain.ports import ProductRepositoryPort
from .models import ProductModel, ProductTranslationModel


def _has_token_clause():
    return and_(
        ProductModel.manufacturer_number.isnot(None),
        ProductModel.manufacturer_number != "",
    )


class ProductRepositoryAdapter(ProductRepositoryPort):
    """상품 Repository 어댑터"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, product: Product) -> Product:
        """상품과 번역을 생성합니다."""
        model = ProductModel(
            id=product.id or str(uuid.uuid4()),
            product_number=product.product_number,
            manufacturer_number=product.manufacturer_number,
        )
        model.translations = [
            ProductTranslationModel(
                language_id=variant.language_id,
                name=variant.title,
                description=variant.description,
                custom_fields=dict(variant.custom_fields),
            )
            for variant in product.variants
        ]

        self.session.add(model)
        await self._commit()

        created = await self._get_model(model.id)
        return self._model_to_entity(created)

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """ID로 상품을 조회합니다."""
        model = await self._get_model(product_id)
        if model is None:
            return None

        return self._model_to_entity(model)

    async def get_by_product_number(self, product_number: str) -> Optional[Product]:
        """상품 번호로 상품을 조회합니다."""
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.translations))
            .where(ProductModel.product_number == product_number)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._model_to_entity(model)

    async def list_all(self, skip: int = 0, limit: int = 100) -> List[Product]:
        """모든 상품 목록을 조회합니다."""
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.translations))
            .order_by(ProductModel.product_number)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def count_with_token(self) -> int:
        """제조사 번호가 있는 상품 수를 조회합니다."""
        stmt = select(func.count(ProductModel.id)).where(_has_token_clause())
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def list_with_token(self, skip: int = 0, limit: int = 100) -> List[Product]:
        """제조사 번호가 있는 상품 목록을 조회합니다."""
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.translations))
            .where(_has_token_clause())
            .order_by(ProductModel.product_number)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    async def update_variants(self, product_id: str, updates: List[VariantUpdate]) -> None:
        """
        번역을 부분 업데이트합니다.

        None인 필드는 기존 값을 유지하며, 해당 언어의 번역이 없으면 새로 만듭니다.

        Raises:
            ValueError: 상품을 찾을 수 없는 경우
        """
        model = await self._get_model(product_id)
        if model is None:
            raise ValueError(f"상품을 찾을 수 없습니다: {product_id}")

        translations = {translation.language_id: translation for translation in model.translations}

        for update in updates:
            if update.is_empty():
                continue

            translation = translations.get(update.language_id)
            if translation is None:
                translation = ProductTranslationModel(language_id=update.language_id, custom_fields={})
                model.translations.append(translation)
                translations[update.language_id] = translation

            if update.title is not None:
                translation.name = update.title
            if update.description is not None:
                translation.description = update.description
            if update.custom_fields is not None:
                # JSON 컬럼은 재할당해야 변경이 감지됨
                translation.custom_fields = dict(update.custom_fields)

        await self._commit()

    async def update_token(self, product_id: str, manufacturer_number: Optional[str]) -> None:
        """제조사 번호를 업데이트합니다."""
        model = await self._get_model(product_id)
        if model is None:
            raise ValueError(f"상품을 찾을 수 없습니다: {product_id}")

        model.manufacturer_number = manufacturer_number
        await self._commit()

    async def delete(self, product_id: str) -> bool:
        """상품을 삭제합니다."""
        model = await self._get_model(product_id)
        if model is None:
            return False

        await self.session.delete(model)
        await self._commit()
        return True

    async def _commit(self) -> None:
        """커밋에 실패하면 롤백하여 세션을 다음 작업에 쓸 수 있게 둡니다."""
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

    async def _get_model(self, product_id: str) -> Optional[ProductModel]:
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.translations))
            .where(ProductModel.id == product_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    def _model_to_entity(self, model: ProductModel) -> Product:
        """모델을 엔티티로 변환합니다."""
        return Product(
            id=model.id,
            product_number=model.product_number,
            manufacturer_number=model.manufacturer_number,
            variants=[
                TextVariant(
                    language_id=translation.language_id,
                    title=translation.name,
                    description=translation.description,
                    custom_fields=dict(translation.custom_fields or {}),
                )
                for translation in model.translations
            ],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
