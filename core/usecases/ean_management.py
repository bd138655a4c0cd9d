"""
단품 EAN 관리 유즈케이스

단품 EAN 커스텀 필드와 설명 HTML의 "Einzel EAN" span을 함께 관리하고,
이전 샵 시스템에서 넘어온 레거시 EAN 필드를 새 필드로 옮깁니다.
"""

import re
from typing import List, Optional

from ..domain.entities import EanMigrationStats, Product, VariantUpdate
from ..domain.ports import LoggerPort, ProductRepositoryPort
from ..domain.synchronizer import FieldSynchronizer

# 체크섬은 검사하지 않음
EAN_FORMAT = re.compile(r"^(?:[0-9]{8}|[0-9]{13})$")


class EanManagementUseCase:
    """단품 EAN 관리 유즈케이스"""

    def __init__(
        self,
        product_repository: ProductRepositoryPort,
        synchronizer: FieldSynchronizer,
        logger: LoggerPort,
    ):
        self.product_repository = product_repository
        self.synchronizer = synchronizer
        self.logger = logger

    @property
    def single_ean_field(self) -> str:
        return self.synchronizer.keys.single_ean

    @property
    def legacy_ean_field(self) -> str:
        return self.synchronizer.keys.legacy_ean

    @staticmethod
    def validate_ean(ean: str) -> bool:
        """EAN 형식 검증 (8자리 또는 13자리 숫자)"""
        return bool(EAN_FORMAT.match(ean or ""))

    async def _get_product(self, product_id: str) -> Product:
        product = await self.product_repository.get_by_id(product_id)
        if not product:
            raise ValueError(f"상품을 찾을 수 없습니다: {product_id}")
        return product

    async def update_product_ean(self, product_id: str, ean: Optional[str]) -> bool:
        """
        상품의 모든 번역에 단품 EAN을 설정합니다. None이면 제거합니다.

        Args:
            product_id: 상품 ID
            ean: EAN 코드 또는 None

        Returns:
            변경 사항이 저장되었는지 여부

        Raises:
            ValueError: EAN 형식이 잘못되었거나 상품이 없는 경우
        """
        if ean is not None:
            ean = ean.strip()
            if not self.validate_ean(ean):
                self.logger.warning(f"잘못된 EAN 형식: {product_id}, '{ean}'")
                raise ValueError(f"EAN은 8자리 또는 13자리 숫자여야 합니다: {ean}")

        product = await self._get_product(product_id)

        updates = []
        for variant in product.variants:
            update = self.synchronizer.synchronize_ean(ean, variant).to_update(variant)
            if update is not None:
                updates.append(update)

        if not updates:
            self.logger.debug(f"EAN 변경 사항 없음: {product.product_number}")
            return False

        await self.product_repository.update_variants(product.id, updates)
        self.logger.info(f"상품 EAN 업데이트 완료: {product.product_number}, EAN: {ean}")
        return True

    async def refresh_product_ean(self, product_id: str) -> bool:
        """커스텀 필드에 저장된 EAN에 맞춰 설명 span을 갱신합니다."""
        product = await self._get_product(product_id)

        updates = []
        for variant in product.variants:
            update = self.synchronizer.refresh_ean(variant).to_update(variant)
            if update is not None:
                updates.append(update)

        if updates:
            await self.product_repository.update_variants(product.id, updates)
            self.logger.info(f"EAN span 갱신 완료: {product.product_number}")
        return bool(updates)

    def _legacy_updates(self, product: Product) -> List[VariantUpdate]:
        updates = []
        for variant in product.variants:
            legacy_ean = variant.custom_fields.get(self.legacy_ean_field)
            if not legacy_ean or variant.custom_fields.get(self.single_ean_field):
                continue

            update = self.synchronizer.synchronize_ean(str(legacy_ean), variant).to_update(variant)
            if update is not None:
                updates.append(update)
        return updates

    async def migrate_legacy_ean(self, product_id: str) -> bool:
        """
        레거시 EAN 필드를 단품 EAN 필드로 옮깁니다.

        새 필드가 비어 있는 번역만 대상이며, 설명에 EAN span도 추가합니다.

        Returns:
            마이그레이션이 수행되었는지 여부
        """
        product = await self._get_product(product_id)

        updates = self._legacy_updates(product)
        if not updates:
            return False

        await self.product_repository.update_variants(product.id, updates)
        self.logger.info(f"레거시 EAN 마이그레이션 완료: {product.product_number}")
        return True

    def _needs_migration(self, product: Product) -> bool:
        has_legacy = any(v.custom_fields.get(self.legacy_ean_field) for v in product.variants)
        has_new = any(v.custom_fields.get(self.single_ean_field) for v in product.variants)
        return has_legacy and not has_new

    async def batch_migrate_legacy_ean(self, batch_size: int = 100) -> EanMigrationStats:
        """
        모든 상품에 대해 레거시 EAN 마이그레이션을 수행합니다.

        Args:
            batch_size: 한 번에 조회할 상품 수

        Returns:
            마이그레이션 통계
        """
        if batch_size < 1:
            raise ValueError("배치 크기는 1 이상이어야 합니다")

        stats = EanMigrationStats()
        offset = 0

        while True:
            products = await self.product_repository.list_all(skip=offset, limit=batch_size)
            if not products:
                break

            for product in products:
                stats.total += 1

                if not self._needs_migration(product):
                    stats.skipped += 1
                    continue

                try:
                    if await self.migrate_legacy_ean(product.id):
                        stats.migrated += 1
                    else:
                        stats.skipped += 1
                except Exception as e:
                    stats.failed += 1
                    self.logger.error(f"레거시 EAN 마이그레이션 실패: {product.product_number}, 오류: {str(e)}")

            if len(products) < batch_size:
                break
            offset += batch_size

        self.logger.info(
            f"레거시 EAN 마이그레이션 종료: 전체 {stats.total}, 완료 {stats.migrated}, "
            f"건너뜀 {stats.skipped}, 실패 {stats.failed}"
        )
        return stats
