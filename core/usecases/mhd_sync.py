"""
MHD 동기화 유즈케이스

제조사 번호(DDMMYY 토큰)를 기준으로 상품의 모든 번역에
MHD 파생 필드를 반영하는 비즈니스 로직을 구현합니다.

- sync_product: 상품 한 건 (상품 저장 이벤트 경로)
- sync_all: 토큰이 있는 모든 상품 배치 처리
- apply_stock_movement: 재고 이동 코멘트로 토큰 갱신
"""

from datetime import date
from typing import Callable, List, Optional

from ..domain.entities import (
    MhdState,
    Product,
    ProductSyncReport,
    SyncOutcome,
    SyncStats,
    VariantUpdate,
)
from ..domain.ports import ClockPort, LoggerPort, ProductRepositoryPort
from ..domain.synchronizer import FieldSynchronizer

ProgressCallback = Callable[[ProductSyncReport], None]


class MhdSyncUseCase:
    """MHD 동기화 유즈케이스"""

    def __init__(
        self,
        product_repository: ProductRepositoryPort,
        synchronizer: FieldSynchronizer,
        clock: ClockPort,
        logger: LoggerPort,
        enabled_sales_channels: Optional[List[str]] = None,
    ):
        self.product_repository = product_repository
        self.synchronizer = synchronizer
        self.clock = clock
        self.logger = logger
        self.enabled_sales_channels = enabled_sales_channels or []

    def is_enabled_for(self, sales_channel_id: Optional[str]) -> bool:
        """
        판매 채널에서 동기화가 활성화되어 있는지 확인합니다.

        설정된 채널이 없거나 채널 정보가 없는 관리자 컨텍스트면 항상 활성화입니다.
        """
        if not self.enabled_sales_channels or not sales_channel_id:
            return True
        return sales_channel_id in self.enabled_sales_channels

    def compute_updates(
        self,
        product: Product,
        token: Optional[str],
        today: date,
        force: bool = False,
    ) -> List[VariantUpdate]:
        """
        상품의 모든 번역에 대해 필요한 업데이트를 계산합니다.

        Args:
            product: 대상 상품
            token: 사용할 토큰
            today: 기준 날짜
            force: 변경이 없어도 전체 값을 다시 쓸지 여부

        Returns:
            변경이 있는 번역의 부분 업데이트 목록
        """
        updates = []
        for variant in product.variants:
            result = self.synchronizer.synchronize(token, today, variant)
            update = result.to_update(variant)

            if update is None and force:
                update = VariantUpdate(
                    language_id=variant.language_id,
                    title=result.title,
                    description=result.description,
                    custom_fields=dict(result.custom_fields),
                )

            if update is not None and not update.is_empty():
                updates.append(update)
        return updates

    def _state_for(self, token: Optional[str]) -> MhdState:
        if self.synchronizer.codec.decode(token) is None:
            return MhdState.NO_DATE
        return MhdState.HAS_DATE

    async def sync_product(
        self,
        product_id: str,
        token: Optional[str] = None,
        dry_run: bool = False,
        sales_channel_id: Optional[str] = None,
    ) -> ProductSyncReport:
        """
        상품 한 건을 동기화합니다.

        토큰을 지정하지 않으면 저장된 제조사 번호를 사용합니다.
        잘못된 토큰은 "MHD 없음"으로 처리되어 파생 필드가 제거됩니다.

        Args:
            product_id: 상품 ID
            token: 새 토큰 (지정 시 제조사 번호도 함께 저장)
            dry_run: True면 계산만 하고 저장하지 않음
            sales_channel_id: 이벤트가 발생한 판매 채널

        Returns:
            동기화 결과

        Raises:
            ValueError: 상품을 찾을 수 없는 경우
        """
        if not self.is_enabled_for(sales_channel_id):
            self.logger.debug(f"비활성 판매 채널, 동기화 생략: {product_id}, {sales_channel_id}")
            return ProductSyncReport(product_id=product_id, outcome=SyncOutcome.SKIPPED)

        product = await self.product_repository.get_by_id(product_id)
        if not product:
            raise ValueError(f"상품을 찾을 수 없습니다: {product_id}")

        if token is None:
            token = product.manufacturer_number
        elif token != product.manufacturer_number and not dry_run:
            await self.product_repository.update_token(product_id, token)

        state = self._state_for(token)
        if state == MhdState.NO_DATE and token:
            self.logger.debug(f"MHD 토큰이 유효하지 않음: {product.product_number}, '{token}'")

        updates = self.compute_updates(product, token, self.clock.today())
        report = ProductSyncReport(
            product_id=product.id,
            product_number=product.product_number,
            token=token,
            state=state,
            outcome=SyncOutcome.UPDATED if updates else SyncOutcome.SKIPPED,
            updates=updates,
        )

        if not updates:
            self.logger.debug(f"변경 사항 없음: {product.product_number}")
            return report

        if dry_run:
            self.logger.info(f"[드라이런] 상품 업데이트 예정: {product.product_number}, 번역 {len(updates)}개")
            return report

        await self.product_repository.update_variants(product.id, updates)
        self.logger.info(
            f"상품 MHD 동기화 완료: {product.product_number}, 토큰: {token}, 상태: {state.value}"
        )
        return report

    async def _sync_in_batch(
        self,
        product: Product,
        today: date,
        dry_run: bool,
        force: bool,
    ) -> ProductSyncReport:
        token = product.manufacturer_number
        report = ProductSyncReport(
            product_id=product.id,
            product_number=product.product_number,
            token=token,
            state=self._state_for(token),
            outcome=SyncOutcome.SKIPPED,
        )

        # 배치에서는 잘못된 토큰을 지우지 않고 건너뜀
        if report.state == MhdState.NO_DATE:
            self.logger.debug(f"유효하지 않은 MHD 토큰, 건너뜀: {product.product_number}, '{token}'")
            return report

        updates = self.compute_updates(product, token, today, force=force)
        if not updates:
            return report

        if not dry_run:
            await self.product_repository.update_variants(product.id, updates)

        report.outcome = SyncOutcome.UPDATED
        report.updates = updates
        return report

    async def sync_all(
        self,
        batch_size: int = 100,
        dry_run: bool = False,
        force: bool = False,
        progress: Optional[ProgressCallback] = None,
    ) -> SyncStats:
        """
        제조사 번호가 있는 모든 상품을 배치로 동기화합니다.

        한 상품의 실패는 배치 전체를 중단시키지 않고 오류로 집계됩니다.

        Args:
            batch_size: 한 번에 조회할 상품 수
            dry_run: True면 계산만 하고 저장하지 않음
            force: 변경이 없는 상품도 다시 저장
            progress: 상품 하나 처리할 때마다 호출되는 콜백

        Returns:
            동기화 통계
        """
        if batch_size < 1:
            raise ValueError("배치 크기는 1 이상이어야 합니다")

        stats = SyncStats(dry_run=dry_run)
        today = self.clock.today()
        total = await self.product_repository.count_with_token()
        self.logger.info(f"MHD 배치 동기화 시작: 대상 {total}개, 기준일 {today.isoformat()}, 드라이런: {dry_run}")

        offset = 0
        while offset < total:
            products = await self.product_repository.list_with_token(skip=offset, limit=batch_size)
            if not products:
                break

            for product in products:
                try:
                    report = await self._sync_in_batch(product, today, dry_run, force)
                except Exception as e:
                    self.logger.error(f"상품 동기화 실패: {product.product_number}, 오류: {str(e)}")
                    report = ProductSyncReport(
                        product_id=product.id,
                        product_number=product.product_number,
                        token=product.manufacturer_number,
                        outcome=SyncOutcome.ERROR,
                        error_message=str(e),
                    )

                stats.record(report.outcome)
                if progress:
                    progress(report)

            offset += batch_size

        stats.mark_as_completed()
        self.logger.info(
            f"MHD 배치 동기화 완료: 업데이트 {stats.updated}, 건너뜀 {stats.skipped}, 오류 {stats.errors}"
        )
        return stats

    async def apply_stock_movement(self, product_id: str, comment: Optional[str]) -> bool:
        """
        재고 이동 코멘트가 유효한 MHD 토큰이면 상품의 제조사 번호를 갱신하고 동기화합니다.

        Args:
            product_id: 상품 ID
            comment: 재고 이동 코멘트

        Returns:
            제조사 번호가 갱신되었는지 여부
        """
        if not comment or not product_id:
            return False

        token = comment.strip()
        if self.synchronizer.codec.decode(token) is None:
            self.logger.debug(f"재고 이동 코멘트가 유효한 날짜가 아님: {product_id}, '{comment}'")
            return False

        product = await self.product_repository.get_by_id(product_id)
        if not product:
            self.logger.warning(f"재고 이동 대상 상품을 찾을 수 없습니다: {product_id}")
            return False

        if product.manufacturer_number == token:
            self.logger.debug(f"제조사 번호가 이미 최신 상태: {product.product_number}, {token}")
            return False

        await self.product_repository.update_token(product_id, token)
        self.logger.info(f"재고 이동으로 제조사 번호 갱신: {product.product_number}, {token}")

        await self.sync_product(product_id)
        return True
