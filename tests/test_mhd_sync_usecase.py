"""MhdSyncUseCase 테스트"""

from datetime import date

import pytest

from core.domain.entities import MhdState, SyncOutcome
from core.usecases.mhd_sync import MhdSyncUseCase
from tests.conftest import make_product


@pytest.fixture
def usecase(repository, synchronizer, clock, logger):
    return MhdSyncUseCase(
        product_repository=repository,
        synchronizer=synchronizer,
        clock=clock,
        logger=logger,
    )


async def add(repository, **kwargs):
    return await repository.create(make_product(**kwargs))


async def add_synced(repository, synchronizer, today, **kwargs):
    """이미 동기화된 상태의 상품"""
    product = make_product(**kwargs)
    for variant in product.variants:
        result = synchronizer.synchronize(product.manufacturer_number, today, variant)
        variant.title = result.title
        variant.description = result.description
        variant.custom_fields = result.custom_fields
    return await repository.create(product)


class TestSyncProduct:
    async def test_writes_derived_fields(self, usecase, repository):
        product = await add(repository, token="311224", languages=("de-DE", "en-GB"))

        report = await usecase.sync_product(product.id)

        assert report.outcome == SyncOutcome.UPDATED
        assert report.state == MhdState.HAS_DATE
        assert len(report.updates) == 2

        stored = await repository.get_by_id(product.id)
        for variant in stored.variants:
            assert variant.title == "Milk MHD 31.12.24"
            assert variant.custom_fields["custom_product_mhd_days"] == 30

    async def test_second_sync_is_skipped(self, usecase, repository):
        product = await add(repository, token="311224")
        await usecase.sync_product(product.id)

        report = await usecase.sync_product(product.id)

        assert report.outcome == SyncOutcome.SKIPPED
        assert len(repository.update_calls) == 1

    async def test_token_argument_is_persisted(self, usecase, repository):
        product = await add(repository, token="311224")

        await usecase.sync_product(product.id, token="150125")

        stored = await repository.get_by_id(product.id)
        assert stored.manufacturer_number == "150125"
        assert stored.variants[0].title == "Milk MHD 15.01.25"

    async def test_dry_run_does_not_write(self, usecase, repository, logger):
        product = await add(repository, token="311224")

        report = await usecase.sync_product(product.id, token="150125", dry_run=True)

        assert report.outcome == SyncOutcome.UPDATED
        assert report.updates[0].title == "Milk MHD 15.01.25"
        assert repository.update_calls == []
        assert (await repository.get_by_id(product.id)).manufacturer_number == "311224"
        assert any("드라이런" in message for message in logger.messages("info"))

    async def test_invalid_token_clears_fields(self, usecase, repository, synchronizer, clock, logger):
        product = await add_synced(repository, synchronizer, clock.today(), token="311224")
        await repository.update_token(product.id, "300229")

        report = await usecase.sync_product(product.id)

        assert report.state == MhdState.NO_DATE
        assert report.outcome == SyncOutcome.UPDATED
        stored = await repository.get_by_id(product.id)
        assert stored.variants[0].title == "Milk"
        assert stored.variants[0].custom_fields == {}
        assert logger.messages("debug")

    async def test_missing_product(self, usecase):
        with pytest.raises(ValueError):
            await usecase.sync_product("unknown")

    async def test_disabled_sales_channel(self, repository, synchronizer, clock, logger):
        usecase = MhdSyncUseCase(repository, synchronizer, clock, logger, enabled_sales_channels=["web"])
        product = await add(repository, token="311224")

        report = await usecase.sync_product(product.id, sales_channel_id="pos")

        assert report.outcome == SyncOutcome.SKIPPED
        assert repository.update_calls == []
        assert usecase.is_enabled_for("web")
        assert usecase.is_enabled_for(None)


class TestSyncAll:
    async def test_counts(self, usecase, repository, synchronizer, clock):
        await add(repository, product_number="A", token="311224")
        await add(repository, product_number="B", token="999999")
        await add(repository, product_number="C", token=None)
        await add_synced(repository, synchronizer, clock.today(), product_number="D", token="150125")

        stats = await usecase.sync_all(batch_size=1)

        assert (stats.total, stats.updated, stats.skipped, stats.errors) == (3, 1, 2, 0)
        assert stats.completed_at is not None
        assert len(repository.update_calls) == 1

    async def test_invalid_token_is_not_cleared(self, usecase, repository):
        product = await add(repository, token="999999", title="Milk MHD 31.12.24")

        await usecase.sync_all()

        assert (await repository.get_by_id(product.id)).variants[0].title == "Milk MHD 31.12.24"

    async def test_failure_does_not_abort_batch(self, usecase, repository, logger):
        failing = await add(repository, product_number="A", token="311224")
        await add(repository, product_number="B", token="311224")
        repository.failing_ids.add(failing.id)

        stats = await usecase.sync_all(batch_size=10)

        assert (stats.total, stats.updated, stats.errors) == (2, 1, 1)
        assert logger.messages("error")

    async def test_dry_run(self, usecase, repository):
        await add(repository, token="311224")

        stats = await usecase.sync_all(dry_run=True)

        assert stats.updated == 1
        assert stats.dry_run
        assert repository.update_calls == []

    async def test_force_rewrites_unchanged(self, usecase, repository, synchronizer, clock):
        await add_synced(repository, synchronizer, clock.today(), token="311224")

        assert (await usecase.sync_all()).updated == 0
        assert (await usecase.sync_all(force=True)).updated == 1

    async def test_progress_callback(self, usecase, repository):
        await add(repository, product_number="A", token="311224")
        await add(repository, product_number="B", token="010125")
        seen = []

        await usecase.sync_all(batch_size=1, progress=lambda report: seen.append(report.product_number))

        assert seen == ["A", "B"]

    async def test_invalid_batch_size(self, usecase):
        with pytest.raises(ValueError):
            await usecase.sync_all(batch_size=0)


class TestStockMovement:
    async def test_updates_token_and_fields(self, usecase, repository):
        product = await add(repository, token="311224")

        assert await usecase.apply_stock_movement(product.id, " 150125 ")

        stored = await repository.get_by_id(product.id)
        assert stored.manufacturer_number == "150125"
        assert stored.variants[0].title == "Milk MHD 15.01.25"

    async def test_same_token_is_ignored(self, usecase, repository):
        product = await add(repository, token="311224")
        assert not await usecase.apply_stock_movement(product.id, "311224")

    @pytest.mark.parametrize("comment", [None, "", "Inventur", "300229"])
    async def test_non_date_comment_is_ignored(self, usecase, repository, comment):
        product = await add(repository, token="311224")

        assert not await usecase.apply_stock_movement(product.id, comment)
        assert (await repository.get_by_id(product.id)).manufacturer_number == "311224"

    async def test_missing_product(self, usecase, logger):
        assert not await usecase.apply_stock_movement("unknown", "311224")
        assert logger.messages("warning")


def test_compute_updates_uses_given_day(usecase):
    product = make_product(token="010125")
    updates = usecase.compute_updates(product, "010125", date(2025, 1, 1))
    assert updates[0].custom_fields["custom_product_mhd_days"] == 0
