"""Tests for the junk signal service lifecycle."""

import pytest

from dealscan.services.junk_reports import JunkReportInput
from dealscan.services.junk_signals import JunkSignalService
from dealscan.settings import Settings

from tests.conftest import InMemoryCatalogStore, InMemoryJunkReportStore


@pytest.fixture
def service(report_store: InMemoryJunkReportStore, catalog: InMemoryCatalogStore) -> JunkSignalService:
    settings = Settings(_env_file=None, junk_seller_penalty_threshold=2, junk_catalog_lookup_limit=50)
    return JunkSignalService.from_settings(settings, store=report_store, catalog=catalog)


def test_from_settings_wires_config(service: JunkSignalService):
    assert service.config.seller_penalty_threshold == 2
    assert service.lookup_limit == 50
    assert service.cache.refresh_interval == 1800
    assert service.status().stale is True


@pytest.mark.asyncio
async def test_start_warms_cache_and_stop_cancels_refresh(
    service: JunkSignalService, report_store: InMemoryJunkReportStore
):
    report_store.seed("d1", ["bootleg"], seller="scam_store")
    report_store.seed("d2", ["proxy"], seller="scam_store")

    await service.start()
    try:
        status = service.status()
        assert status.keyword_count == 2
        assert status.flagged_seller_count == 1
        assert status.stale is False
        assert service._refresh_task is not None
    finally:
        await service.stop()
    assert service._refresh_task is None


@pytest.mark.asyncio
async def test_start_survives_store_outage(service: JunkSignalService, report_store: InMemoryJunkReportStore):
    report_store.fail_reads = True

    await service.start(background_refresh=False)

    assert service.status().stale is True
    assert service._refresh_task is None
    result = await service.score("charizard bootleg", None)
    assert result.penalty == 0.0


@pytest.mark.asyncio
async def test_record_uses_configured_lookup_limit(service: JunkSignalService, catalog: InMemoryCatalogStore):
    await service.record(JunkReportInput(deal_id="d1", ebay_item_id="1", ebay_title="Mewtwo GX orica"))

    assert catalog.name_lookups
    assert all(limit == 50 for _, limit in catalog.name_lookups)


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(service: JunkSignalService):
    await service.stop()
