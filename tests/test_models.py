import pytest
from pydantic import ValidationError
from shelf_scraper import ProductInfo, ProductRecord, ScrapeConfig
from shelf_scraper.interaction import ClickMode


def test_record_row_order():
    info = ProductInfo(name=" Apple Juice ", price="$2.99 ", image_url="https://img.test/a.png")
    record = ProductRecord.numbered(info, 7)
    assert record.as_row() == ["7", "Apple Juice", "$2.99", "https://img.test/a.png"]


def test_sequence_number_must_be_positive():
    info = ProductInfo(name="Apple Juice")
    with pytest.raises(ValidationError):
        ProductRecord.numbered(info, 0)


def test_name_must_not_be_empty():
    with pytest.raises(ValidationError):
        ProductInfo(name="  ")


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SHELF_SCRAPER_MAX_RECORDS_PER_PAGE", "12")
    monkeypatch.setenv("SHELF_SCRAPER_HEADLESS", "false")
    monkeypatch.setenv("SHELF_SCRAPER_PAGINATION_CLICK_MODE", "native")

    config = ScrapeConfig.from_env(settle_delay=0.5, snapshot_dir=None)

    assert config.max_records_per_page == 12
    assert config.headless is False
    assert config.pagination_click_mode == ClickMode.NATIVE
    assert config.settle_delay == 0.5
    assert config.snapshot_dir is None
