import json
import pytest
from pydantic import ValidationError
from shelf_scraper import LocatorCatalog, LocatorSpec, LocatorStrategy, UnknownLocator
from shelf_scraper.locators import placeholders


def test_resolve_known_locator():
    spec = LocatorCatalog.default().resolve("product_card")
    assert spec.strategy == LocatorStrategy.CSS
    assert spec.expression == "div.chakra-linkbox"


def test_resolve_unknown_locator():
    with pytest.raises(UnknownLocator) as exc:
        LocatorCatalog.default().resolve("checkout_button")
    assert exc.value.name == "checkout_button"


def test_placeholder_is_filled_without_changing_catalog():
    catalog = LocatorCatalog.default()
    page_2 = catalog.resolve("page_link", page=2)
    page_3 = catalog.resolve("page_link", page=3)

    assert page_2.expression == 'a[aria-label="Page 2"]'
    assert page_3.expression == 'a[aria-label="Page 3"]'
    assert catalog.resolve("page_link", page=2) == page_2
    assert catalog.get("page_link").expression == 'a[aria-label="Page {page}"]'


def test_missing_placeholder_parameter():
    with pytest.raises(ValueError, match="page"):
        LocatorCatalog.default().resolve("page_link")


def test_class_strategy_selector():
    spec = LocatorCatalog.default().resolve("page_title")
    assert spec.strategy == LocatorStrategy.CLASS
    assert spec.selector == ".page-title__title"


def test_xpath_locator_kept_verbatim():
    spec = LocatorCatalog.default().resolve("grocery_menu")
    assert spec.strategy == LocatorStrategy.XPATH
    assert spec.selector == spec.expression


def test_from_file_overrides_and_extends(tmp_path):
    path = tmp_path / "locators.json"
    path.write_text(json.dumps({
        "product_card": {"strategy": "css", "expression": "li.product"},
        "promo_banner": {"strategy": "class", "expression": "promo-banner"},
    }))

    catalog = LocatorCatalog.from_file(str(path))

    assert catalog.resolve("product_card").expression == "li.product"
    assert catalog.resolve("promo_banner").strategy == LocatorStrategy.CLASS
    assert "heading" in catalog
    assert len(catalog) == len(LocatorCatalog.default()) + 1


def test_specs_are_immutable():
    spec = LocatorSpec(name="x", strategy="css", expression="div")
    with pytest.raises(ValidationError):
        spec.expression = "span"


def test_placeholders():
    assert placeholders('input[name="{brand}"]') == ["brand"]
    assert placeholders("div.chakra-linkbox") == []
