"""
Declarative locator catalog: semantic element names -> selector patterns.
"""

import json
from string import Formatter
from typing import Dict, Iterable, List, Optional
from .errors import UnknownLocator
from .models import LocatorSpec, LocatorStrategy


XPATH = LocatorStrategy.XPATH
CSS = LocatorStrategy.CSS
CLASS = LocatorStrategy.CLASS


# page_url = https://www.zehrs.ca/
DEFAULT_LOCATORS = [
    # Header navigation
    LocatorSpec(name="grocery_menu", strategy=XPATH, expression='//button[@data-code="xp-455-food-departments"]'),
    LocatorSpec(name="drinks_menu", strategy=CSS, expression='a[href$="L2-Drinks"]'),
    LocatorSpec(name="drinks_juice_menu", strategy=CSS, expression='a[href$="L3-Drinks-Juice"]'),
    LocatorSpec(name="drinks_coffee_menu", strategy=CSS, expression='a[href$="L3-Drinks-Coffee"]'),
    LocatorSpec(name="home_beauty_baby_menu", strategy=CSS, expression='button[data-code="xp-455-home-beauty-baby"]'),
    LocatorSpec(name="joe_fresh_menu", strategy=CSS, expression='button[data-code="xp-455-joe-fresh"]'),
    LocatorSpec(name="discover_menu", strategy=CSS, expression='button[data-code="xp-455-discover"]'),

    # Search
    LocatorSpec(name="search_field", strategy=CSS, expression='input[placeholder="Search for product"]'),
    LocatorSpec(name="search_clear", strategy=CSS, expression='input[title="Clear Search"]'),
    LocatorSpec(name="search_button", strategy=CSS, expression='button[title="Submit Search"]'),
    LocatorSpec(name="page_title", strategy=CLASS, expression="page-title__title"),

    # Listing page
    LocatorSpec(name="heading", strategy=CSS, expression='h1[data-testid="heading"]'),
    LocatorSpec(name="product_card", strategy=CSS, expression="div.chakra-linkbox"),
    LocatorSpec(name="product_title", strategy=CSS, expression='h3[data-testid="product-title"]'),
    LocatorSpec(name="regular_price", strategy=CSS, expression='span[data-testid="regular-price"] > span'),
    LocatorSpec(name="non_member_price", strategy=CSS, expression='span[data-testid="non-members-price"] > span'),
    LocatorSpec(name="sale_price", strategy=CSS, expression='span[data-testid="sale-price"] > span'),
    LocatorSpec(name="product_image", strategy=CSS, expression="img.chakra-image"),
    LocatorSpec(name="page_link", strategy=CSS, expression='a[aria-label="Page {page}"]'),
    LocatorSpec(name="sort_menu", strategy=CSS, expression='button[aria-labelledby="sort-by menu-button-:r1:"]'),
    LocatorSpec(name="sort_option", strategy=CSS, expression='button[data-testid="menu-item"][data-index="{index}"]'),
    LocatorSpec(name="brand_filter", strategy=CSS, expression='input[name="{brand}"]'),

    # Footer
    LocatorSpec(name="weekly_flyer_link", strategy=CSS, expression='a[data-track-link-name="shop:weekly-flyer"]'),
    LocatorSpec(name="contact_link", strategy=CSS, expression='a[data-track-link-name="about-us:contact-us"]'),
    LocatorSpec(name="contact_header_title", strategy=CLASS, expression="contact-us-page__header__title"),

    # Rapid delivery popup
    LocatorSpec(name="rapid_logo", strategy=CSS, expression='a[data-track-link-name="header:rapid-delivery"]'),
    LocatorSpec(name="address_autocomplete", strategy=CSS, expression='input[id="addressAutocomplete"]'),
    LocatorSpec(name="address_first_suggestion", strategy=CSS, expression=".address-autocomplete__address-list li:nth-child(1)"),
    LocatorSpec(name="address_continue", strategy=CSS, expression="button.address-autocomplete-modal__button-continue"),
    LocatorSpec(name="no_service_title", strategy=CSS, expression="h1.no-serviceability__title"),
    LocatorSpec(name="no_service_back", strategy=CSS, expression="a.no-serviceability__go-back-button"),
]


class LocatorCatalog:
    """
    Maps semantic element names to LocatorSpecs.

    Resolution is pure: the catalog never touches the page, so a spec can be
    resolved again after every navigation. Expressions may carry
    `{placeholders}` that are filled from keyword arguments at resolve time.
    """

    def __init__(self, specs: Iterable[LocatorSpec]):
        self._specs: Dict[str, LocatorSpec] = {spec.name: spec for spec in specs}

    @classmethod
    def default(cls) -> "LocatorCatalog":
        return cls(DEFAULT_LOCATORS)

    @classmethod
    def from_file(cls, path: str, base: Optional["LocatorCatalog"] = None) -> "LocatorCatalog":
        """
        Load locator overrides from JSON on top of `base` (default catalog).

        File format: {"name": {"strategy": "css", "expression": "..."}}
        """
        with open(path) as f:
            raw = json.load(f)

        specs = dict((base or cls.default())._specs)
        for name, entry in raw.items():
            specs[name] = LocatorSpec(name=name, **entry)
        return cls(specs.values())

    def get(self, name: str) -> LocatorSpec:
        """The spec called `name` as stored, placeholders unfilled."""
        spec = self._specs.get(name)
        if spec is None:
            raise UnknownLocator(name)
        return spec

    def resolve(self, name: str, **params) -> LocatorSpec:
        """Return the spec called `name`, with placeholders filled from `params`."""
        spec = self.get(name)

        fields = placeholders(spec.expression)
        if not fields:
            return spec

        missing = [f for f in fields if f not in params]
        if missing:
            raise ValueError(f"Locator '{name}' needs parameters: {', '.join(missing)}")

        return spec.model_copy(update={"expression": spec.expression.format(**params)})

    def names(self) -> List[str]:
        return sorted(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __len__(self) -> int:
        return len(self._specs)


def placeholders(expression: str) -> List[str]:
    """Names of the `{placeholders}` in a locator expression."""
    return [field for _, field, _, _ in Formatter().parse(expression) if field]
