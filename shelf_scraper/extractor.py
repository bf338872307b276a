from typing import Any, Optional
from .driver import Driver
from .errors import MissingField, NoSuchElement
from .locators import LocatorCatalog
from .models import ProductInfo


# Display order on the site: members see the regular price first, the other
# tiers only exist on some cards.
PRICE_TIERS = ("regular_price", "non_member_price", "sale_price")


class RecordExtractor:
    """Turns one listing card into a ProductInfo."""

    def __init__(self, driver: Driver, catalog: LocatorCatalog):
        self.driver = driver
        self.catalog = catalog

    async def extract(self, card: Any) -> ProductInfo:
        """
        Read name, price and image from a listing card.

        Raises MissingField("name") when the card has no title. A missing
        price or image is recorded as an empty string.
        """
        name = await self._optional_text(card, "product_title")
        if not name:
            raise MissingField("name")

        return ProductInfo(
            name=name,
            price=await self._read_price(card),
            image_url=await self._read_image(card),
        )

    async def _read_price(self, card: Any) -> str:
        for tier in PRICE_TIERS:
            price = await self._optional_text(card, tier)
            if price:
                return price
        return ""

    async def _read_image(self, card: Any) -> str:
        try:
            image = await self.driver.locate(self.catalog.resolve("product_image"), within=card)
        except NoSuchElement:
            return ""
        return (await self.driver.attribute(image, "src")) or ""

    async def _optional_text(self, card: Any, locator: str) -> Optional[str]:
        try:
            element = await self.driver.locate(self.catalog.resolve(locator), within=card)
        except NoSuchElement:
            return None
        return (await self.driver.text(element)).strip()
