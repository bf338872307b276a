from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator


CSV_HEADER = ["No", "Product Name", "Price", "Image URL"]


class LocatorStrategy(str, Enum):
    """How a locator expression is interpreted."""
    XPATH = "xpath"
    CSS = "css"
    CLASS = "class"


class LocatorSpec(BaseModel):
    """A named selector pattern. Describes elements, never holds them."""
    model_config = ConfigDict(frozen=True)

    name: str
    strategy: LocatorStrategy
    expression: str

    @property
    def selector(self) -> str:
        """Expression as a CSS/XPath selector string."""
        if self.strategy == LocatorStrategy.CLASS:
            return "." + ".".join(self.expression.split())
        return self.expression

    def __str__(self) -> str:
        return f"{self.name} ({self.strategy.value}: {self.expression})"


class ProductInfo(BaseModel):
    """Fields read from one listing card."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Product title shown on the card")
    price: str = Field("", description="Displayed price, empty when the card shows none")
    image_url: str = Field("", description="Card image source, empty when absent")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Product name must not be empty")
        return v

    @field_validator("price", "image_url")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if v else ""


class ProductRecord(ProductInfo):
    """A numbered product row, ready for the output sink."""
    sequence_number: PositiveInt

    @classmethod
    def numbered(cls, info: ProductInfo, sequence_number: int) -> "ProductRecord":
        return cls(sequence_number=sequence_number, **info.model_dump())

    def as_row(self) -> List[str]:
        return [str(self.sequence_number), self.name, self.price, self.image_url]


class PageState(BaseModel):
    """Snapshot of a settled listing page."""
    model_config = ConfigDict(frozen=True)

    url: str
    heading_text: str
    page_index: PositiveInt


class PageTarget(BaseModel):
    """One category to scrape: where to start and how many pages to read."""
    category_url: Optional[str] = None
    page_count: PositiveInt = 1


class ScrapeResult(BaseModel):
    """Complete result from a scraping session."""
    records: List[ProductRecord]
    total_count: int
    pages_visited: int
    incomplete: bool = False
    incomplete_targets: List[int] = Field(default_factory=list)
