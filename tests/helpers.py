"""HTML builders for listing pages served by SnapshotDriver."""

from typing import List, Optional
from shelf_scraper import ScrapeConfig
from shelf_scraper.interaction import ClickMode

LISTING_URL = "https://shop.test/food/drinks/juice/c/28230"


def page_url(page: int) -> str:
    return LISTING_URL if page == 1 else f"{LISTING_URL}?page={page}"


def price_span(testid: str, value: Optional[str], hidden: bool = False) -> str:
    if value is None:
        return ""
    attr = " hidden" if hidden else ""
    return f'<span data-testid="{testid}"{attr}><span>{value}</span></span>'


def card(
    name: Optional[str] = "Orange Juice",
    regular: Optional[str] = None,
    non_member: Optional[str] = None,
    sale: Optional[str] = None,
    image: Optional[str] = "https://img.test/oj.png",
    hide_regular: bool = False
) -> str:
    title = f'<h3 data-testid="product-title">{name}</h3>' if name is not None else ""
    img = f'<img class="chakra-image" src="{image}" alt="">' if image is not None else ""
    return (
        '<div class="chakra-linkbox">'
        f"{img}{title}"
        f"{price_span('regular-price', regular, hidden=hide_regular)}"
        f"{price_span('non-members-price', non_member)}"
        f"{price_span('sale-price', sale)}"
        "</div>"
    )


def cards(count: int, prefix: str = "Product", start: int = 1) -> List[str]:
    return [
        card(name=f"{prefix} {i}", regular=f"${i}.99", image=f"https://img.test/{prefix.lower()}-{i}.png")
        for i in range(start, start + count)
    ]


def listing(
    card_html: List[str],
    heading: str = "Juice",
    page_links: int = 3,
    link_hrefs: Optional[dict] = None,
    heading_hidden: bool = False
) -> str:
    link_hrefs = link_hrefs or {}
    links = "".join(
        f'<a aria-label="Page {n}" href="{link_hrefs.get(n, f"?page={n}")}">{n}</a>'
        for n in range(1, page_links + 1)
    )
    hidden = " hidden" if heading_hidden else ""
    return (
        "<html><body>"
        f'<h1 data-testid="heading"{hidden}>{heading}</h1>'
        f'<div class="grid">{"".join(card_html)}</div>'
        f'<nav class="pagination">{links}</nav>'
        "</body></html>"
    )


def fast_config(**overrides) -> ScrapeConfig:
    values = dict(
        wait_timeout=0.2,
        navigation_timeout=0.2,
        listing_timeout=0.05,
        poll_interval=0.01,
        settle_delay=0,
        pagination_click_mode=ClickMode.SCRIPTED,
    )
    values.update(overrides)
    return ScrapeConfig(**values)
