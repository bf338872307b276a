import os
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field, PositiveInt
from .interaction import ClickMode

load_dotenv()


ENV_PREFIX = "SHELF_SCRAPER_"

BASE_URL = "https://www.zehrs.ca/"
JUICE_URL = "https://www.zehrs.ca/food/drinks/juice/c/28230?navid=flyout-L3-Drinks-Juice"
COFFEE_URL = "https://www.zehrs.ca/food/drinks/coffee/c/28228?navid=flyout-L3-Drinks-Coffee"


class ScrapeConfig(BaseModel):
    """Runtime settings shared by the session, the scenarios and the CLI."""
    base_url: str = BASE_URL
    headless: bool = True

    wait_timeout: float = Field(10.0, gt=0, description="Seconds an explicit wait may block")
    navigation_timeout: float = Field(10.0, gt=0, description="Seconds for a page to settle after pagination")
    listing_timeout: float = Field(10.0, ge=0, description="Seconds to wait for listing cards to render")
    poll_interval: float = Field(0.25, gt=0)
    settle_delay: float = Field(1.0, ge=0, description="Pause after hovering or scrolling, for flyouts and lazy content")

    max_records_per_page: PositiveInt = 5
    pagination_click_mode: ClickMode = ClickMode.SCRIPTED
    skip_cards_missing_name: bool = True

    output_dir: str = "resources"
    snapshot_dir: Optional[str] = None
    locators_file: Optional[str] = None

    @classmethod
    def from_env(cls, **overrides) -> "ScrapeConfig":
        """
        Build a config from SHELF_SCRAPER_* environment variables (a .env file
        is loaded on import), then apply explicit overrides on top.
        """
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None:
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
