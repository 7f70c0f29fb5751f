from dotenv import load_dotenv
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, Field

load_dotenv()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_PRICE_API_URL = "https://www.hvakosterstrommen.no/api/v1"


class Settings(BaseModel):
    price_api_url: str = Field(DEFAULT_PRICE_API_URL, description="Base URL of the price API")
    default_region: str = Field("NO2", description="Region used for /prices and the front page")
    timezone: Optional[str] = Field(None, description="IANA zone for hour extraction, host local time if unset")
    font_dir: Path = Field(PACKAGE_DIR / "font", description="Directory served under /fonts")
    request_timeout: Optional[float] = Field(None, description="Upstream timeout in seconds")

    def tzinfo(self) -> Optional[ZoneInfo]:
        # None means the host's local timezone
        return ZoneInfo(self.timezone) if self.timezone else None


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name)
    return value if value else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    timeout = _optional("ELEKTRON_REQUEST_TIMEOUT")
    font_dir = _optional("ELEKTRON_FONT_DIR")
    return Settings(
        price_api_url=(_optional("ELEKTRON_PRICE_API_URL") or DEFAULT_PRICE_API_URL).rstrip("/"),
        default_region=_optional("ELEKTRON_DEFAULT_REGION") or "NO2",
        timezone=_optional("ELEKTRON_TIMEZONE"),
        font_dir=Path(font_dir) if font_dir else PACKAGE_DIR / "font",
        request_timeout=float(timeout) if timeout else None,
    )
