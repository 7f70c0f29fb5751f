# schemas.py
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Region(str, Enum):
    NO1 = "NO1"
    NO2 = "NO2"
    NO3 = "NO3"
    NO4 = "NO4"
    NO5 = "NO5"


class PriceData(BaseModel):
    """One hourly record as returned by hvakosterstrommen.no."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    NOK_per_kWh: float
    EUR_per_kWh: float
    time_start: str
    EXR: Optional[float] = None
    time_end: Optional[str] = None

    @field_validator("time_start")
    @classmethod
    def check_time_start(cls, value: str) -> str:
        datetime.fromisoformat(value)
        return value


class ChartDataPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(description="Hour of day in the server's timezone")
    price: float = Field(description="Price in øre/kWh")
    time: str = Field(description="Upstream time_start")
    price_nok: float
    price_eur: float


class DateRegionQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int
    day: int
    region: Region

    @classmethod
    def for_date(cls, day: date, region: Region) -> "DateRegionQuery":
        return cls(year=day.year, month=day.month, day=day.day, region=region)

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)


class PriceSummary(BaseModel):
    min: float
    avg: float
    max: float


class RegionInfo(BaseModel):
    region: Region
    city: str
    latitude: float
    longitude: float


class NearestRegion(BaseModel):
    region: Region
    city: str
    distance_km: float


class Message(BaseModel):
    message: str
