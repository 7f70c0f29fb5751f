"""Fixtures for testing."""
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from elektron.config import Settings, get_settings
from elektron.errors import UpstreamUnavailable
from elektron.main import app, get_price_tool
from elektron.schemas import ChartDataPoint, DateRegionQuery, PriceData


def make_records(day: str = "2024-06-01", prices: Optional[List[float]] = None, offset: str = "+02:00"):
    """Build one upstream record per hour, prices given in NOK/kWh."""
    if prices is None:
        prices = [0.40 + 0.01 * hour for hour in range(24)]
    return [
        PriceData(
            NOK_per_kWh=price,
            EUR_per_kWh=round(price / 11.5, 5),
            EXR=11.5,
            time_start=f"{day}T{hour:02d}:00:00{offset}",
            time_end=f"{day}T{hour:02d}:59:59{offset}",
        )
        for hour, price in enumerate(prices)
    ]


def make_points(day: str = "2024-06-01", prices: Optional[List[float]] = None):
    """Chart points in øre/kWh, one per hour."""
    if prices is None:
        prices = [40.0 + hour for hour in range(24)]
    return [
        ChartDataPoint(
            hour=hour,
            price=price,
            time=f"{day}T{hour:02d}:00:00+02:00",
            price_nok=price / 100,
            price_eur=price / 1150,
        )
        for hour, price in enumerate(prices)
    ]


class FakePriceTool:
    """Stands in for ElectricityPriceTool and records every query."""

    def __init__(self, records=None, error: Optional[Exception] = None):
        self.records = make_records() if records is None else records
        self.error = error
        self.queries: List[DateRegionQuery] = []

    def fetch_electricity_prices(self, query: DateRegionQuery):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.records


@pytest.fixture
def records():
    return make_records()


@pytest.fixture
def price_tool():
    return FakePriceTool()


@pytest.fixture
def failing_tool():
    return FakePriceTool(error=UpstreamUnavailable("Error fetching data: 503"))


@pytest.fixture
def settings(tmp_path):
    return Settings(font_dir=tmp_path)


@pytest.fixture
def make_client(settings):
    def _make(tool):
        app.dependency_overrides[get_settings] = lambda: settings
        app.dependency_overrides[get_price_tool] = lambda: tool
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, price_tool):
    return make_client(price_tool)
