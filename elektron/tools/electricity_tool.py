import logging
from typing import Dict, List, Optional, Tuple

import requests
from geopy.distance import geodesic
from pydantic import TypeAdapter
from pydantic import ValidationError as PayloadError

from elektron.config import DEFAULT_PRICE_API_URL
from elektron.errors import UpstreamUnavailable
from elektron.schemas import DateRegionQuery, NearestRegion, PriceData, Region, RegionInfo

logger = logging.getLogger(__name__)

# Reference city for each price zone
REGIONS: Dict[Region, Tuple[str, Tuple[float, float]]] = {
    Region.NO1: ("Oslo", (59.9139, 10.7522)),
    Region.NO2: ("Kristiansand", (58.1467, 7.9956)),
    Region.NO3: ("Trondheim", (63.4305, 10.3951)),
    Region.NO4: ("Tromsø", (69.6492, 18.9553)),
    Region.NO5: ("Bergen", (60.3928, 5.3221)),
}

_price_list = TypeAdapter(List[PriceData])


def list_regions() -> List[RegionInfo]:
    return [
        RegionInfo(region=region, city=city, latitude=lat, longitude=lon)
        for region, (city, (lat, lon)) in REGIONS.items()
    ]


def find_nearest_region(lat: float, lon: float) -> NearestRegion:
    region, (city, coordinates) = min(
        REGIONS.items(),
        key=lambda item: geodesic((lat, lon), item[1][1]).kilometers,
    )
    distance = geodesic((lat, lon), coordinates).kilometers
    return NearestRegion(region=region, city=city, distance_km=round(distance, 1))


class ElectricityPriceTool:
    """Client for the hvakosterstrommen.no price API.

    One GET per call. Failures are never retried: any transport error, non-200
    status or malformed payload surfaces as UpstreamUnavailable.
    """

    def __init__(self, base_url: str = DEFAULT_PRICE_API_URL, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def build_url(self, query: DateRegionQuery) -> str:
        return (
            f"{self.base_url}/prices/{query.year}/"
            f"{query.month:02d}-{query.day:02d}_{query.region.value}.json"
        )

    def fetch_electricity_prices(self, query: DateRegionQuery) -> List[PriceData]:
        url = self.build_url(query)
        logger.debug(f"Fetching prices from {url}")
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Price API unreachable for {url}: {e}")
            raise UpstreamUnavailable(f"Error fetching data: {e}") from e

        if response.status_code != 200:
            logger.warning(f"Price API returned {response.status_code} for {url}")
            raise UpstreamUnavailable(f"Error fetching data: {response.status_code}")

        try:
            return _price_list.validate_python(response.json())
        except (ValueError, PayloadError) as e:
            logger.warning(f"Price API returned an unusable payload for {url}: {e}")
            raise UpstreamUnavailable("Error fetching data: invalid payload") from e
