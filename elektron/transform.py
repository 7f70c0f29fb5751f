from datetime import datetime, tzinfo
from typing import Iterable, List, Optional

from elektron.schemas import ChartDataPoint, PriceData, PriceSummary


def to_chart_point(record: PriceData, tz: Optional[tzinfo] = None) -> ChartDataPoint:
    # tz=None converts to the host's local timezone
    hour = datetime.fromisoformat(record.time_start).astimezone(tz).hour
    return ChartDataPoint(
        hour=hour,
        price=record.NOK_per_kWh * 100.0,
        time=record.time_start,
        price_nok=record.NOK_per_kWh,
        price_eur=record.EUR_per_kWh,
    )


def to_chart_points(records: Iterable[PriceData], tz: Optional[tzinfo] = None) -> List[ChartDataPoint]:
    """Map upstream records to chart points, keeping order and length."""
    return [to_chart_point(record, tz) for record in records]


def summarize(points: List[ChartDataPoint]) -> Optional[PriceSummary]:
    if not points:
        return None
    prices = [point.price for point in points]
    return PriceSummary(min=min(prices), avg=sum(prices) / len(prices), max=max(prices))
