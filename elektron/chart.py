"""Geometry for the hourly step chart.

The browser draws the chart (see ``static/chart.js``); this module holds the
same layout rules as plain Python so they can be checked without a canvas.
``ChartView.draw`` turns chart points into a ``ChartFrame`` describing every
label, grid line, step segment and threshold line in CSS pixels, and
``ChartView.on_hover`` answers what the overlay shows for a pointer position.
"""
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional, Sequence, Tuple

from elektron.schemas import ChartDataPoint

NO_DATA_MESSAGE = "NO DATA AVAILABLE FOR THIS DATE"
Y_AXIS_TICKS = 6
PADDING_RATIO = 0.1
# Used instead of the 10% padding when every price of the day is equal
FLAT_DAY_PADDING = 1.0
LABEL_PADDING = 8.0
FONT_SIZE = 12.0

Point = Tuple[float, float]


def monospace_width(text: str) -> float:
    """Approximate width of text in the 12px monospace chart font."""
    return len(text) * FONT_SIZE * 0.6


@dataclass(frozen=True)
class Margin:
    top: float = 30
    right: float = 30
    bottom: float = 40
    left: float = 60


@dataclass(frozen=True)
class Threshold:
    key: str
    value: float
    color: str
    label: str


THRESHOLDS = (
    Threshold("zero", 0.0, "#2e7d32", "0 øre"),
    Threshold("fifty", 50.0, "#f9a825", "50 øre"),
    Threshold("seventy_five", 75.0, "#c62828", "75 øre"),
)


@dataclass(frozen=True)
class ThresholdState:
    zero: bool = False
    fifty: bool = False
    seventy_five: bool = False

    def enabled(self) -> List[Threshold]:
        return [threshold for threshold in THRESHOLDS if getattr(self, threshold.key)]


@dataclass(frozen=True)
class ChartOptions:
    target_date: date
    thresholds: ThresholdState = field(default_factory=ThresholdState)


@dataclass(frozen=True)
class StepPoint:
    hour: int
    price: float


@dataclass(frozen=True)
class Scale:
    padded_min: float
    padded_max: float
    left: float
    top: float
    graph_width: float
    graph_height: float
    slot_width: float

    def x(self, index: int) -> float:
        return self.left + self.slot_width * index

    def y(self, price: float) -> float:
        ratio = (price - self.padded_min) / (self.padded_max - self.padded_min)
        return self.top + self.graph_height - ratio * self.graph_height

    @property
    def bottom(self) -> float:
        return self.top + self.graph_height


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    text: str


@dataclass(frozen=True)
class ThresholdLine:
    y: float
    value: float
    color: str
    label: str


@dataclass(frozen=True)
class Tooltip:
    x: float
    y: float
    text: str
    text_x: float
    text_y: float
    box: Tuple[float, float, float, float]


@dataclass
class ChartFrame:
    width: float
    height: float
    no_data: bool = False
    message: Optional[str] = None
    steps: List[StepPoint] = field(default_factory=list)
    scale: Optional[Scale] = None
    y_labels: List[Label] = field(default_factory=list)
    x_labels: List[Label] = field(default_factory=list)
    grid_x: List[float] = field(default_factory=list)
    line: List[Point] = field(default_factory=list)
    thresholds: List[ThresholdLine] = field(default_factory=list)


def points_for_date(points: Sequence[ChartDataPoint], target: date) -> List[ChartDataPoint]:
    prefix = target.isoformat()
    return [point for point in points if point.time.startswith(prefix)]


def step_series(points: Sequence[ChartDataPoint]) -> List[StepPoint]:
    """Chart points plus one closing point an hour after the last one."""
    steps = [StepPoint(point.hour, point.price) for point in points]
    if steps:
        last = steps[-1]
        steps.append(StepPoint(last.hour + 1, last.price))
    return steps


def padded_range(prices: Sequence[float]) -> Tuple[float, float]:
    low, high = min(prices), max(prices)
    spread = high - low
    padding = spread * PADDING_RATIO if spread > 0 else FLAT_DAY_PADDING
    return low - padding, high + padding


def label_stride(slot_width: float, label_width: float) -> int:
    if slot_width >= label_width:
        return 1
    if slot_width * 2 >= label_width:
        return 2
    return 4


def step_line(steps: Sequence[StepPoint], scale: Scale) -> List[Point]:
    line: List[Point] = []
    for i in range(len(steps) - 1):
        y = scale.y(steps[i].price)
        line.append((scale.x(i), y))
        line.append((scale.x(i + 1), y))
    return line


class ChartView:
    def __init__(
        self,
        width: float,
        height: float,
        measure_text: Callable[[str], float] = monospace_width,
        margin: Margin = Margin(),
    ):
        self.width = width
        self.height = height
        self.measure_text = measure_text
        self.margin = margin
        self.frame: Optional[ChartFrame] = None

    def draw(self, points: Sequence[ChartDataPoint], options: ChartOptions) -> ChartFrame:
        daily = points_for_date(points, options.target_date)
        if not daily:
            self.frame = ChartFrame(self.width, self.height, no_data=True, message=NO_DATA_MESSAGE)
            return self.frame

        steps = step_series(daily)
        padded_min, padded_max = padded_range([step.price for step in steps])
        graph_width = self.width - self.margin.left - self.margin.right
        graph_height = self.height - self.margin.top - self.margin.bottom
        scale = Scale(
            padded_min=padded_min,
            padded_max=padded_max,
            left=self.margin.left,
            top=self.margin.top,
            graph_width=graph_width,
            graph_height=graph_height,
            slot_width=graph_width / max(len(steps) - 1, 1),
        )

        frame = ChartFrame(self.width, self.height, steps=steps, scale=scale)

        for i in range(Y_AXIS_TICKS + 1):
            value = padded_min + (padded_max - padded_min) * i / Y_AXIS_TICKS
            y = scale.bottom - graph_height * i / Y_AXIS_TICKS
            frame.y_labels.append(Label(self.margin.left - 10, y, f"{value:.1f}"))

        stride = label_stride(scale.slot_width, self.measure_text("00") + LABEL_PADDING)
        for i, step in enumerate(steps):
            if i % stride == 0:
                frame.x_labels.append(Label(scale.x(i), scale.bottom + 10, f"{step.hour:02d}"))
            if i % 2 == 0:
                frame.grid_x.append(scale.x(i))

        frame.line = step_line(steps, scale)

        for threshold in options.thresholds.enabled():
            if padded_min <= threshold.value <= padded_max:
                frame.thresholds.append(
                    ThresholdLine(scale.y(threshold.value), threshold.value, threshold.color, threshold.label)
                )

        self.frame = frame
        return frame

    def on_hover(self, x: float) -> Optional[Tooltip]:
        """Tooltip for the step interval under a pointer at CSS pixel ``x``."""
        frame = self.frame
        if frame is None or frame.no_data or len(frame.steps) < 2:
            return None

        scale = frame.scale
        index = math.floor((x - scale.left) / scale.slot_width)
        index = max(0, min(index, len(frame.steps) - 2))
        step = frame.steps[index]
        x_step = scale.x(index)
        y_step = scale.y(step.price)

        text = f"{step.hour:02d}:00 - {step.price:.1f} øre"
        text_width = self.measure_text(text)
        text_x = x_step + 10
        text_y = y_step - 15
        if text_x + text_width > self.width - 10:
            text_x = x_step - text_width - 10
        if text_y < 20:
            text_y = y_step + 25

        return Tooltip(
            x=x_step,
            y=y_step,
            text=text,
            text_x=text_x,
            text_y=text_y,
            box=(text_x - 5, text_y - 15, text_width + 10, 20),
        )
