"""Workload statistics of one airport: flights per month and per day."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "MONTHS",
    "AxisRange",
    "AirportStatistic",
    "year_series",
    "year_axis_range",
    "group_by_month",
    "month_axis_ranges",
]

MONTHS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

YEAR_TITLE = "Статистика за год:"
MONTH_TITLE = "Статистика за месяц:"
CLOSE_LABEL = "Закрыть статистику"
TAB_TITLES = ("За год", "За месяц")

# The yearly request spans September to August, so the first rows are autumn.
_MONTHS_IN_YEAR = 12
_CARRIED_MONTHS = 8


@dataclass(frozen=True)
class AxisRange:
    """Bounds of a chart axis, with an optional number of ticks."""

    minimum: float
    maximum: float
    tick_count: int | None = None


def _count(value: Any) -> int:
    if value is None:
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _year_counts(rows: Iterable[Sequence[Any]]) -> list[int]:
    counts = [_count(row[0]) for row, _ in zip(rows, range(_MONTHS_IN_YEAR))]
    counts.extend([0] * (_MONTHS_IN_YEAR - len(counts)))
    return counts


def year_series(rows: Iterable[Sequence[Any]]) -> list[int]:
    """Monthly flight counts ordered January to December.

    ``rows`` are ``(count, month)`` records covering September to August;
    missing records count as zero.
    """
    counts = _year_counts(rows)
    split = _MONTHS_IN_YEAR - _CARRIED_MONTHS
    return counts[split:] + counts[:split]


def year_axis_range(rows: Iterable[Sequence[Any]]) -> AxisRange:
    """Vertical range for the yearly chart: from zero (or less) to the peak plus ten."""
    counts = _year_counts(rows)
    low = min(0, *counts)
    high = max(0, *counts)
    return AxisRange(float(low), float(high + 10))


def group_by_month(rows: Iterable[Sequence[Any]]) -> dict[int, list[tuple[int, int]]]:
    """Group ``(count, day)`` records into ``{month: [(day_of_month, count), ...]}``."""
    months: dict[int, list[tuple[int, int]]] = {}
    for row in rows:
        count, day = _count(row[0]), row[1]
        months.setdefault(day.month, []).append((day.day, count))
    return months


def month_axis_ranges(points: Sequence[tuple[float, float]]) -> tuple[AxisRange, AxisRange]:
    """Horizontal and vertical ranges for the daily chart of one month."""
    if not points:
        raise ValueError("no points to range over")
    xs = [x for x, _ in points]
    ys = [y for _, y in points]
    min_y, max_y = min(ys), max(ys)
    x_range = AxisRange(min(xs), max(xs))
    y_range = AxisRange(min_y - 1, max_y + 1, int(max_y - min_y) + 3)
    return x_range, y_range


@dataclass
class AirportStatistic:
    """State of the workload view: a yearly bar series and a daily line series."""

    name: str = ""
    title: str = ""
    visible: bool = False
    current_tab: int = 0
    current_month: int = 0
    year_counts: list[int] = field(default_factory=lambda: [0] * _MONTHS_IN_YEAR)
    year_range: AxisRange = field(default_factory=lambda: AxisRange(0.0, 0.0))
    months_data: dict[int, list[tuple[int, int]]] = field(default_factory=dict)
    month_points: list[tuple[int, int]] = field(default_factory=list)
    month_x_range: AxisRange | None = None
    month_y_range: AxisRange | None = None
    closed_listeners: list[Callable[[], object]] = field(default_factory=list)

    def __init__(self) -> None:
        self.name = ""
        self.title = ""
        self.visible = False
        self.current_tab = 0
        self.current_month = 0
        self.year_counts = [0] * _MONTHS_IN_YEAR
        self.year_range = AxisRange(0.0, 0.0)
        self.months_data = {}
        self.month_points = []
        self.month_x_range = None
        self.month_y_range = None
        self.closed_listeners = []

    @property
    def months(self) -> tuple[str, ...]:
        """Labels of the month selector and of the yearly axis."""
        return MONTHS

    def set_airport_name(self, name: str) -> None:
        """Remember the airport shown and update the heading."""
        self.name = name
        self.title = "Загруженность аэропорта " + name

    def show(self) -> None:
        """Make the view visible."""
        self.visible = True

    def receive_year(self, rows: Iterable[Sequence[Any]]) -> None:
        """Fill the yearly chart from ``(count, month)`` records."""
        rows = list(rows)
        self.year_counts = year_series(rows)
        self.year_range = year_axis_range(rows)

    def receive_month(self, rows: Iterable[Sequence[Any]]) -> None:
        """Store daily records and redraw the chart of the selected month."""
        self.months_data = group_by_month(rows)
        self._update_month_graph(self.current_month + 1)

    def select_month(self, index: int) -> None:
        """Show the daily chart for the month at ``index`` (0 is January)."""
        if not 0 <= index < _MONTHS_IN_YEAR:
            raise ValueError(f"month index out of range: {index}")
        self.current_month = index
        self._update_month_graph(index + 1)

    def close(self) -> None:
        """Hide the view, reset the selectors and notify listeners."""
        self.current_month = 0
        self.current_tab = 0
        self.visible = False
        for listener in list(self.closed_listeners):
            listener()

    def _update_month_graph(self, month: int) -> None:
        self.month_points = []
        points = self.months_data.get(month)
        if not points:
            return
        self.month_points = list(points)
        self.month_x_range, self.month_y_range = month_axis_ranges(self.month_points)