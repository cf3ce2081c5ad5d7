from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from mai_survey.models.results import MaiReport


class ChartType(str, Enum):
    """Supported chart shapes for result visualisations."""

    BAR = "bar"
    PIE = "pie"


@dataclass(frozen=True)
class ChartData:
    """Structured payload describing a chart for the UI layer."""

    chart_type: ChartType
    labels: Tuple[str, ...]
    values: Tuple[float, ...]
    title: str
    description: str | None = None
    metadata: dict[str, int | float | str] = field(default_factory=dict)

    def to_series(self) -> List[Tuple[str, float]]:
        """Return data as a list of (label, value) tuples."""

        return list(zip(self.labels, self.values))

    def as_dict(self) -> dict[str, float]:
        """Return data as a simple label -> value mapping."""

        return {label: value for label, value in zip(self.labels, self.values)}


class SurveyChartBuilder:
    """Prepare chart-ready data derived from a scored report."""

    def __init__(self, report: MaiReport, *, as_percent: bool = True) -> None:
        if report is None:
            raise ValueError("report must be provided")

        self._report = report
        self._as_percent = as_percent

    def subscale_chart(self) -> ChartData:
        """Return a bar chart with one bar per subscale."""

        labels = tuple(subscale.label for subscale in self._report.subscales)
        values = tuple(self._scale(subscale.ratio) for subscale in self._report.subscales)
        return ChartData(
            chart_type=ChartType.BAR,
            labels=labels,
            values=values,
            title="Subscale scores",
            description=self._unit_description(),
            metadata={"subscales": len(labels)},
        )

    def component_chart(self) -> ChartData:
        """Return a bar chart comparing knowledge and regulation of cognition."""

        labels = tuple(component.label for component in self._report.components)
        values = tuple(self._scale(component.ratio) for component in self._report.components)
        return ChartData(
            chart_type=ChartType.BAR,
            labels=labels,
            values=values,
            title="Component scores",
            description=self._unit_description(),
        )

    def answer_split(self) -> ChartData:
        """Return a pie chart of true, false and unanswered items."""

        unanswered = len(self._report.unanswered_ids)
        true_count = self._report.total_score
        false_count = max(self._report.max_score - true_count - unanswered, 0)
        labels = ("True", "False", "Unanswered")
        values = (float(true_count), float(false_count), float(unanswered))
        return ChartData(
            chart_type=ChartType.PIE,
            labels=labels,
            values=values,
            title="Answer overview",
            description="How many statements were marked true or false.",
            metadata={
                "total_questions": self._report.max_score,
                "true": true_count,
                "false": false_count,
                "unanswered": unanswered,
            },
        )

    def _scale(self, ratio: float) -> float:
        if self._as_percent:
            return round(ratio * 100, 1)
        return ratio

    def _unit_description(self) -> str:
        if self._as_percent:
            return "Share of statements in each group marked true (percent)."
        return "Share of statements in each group marked true (0 to 1)."


__all__ = [
    "ChartData",
    "ChartType",
    "SurveyChartBuilder",
]
