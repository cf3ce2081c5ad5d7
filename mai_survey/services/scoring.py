from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from mai_survey.models.results import Component, ComponentScore, MaiReport, SubscaleScore
from mai_survey.models.survey import AnswerValue, CompletionSignal, InfoRecord

logger = logging.getLogger(__name__)

MAI_ITEM_COUNT = 52


@dataclass(frozen=True)
class Subscale:
    key: str
    label: str
    component: Component
    item_ids: Tuple[int, ...]


COMPONENT_LABELS: Dict[str, str] = {
    "knowledge": "Knowledge of cognition (认知知识)",
    "regulation": "Regulation of cognition (认知调节)",
}

# Schraw & Dennison (1994) item assignment.
SUBSCALES: Tuple[Subscale, ...] = (
    Subscale("declarative", "Declarative knowledge (陈述性知识)", "knowledge", (5, 10, 12, 16, 17, 20, 32, 46)),
    Subscale("procedural", "Procedural knowledge (程序性知识)", "knowledge", (3, 14, 27, 33)),
    Subscale("conditional", "Conditional knowledge (条件性知识)", "knowledge", (15, 18, 26, 29, 35)),
    Subscale("planning", "Planning (计划)", "regulation", (4, 6, 8, 22, 23, 42, 45)),
    Subscale(
        "information_management",
        "Information management (信息管理)",
        "regulation",
        (9, 13, 30, 31, 37, 39, 41, 43, 47, 48),
    ),
    Subscale("monitoring", "Comprehension monitoring (理解监控)", "regulation", (1, 2, 11, 21, 28, 34, 49)),
    Subscale("debugging", "Debugging strategies (调试策略)", "regulation", (25, 40, 44, 51, 52)),
    Subscale("evaluation", "Evaluation (评价)", "regulation", (7, 19, 24, 36, 38, 50)),
)


def score_responses(answers: Sequence[AnswerValue], info: InfoRecord) -> MaiReport:
    """Score a full MAI answer vector.

    Each "true" answer earns one point. Unanswered items earn nothing and are
    listed on the report so the results view can flag them.
    """

    if len(answers) != MAI_ITEM_COUNT:
        raise ValueError(f"expected {MAI_ITEM_COUNT} answers, got {len(answers)}")

    subscales: List[SubscaleScore] = []
    for subscale in SUBSCALES:
        values = [answers[item_id - 1] for item_id in subscale.item_ids]
        subscales.append(
            SubscaleScore(
                key=subscale.key,
                label=subscale.label,
                component=subscale.component,
                item_ids=list(subscale.item_ids),
                score=sum(1 for value in values if value is True),
                max_score=len(subscale.item_ids),
                unanswered_ids=[
                    item_id for item_id, value in zip(subscale.item_ids, values) if value is None
                ],
            )
        )

    components: List[ComponentScore] = []
    for component, label in COMPONENT_LABELS.items():
        members = [subscale for subscale in subscales if subscale.component == component]
        components.append(
            ComponentScore(
                component=component,
                label=label,
                score=sum(member.score for member in members),
                max_score=sum(member.max_score for member in members),
            )
        )

    unanswered = [index + 1 for index, value in enumerate(answers) if value is None]
    if unanswered:
        logger.warning("Scoring survey with %d unanswered items: %s", len(unanswered), unanswered)

    return MaiReport(
        info=info.model_copy(),
        total_score=sum(1 for value in answers if value is True),
        max_score=len(answers),
        subscales=subscales,
        components=components,
        unanswered_ids=unanswered,
    )


def score_signal(signal: CompletionSignal) -> MaiReport:
    """Score the payload carried by a completion signal."""

    return score_responses(signal.answers, signal.info)


__all__ = [
    "COMPONENT_LABELS",
    "MAI_ITEM_COUNT",
    "SUBSCALES",
    "Subscale",
    "score_responses",
    "score_signal",
]
