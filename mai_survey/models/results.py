from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field

from mai_survey.models.survey import InfoRecord

Component = Literal["knowledge", "regulation"]


class SubscaleScore(BaseModel):
    """Score for one MAI subscale."""

    key: str
    label: str
    component: Component
    item_ids: List[int]
    score: int
    max_score: int
    unanswered_ids: List[int] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @property
    def ratio(self) -> float:
        """Return the share of items answered "true"."""

        if self.max_score == 0:
            return 0.0
        return self.score / self.max_score


class ComponentScore(BaseModel):
    """Aggregated score for one of the two MAI components."""

    component: Component
    label: str
    score: int
    max_score: int

    model_config = {"extra": "forbid"}

    @property
    def ratio(self) -> float:
        if self.max_score == 0:
            return 0.0
        return self.score / self.max_score


class MaiReport(BaseModel):
    """Scored outcome of one completed inventory."""

    info: InfoRecord
    total_score: int
    max_score: int
    subscales: List[SubscaleScore]
    components: List[ComponentScore]
    unanswered_ids: List[int] = Field(default_factory=list)

    model_config = {"extra": "forbid"}

    @property
    def ratio(self) -> float:
        if self.max_score == 0:
            return 0.0
        return self.total_score / self.max_score

    @property
    def is_complete(self) -> bool:
        """Return True when every item carried an answer."""

        return not self.unanswered_ids

    def strongest_subscale(self) -> SubscaleScore | None:
        if not self.subscales:
            return None
        return max(self.subscales, key=lambda subscale: subscale.ratio)

    def weakest_subscale(self) -> SubscaleScore | None:
        if not self.subscales:
            return None
        return min(self.subscales, key=lambda subscale: subscale.ratio)
