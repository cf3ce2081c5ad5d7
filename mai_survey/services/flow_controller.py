from __future__ import annotations

import logging
import math
from typing import List, Tuple

from mai_survey.models.survey import (
    INFO_FIELDS,
    AnswerValue,
    CompletionSignal,
    InfoRecord,
    Question,
    QuestionCatalog,
    SurveyPage,
)
from mai_survey.services.errors import (
    AlreadySubmittedError,
    EmptyCatalogError,
    InvalidFieldError,
    InvalidQuestionIdError,
    PageIncompleteError,
    PrematureSubmitError,
)

logger = logging.getLogger(__name__)

PAGE_SIZE = 10


class SurveyFlowController:
    """Drive one attempt at the inventory: pages of questions, then the info form.

    ``current_step`` runs from ``0`` to ``total_pages``. Steps below
    ``total_pages`` are question pages; ``total_pages`` itself is the info
    stage. Navigation clamps into that range instead of failing.

    ``go_next`` does not look at whether the current page is answered. The
    presentation layer is expected to disable the control, or to call
    ``advance`` which applies the same check and raises
    :class:`PageIncompleteError`.
    """

    def __init__(self, catalog: QuestionCatalog, *, page_size: int = PAGE_SIZE) -> None:
        if catalog is None:
            raise ValueError("catalog must be provided")
        if len(catalog) == 0:
            raise EmptyCatalogError("Cannot run a survey over an empty question catalog.")
        if page_size <= 0:
            raise ValueError("page_size must be a positive integer")

        self._catalog = catalog
        self._page_size = page_size
        self._current_step = 0
        self._answers: List[AnswerValue] = [None] * len(catalog)
        self._info = InfoRecord()
        self._submitted = False

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_step(self) -> int:
        return self._current_step

    @property
    def answers(self) -> Tuple[AnswerValue, ...]:
        """Return a read-only copy of the answer vector."""

        return tuple(self._answers)

    @property
    def info(self) -> InfoRecord:
        """Return a copy of the info record."""

        return self._info.model_copy()

    @property
    def submitted(self) -> bool:
        return self._submitted

    @property
    def total_pages(self) -> int:
        return math.ceil(len(self._catalog) / self._page_size)

    @property
    def is_info_stage(self) -> bool:
        return self._current_step == self.total_pages

    @property
    def current_page_questions(self) -> Tuple[Question, ...]:
        return self._page_questions(self._current_step)

    @property
    def is_page_answered(self) -> bool:
        """True when every question on the current page has an answer."""

        return all(self._answers[question.id - 1] is not None for question in self.current_page_questions)

    @property
    def answered_count(self) -> int:
        return sum(1 for value in self._answers if value is not None)

    def page(self, index: int) -> SurveyPage:
        """Return the derived view for question page ``index``."""

        if not 0 <= index < self.total_pages:
            raise IndexError(f"page index {index} out of range 0..{self.total_pages - 1}")
        questions = self._page_questions(index)
        return SurveyPage(
            index=index,
            questions=questions,
            is_answered=all(self._answers[question.id - 1] is not None for question in questions),
            is_last=index == self.total_pages - 1,
        )

    def current_page(self) -> SurveyPage | None:
        """Return the active question page, or ``None`` at the info stage."""

        if self.is_info_stage:
            return None
        return self.page(self._current_step)

    def get_answer(self, question_id: int) -> AnswerValue:
        self._require_question(question_id)
        return self._answers[question_id - 1]

    def unanswered_ids(self, *, current_page_only: bool = False) -> Tuple[int, ...]:
        questions = self.current_page_questions if current_page_only else self._catalog.questions
        return tuple(question.id for question in questions if self._answers[question.id - 1] is None)

    def missing_info_fields(self) -> Tuple[str, ...]:
        return self._info.missing_fields()

    def set_answer(self, question_id: int, value: bool) -> None:
        """Record ``value`` for ``question_id``, replacing any earlier answer."""

        self._require_question(question_id)
        if not isinstance(value, bool):
            raise TypeError("answer value must be a boolean")
        self._answers[question_id - 1] = value
        logger.debug("Answered question %d with %s", question_id, value)

    def go_next(self) -> int:
        """Move one step forward, stopping at the info stage."""

        self._current_step = min(self._current_step + 1, self.total_pages)
        logger.debug("Moved to step %d of %d", self._current_step, self.total_pages)
        return self._current_step

    def go_prev(self) -> int:
        """Move one step back, stopping at the first page."""

        self._current_step = max(self._current_step - 1, 0)
        logger.debug("Moved back to step %d", self._current_step)
        return self._current_step

    def advance(self) -> int:
        """Move forward only when the current page is fully answered."""

        if not self.is_page_answered:
            missing = self.unanswered_ids(current_page_only=True)
            logger.warning("Blocked advance from page %d; unanswered: %s", self._current_step + 1, missing)
            raise PageIncompleteError(self._current_step, missing)
        return self.go_next()

    def set_info_field(self, field: str, value: str) -> None:
        """Replace a single identifying field."""

        if field not in INFO_FIELDS:
            logger.warning("Rejected update to unknown info field %r", field)
            raise InvalidFieldError(field)
        if not isinstance(value, str):
            raise TypeError("info values must be strings")
        setattr(self._info, field, value)

    def submit(self) -> CompletionSignal:
        """Return the completion signal carrying the final answers and info.

        Blank info fields are not rejected here; the info form marks them as
        required. The signal is produced at most once per controller.
        """

        if not self.is_info_stage:
            logger.warning("Rejected submit at step %d before the info stage", self._current_step)
            raise PrematureSubmitError(
                f"Survey cannot be submitted from step {self._current_step}; "
                f"the info stage is step {self.total_pages}."
            )
        if self._submitted:
            raise AlreadySubmittedError("This survey has already been submitted.")

        signal = CompletionSignal(answers=tuple(self._answers), info=self._info)
        self._submitted = True
        logger.info(
            "Survey submitted with %d of %d answers", signal.answered_count, len(signal.answers)
        )
        return signal

    def _page_questions(self, step: int) -> Tuple[Question, ...]:
        start_index = step * self._page_size
        end_index = min(start_index + self._page_size, len(self._catalog))
        return self._catalog.questions[start_index:end_index]

    def _require_question(self, question_id: int) -> Question:
        question = self._catalog.get(question_id)
        if question is None:
            logger.warning("Rejected answer for unknown question id %r", question_id)
            raise InvalidQuestionIdError(question_id)
        return question


__all__ = ["PAGE_SIZE", "SurveyFlowController"]
