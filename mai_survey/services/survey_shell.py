from __future__ import annotations

import logging
from typing import Tuple

from mai_survey.models.results import MaiReport
from mai_survey.models.survey import AnswerValue, CompletionSignal, InfoSnapshot, QuestionCatalog
from mai_survey.services.errors import AlreadySubmittedError
from mai_survey.services.flow_controller import PAGE_SIZE, SurveyFlowController
from mai_survey.services.scoring import score_signal

logger = logging.getLogger(__name__)


class SurveyShell:
    """Own one flow controller at a time and collect its completion signal."""

    def __init__(self, catalog: QuestionCatalog, *, page_size: int = PAGE_SIZE) -> None:
        self._catalog = catalog
        self._page_size = page_size
        self._controller: SurveyFlowController | None = None
        self._signal: CompletionSignal | None = None
        self.completed = False

    @property
    def controller(self) -> SurveyFlowController:
        """Return the active controller, starting one when needed.

        Once the survey is complete there is no active controller until
        ``restart`` builds a new one.
        """

        if self.completed:
            raise AlreadySubmittedError("The survey is complete; restart to begin a new attempt.")
        if self._controller is None:
            return self.start()
        return self._controller

    @property
    def answers(self) -> Tuple[AnswerValue, ...] | None:
        return self._signal.answers if self._signal else None

    @property
    def info(self) -> InfoSnapshot | None:
        return self._signal.info if self._signal else None

    @property
    def signal(self) -> CompletionSignal | None:
        return self._signal

    def start(self) -> SurveyFlowController:
        """Construct a fresh controller over the catalog."""

        self._controller = SurveyFlowController(self._catalog, page_size=self._page_size)
        logger.info(
            "Started survey with %d questions over %d pages",
            len(self._catalog),
            self._controller.total_pages,
        )
        return self._controller

    def submit(self) -> CompletionSignal:
        """Submit the active controller and record its completion signal."""

        if self.completed:
            raise AlreadySubmittedError("A completed survey is already being shown; restart first.")
        signal = self.controller.submit()
        self.on_completion_signal(signal)
        return signal

    def on_completion_signal(self, signal: CompletionSignal) -> None:
        """Store the completed answers and switch to the results view."""

        if self.completed:
            raise AlreadySubmittedError("A completed survey is already being shown; restart first.")
        self._signal = signal
        self.completed = True
        self._controller = None

    def restart(self) -> SurveyFlowController:
        """Discard all state and begin a new attempt."""

        self.completed = False
        self._signal = None
        logger.info("Restarting survey")
        return self.start()

    def report(self) -> MaiReport | None:
        """Return the scored report for the stored completion, if any."""

        if self._signal is None:
            return None
        return score_signal(self._signal)
