from __future__ import annotations


class SurveyFlowError(RuntimeError):
    """Raised when a caller breaks the flow controller's contract."""


class InvalidQuestionIdError(SurveyFlowError):
    """Raised when an answer targets an id that is not in the catalog."""

    def __init__(self, question_id: object) -> None:
        super().__init__(f"Unknown question id: {question_id!r}")
        self.question_id = question_id


class InvalidFieldError(SurveyFlowError):
    """Raised when an info update names a field outside the fixed set."""

    def __init__(self, field: object) -> None:
        super().__init__(f"Unknown info field: {field!r}")
        self.field = field


class PrematureSubmitError(SurveyFlowError):
    """Raised when submission is attempted before the info stage."""


class AlreadySubmittedError(SurveyFlowError):
    """Raised when a completed survey is submitted a second time."""


class PageIncompleteError(SurveyFlowError):
    """Raised by the gated advance when the current page has unanswered items."""

    def __init__(self, page_index: int, unanswered_ids: tuple[int, ...]) -> None:
        missing = ", ".join(str(question_id) for question_id in unanswered_ids)
        super().__init__(f"Page {page_index + 1} has unanswered questions: {missing}")
        self.page_index = page_index
        self.unanswered_ids = unanswered_ids


class EmptyCatalogError(ValueError):
    """Raised when a flow controller is built over a catalog with no items."""


__all__ = [
    "SurveyFlowError",
    "InvalidQuestionIdError",
    "InvalidFieldError",
    "PrematureSubmitError",
    "AlreadySubmittedError",
    "PageIncompleteError",
    "EmptyCatalogError",
]
