from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

INFO_FIELDS: Tuple[str, ...] = ("name", "age", "school", "grade")

AnswerValue = Optional[bool]


class Question(BaseModel):
    """A single inventory item with its display text."""

    id: int = Field(..., ge=1)
    prompt_short: str
    prompt_long: str

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("prompt_short", "prompt_long", mode="before")
    @classmethod
    def _strip_prompt(cls, value: str) -> str:
        if not isinstance(value, str):
            raise TypeError("prompts must be strings")
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("prompt text cannot be empty")
        return cleaned


class QuestionCatalog(BaseModel):
    """Ordered, read-only list of inventory items keyed by dense 1-based ids."""

    questions: Tuple[Question, ...]

    model_config = {"extra": "forbid", "frozen": True}

    @model_validator(mode="after")
    def _ensure_dense_ids(self) -> "QuestionCatalog":
        for position, question in enumerate(self.questions, start=1):
            if question.id != position:
                raise ValueError(
                    f"question ids must be dense and ordered: expected {position}, got {question.id}"
                )
        return self

    def __len__(self) -> int:
        return len(self.questions)

    def get(self, question_id: int) -> Question | None:
        """Return the question with ``question_id`` or ``None`` when absent."""

        if isinstance(question_id, bool) or not isinstance(question_id, int):
            return None
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def contains(self, question_id: int) -> bool:
        return self.get(question_id) is not None


class InfoRecord(BaseModel):
    """Identifying details collected after the question pages."""

    name: str = ""
    age: str = ""
    school: str = ""
    grade: str = ""

    model_config = {"extra": "forbid", "validate_assignment": True}

    def missing_fields(self) -> Tuple[str, ...]:
        """Return the names of fields that are still blank."""

        return tuple(field for field in INFO_FIELDS if not getattr(self, field).strip())

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


class InfoSnapshot(InfoRecord):
    """Read-only copy of an info record taken at submission time."""

    model_config = {"extra": "forbid", "frozen": True}


class CompletionSignal(BaseModel):
    """One-shot hand-off of the final answers and info to the results stage."""

    answers: Tuple[AnswerValue, ...]
    info: InfoSnapshot

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("info", mode="before")
    @classmethod
    def _snapshot_info(cls, value):
        if isinstance(value, InfoRecord):
            return value.model_dump()
        return value

    @property
    def answered_count(self) -> int:
        return sum(1 for value in self.answers if value is not None)


@dataclass(frozen=True)
class SurveyPage:
    """Derived view of one page of questions."""

    index: int
    questions: Tuple[Question, ...]
    is_answered: bool
    is_last: bool

    @property
    def start_number(self) -> int:
        return self.questions[0].id if self.questions else 0

    @property
    def end_number(self) -> int:
        return self.questions[-1].id if self.questions else 0

    @property
    def size(self) -> int:
        return len(self.questions)
