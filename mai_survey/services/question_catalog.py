from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from mai_survey.models.survey import Question, QuestionCatalog

logger = logging.getLogger(__name__)


class QuestionCatalogLoader:
    """Load the inventory items from a simple text file.

    Each non-empty line holds one item made of three pipe-separated parts:

        7 | 考试结束后，我知道自己考得怎么样。 | I know how well I did once I finish a test.

    The first part is the stable 1-based id, the second the short prompt shown
    as the card title and the third the long prompt shown beneath it. Lines
    beginning with "#" or that are blank are ignored. Ids must run from 1
    upwards without gaps or duplicates.
    """

    def __init__(self, source: str | Path) -> None:
        self._path = Path(source)
        if not self._path.is_file():
            raise FileNotFoundError(f"Question catalog not found: {self._path}")

        questions = list(self._load_questions())
        try:
            self._catalog = QuestionCatalog(questions=tuple(questions))
        except ValidationError as exc:
            raise ValueError(f"{self._path}: invalid question catalog: {exc}") from exc
        logger.info("Loaded %d questions from %s", len(self._catalog), self._path)

    @property
    def catalog(self) -> QuestionCatalog:
        """Return the full catalog loaded from the file."""

        return self._catalog

    def _load_questions(self) -> Iterable[Question]:
        seen: set[int] = set()
        with self._path.open("r", encoding="utf-8") as handle:
            for lineno, raw_line in enumerate(handle, start=1):
                line = raw_line.strip()
                if not line or line.startswith("#"):
                    continue

                question_id, prompt_short, prompt_long = self._parse_line(line, lineno)
                if question_id in seen:
                    raise ValueError(f"Line {lineno}: duplicate question id {question_id}")
                seen.add(question_id)
                yield Question(id=question_id, prompt_short=prompt_short, prompt_long=prompt_long)

    def _parse_line(self, line: str, lineno: int) -> tuple[int, str, str]:
        parts = [part.strip() for part in line.split("|")]
        if len(parts) != 3:
            raise ValueError(f"Line {lineno}: expected 'id | short prompt | long prompt'")

        raw_id, prompt_short, prompt_long = parts
        try:
            question_id = int(raw_id)
        except ValueError as exc:
            raise ValueError(f"Line {lineno}: question id must be an integer, got {raw_id!r}") from exc
        if question_id < 1:
            raise ValueError(f"Line {lineno}: question id must be positive")

        if not prompt_short or not prompt_long:
            raise ValueError(f"Line {lineno}: question text cannot be empty")

        return question_id, prompt_short, prompt_long


def load_catalog(source: str | Path) -> QuestionCatalog:
    """Convenience wrapper returning the catalog stored at ``source``."""

    return QuestionCatalogLoader(source).catalog
