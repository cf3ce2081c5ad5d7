from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.pop("MAI_CATALOG_PATH", None)
os.environ.setdefault("MAI_PAGE_SIZE", "10")

from mai_survey.models.survey import Question, QuestionCatalog  # noqa: E402
from mai_survey.services.question_catalog import load_catalog  # noqa: E402

BUNDLED_CATALOG = PROJECT_ROOT / "mai_survey" / "data" / "mai_questions.txt"


def make_catalog(size: int) -> QuestionCatalog:
    return QuestionCatalog(
        questions=tuple(
            Question(id=index, prompt_short=f"题目 {index}", prompt_long=f"Statement {index}")
            for index in range(1, size + 1)
        )
    )


@pytest.fixture(scope="session")
def mai_catalog() -> QuestionCatalog:
    return load_catalog(BUNDLED_CATALOG)


@pytest.fixture
def catalog_factory():
    return make_catalog
