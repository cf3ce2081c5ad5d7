from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "mai_questions.txt"
_DEFAULT_APP_TITLE = "MAI 元认知意识测评"
_DEFAULT_PAGE_SIZE = 10


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


@dataclass(frozen=True)
class UISettings:
    app_title: str
    page_icon: str
    footer_text: str


class Settings:

    def __init__(self) -> None:
        catalog_path = _strip_or_none(os.getenv("MAI_CATALOG_PATH"))
        self.catalog_file_path = (
            Path(catalog_path).expanduser().resolve() if catalog_path else _DEFAULT_CATALOG_PATH
        )
        if not self.catalog_file_path.is_file():
            raise RuntimeError(f"Question catalog not found at {self.catalog_file_path}")

        # Pagination only; the MAI catalog and its scoring stay at 52 items.
        raw_page_size = _strip_or_none(os.getenv("MAI_PAGE_SIZE"))
        if raw_page_size is None:
            self.page_size = _DEFAULT_PAGE_SIZE
        else:
            try:
                self.page_size = int(raw_page_size)
            except ValueError as exc:
                raise RuntimeError(f"MAI_PAGE_SIZE must be an integer, got {raw_page_size!r}") from exc
            if self.page_size <= 0:
                raise RuntimeError("MAI_PAGE_SIZE must be a positive integer.")

        self.log_level = (_strip_or_none(os.getenv("LOG_LEVEL")) or "INFO").upper()

        app_title = _strip_or_none(os.getenv("MAI_APP_TITLE")) or _DEFAULT_APP_TITLE
        self.ui = UISettings(
            app_title=app_title,
            page_icon="📝",
            footer_text="MAI Survey",
        )


settings = Settings()
