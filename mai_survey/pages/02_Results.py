from __future__ import annotations

import logging

import streamlit as st

from mai_survey.UI import components, state
from mai_survey.UI.survey_app import get_catalog
from mai_survey.core.config import settings

logger = logging.getLogger(__name__)

st.set_page_config(page_title="MAI Results", page_icon="📊", layout="wide")


def _render() -> None:
    try:
        state.ensure_defaults(get_catalog(), settings.page_size)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Unable to load question catalog: %s", exc)
        st.error(str(exc))
        return

    report = state.get_shell().report() if state.is_complete() else None
    if report is None:
        st.info("完成测评并提交个人信息后即可在此查看结果。")
        return
    components.render_results(report, on_restart=state.restart)


_render()
