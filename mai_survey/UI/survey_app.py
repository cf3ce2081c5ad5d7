from __future__ import annotations

import logging

import streamlit as st

from mai_survey.UI import components, navigation, state
from mai_survey.core.config import settings
from mai_survey.models.survey import QuestionCatalog
from mai_survey.services.errors import EmptyCatalogError, SurveyFlowError
from mai_survey.services.question_catalog import load_catalog

logger = logging.getLogger(__name__)


@st.cache_resource
def get_catalog() -> QuestionCatalog:
    """Load the configured question catalog once per server process."""

    return load_catalog(settings.catalog_file_path)


def run_app() -> None:
    """Entry point for the Streamlit-based survey UI."""

    st.set_page_config(page_title="MAI Survey", page_icon=settings.ui.page_icon, layout="centered")
    components.render_header()

    try:
        catalog = get_catalog()
        state.ensure_defaults(catalog, settings.page_size)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("Unable to load question catalog: %s", exc)
        st.error(str(exc))
        return

    if state.is_complete():
        _render_results()
        components.render_footer()
        return

    try:
        controller = state.get_controller()
    except EmptyCatalogError:
        st.info("No survey questions available.")
        return

    components.render_notice()

    page = controller.current_page()
    if page is None:
        components.render_info_form(on_submit=_submit, on_back=controller.go_prev)
    else:
        components.render_page_header(page, controller.total_pages, len(catalog))
        components.render_question_page(page)
        st.caption(f"已作答 {controller.answered_count} / {len(catalog)} 题")
        navigation.render()

    components.render_footer()


def _submit() -> None:
    try:
        state.get_shell().submit()
    except SurveyFlowError as exc:
        logger.warning("Submit rejected: %s", exc)
        state.set_notice(str(exc))


def _render_results() -> None:
    shell = state.get_shell()
    try:
        report = shell.report()
    except ValueError as exc:
        logger.warning("Unable to score responses: %s", exc)
        st.error(f"无法计算结果：{exc}")
        if st.button(components.RESTART_LABEL, key="restart_survey_button"):
            state.restart()
            st.rerun()
        return

    if report is None:
        st.info("No results available yet.")
        return

    components.render_results(report, on_restart=state.restart)
