from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Dict

import streamlit as st

from mai_survey.core.config import settings
from mai_survey.models.results import MaiReport
from mai_survey.models.survey import INFO_FIELDS, Question, SurveyPage
from mai_survey.services.charts import ChartData, SurveyChartBuilder
from mai_survey.services.errors import SurveyFlowError

from . import state

logger = logging.getLogger(__name__)

TRUE_LABEL = "True（是）"
FALSE_LABEL = "False（否）"
PREV_LABEL = "上一页"
SUBMIT_LABEL = "查看结果"
RESTART_LABEL = "重新测评"

INFO_LABELS: Dict[str, str] = {
    "name": "姓名",
    "age": "年龄",
    "school": "学校",
    "grade": "年级",
}


def render_header() -> None:
    """Render the app title bar."""

    st.title(settings.ui.app_title)


def render_footer() -> None:
    st.divider()
    st.caption(f"© {date.today().year} {settings.ui.footer_text}")


def render_notice() -> None:
    """Show any message left by the previous interaction."""

    message = state.pop_notice()
    if message:
        st.warning(message)


def render_page_header(page: SurveyPage, total_pages: int, total_questions: int) -> None:
    """Render progress information for the active question page."""

    st.progress((page.index + 1) / total_pages)
    range_col, page_col = st.columns([3, 1])
    with range_col:
        st.markdown(f"第 {page.start_number}–{page.end_number} 题，共 {total_questions} 题")
    with page_col:
        st.markdown(f"页面 {page.index + 1} / {total_pages}")


def render_question_card(question: Question, current: bool | None) -> None:
    """Render one statement with its true/false buttons."""

    def _answer(value: bool) -> None:
        try:
            state.get_controller().set_answer(question.id, value)
        except SurveyFlowError as exc:
            logger.warning("Answer rejected: %s", exc)
            state.set_notice(str(exc))

    with st.container(border=True):
        st.markdown(f"**{question.id}. {question.prompt_short}**")
        st.caption(question.prompt_long)
        true_col, false_col, _ = st.columns([1, 1, 2])
        with true_col:
            st.button(
                TRUE_LABEL,
                key=f"answer_{question.id}_true",
                type="primary" if current is True else "secondary",
                on_click=_answer,
                args=(True,),
                width="stretch",
            )
        with false_col:
            st.button(
                FALSE_LABEL,
                key=f"answer_{question.id}_false",
                type="primary" if current is False else "secondary",
                on_click=_answer,
                args=(False,),
                width="stretch",
            )


def render_question_page(page: SurveyPage) -> None:
    """Render every question on ``page``."""

    controller = state.get_controller()
    for question in page.questions:
        render_question_card(question, controller.get_answer(question.id))


def render_info_form(on_submit: Callable[[], None], on_back: Callable[[], None]) -> None:
    """Render the identifying-information form shown after the last page."""

    controller = state.get_controller()
    current = controller.info

    st.subheader("填写个人信息")
    with st.form("info_form"):
        values: Dict[str, str] = {}
        for field in INFO_FIELDS:
            widget_key = f"info_{field}"
            if widget_key not in st.session_state:
                st.session_state[widget_key] = getattr(current, field)
            values[field] = st.text_input(INFO_LABELS[field], key=widget_key)

        back_col, _, submit_col = st.columns([1, 2, 1])
        with back_col:
            back_clicked = st.form_submit_button(PREV_LABEL)
        with submit_col:
            submitted = st.form_submit_button(SUBMIT_LABEL, type="primary")

    for field, value in values.items():
        controller.set_info_field(field, value or "")

    if back_clicked:
        on_back()
        st.rerun()

    if submitted:
        missing = controller.missing_info_fields()
        if missing:
            labels = "、".join(INFO_LABELS[field] for field in missing)
            st.warning(f"请填写：{labels}")
            return
        on_submit()
        st.rerun()


def render_chart(chart: ChartData) -> None:
    """Render a chart payload with Streamlit's built-in charts."""

    st.markdown(f"**{chart.title}**")
    if chart.description:
        st.caption(chart.description)
    st.bar_chart(chart.as_dict(), horizontal=True)


def render_results(report: MaiReport, on_restart: Callable[[], None]) -> None:
    """Display the scored inventory for the submitted attempt."""

    info = report.info
    st.success("测评完成！")
    st.markdown(f"**{info.name}** · {info.age} 岁 · {info.school} · {info.grade}")

    total_col, knowledge_col, regulation_col = st.columns(3)
    total_col.metric("总分", f"{report.total_score} / {report.max_score}")
    for column, component in zip((knowledge_col, regulation_col), report.components):
        column.metric(component.label, f"{component.score} / {component.max_score}")

    if report.unanswered_ids:
        st.warning(f"以下题目未作答，按 0 分计：{', '.join(map(str, report.unanswered_ids))}")

    charts = SurveyChartBuilder(report)
    render_chart(charts.subscale_chart())

    st.markdown("### 分量表得分")
    st.table(
        [
            {
                "分量表": subscale.label,
                "得分": f"{subscale.score} / {subscale.max_score}",
                "比例": f"{subscale.ratio:.0%}",
            }
            for subscale in report.subscales
        ]
    )

    strongest = report.strongest_subscale()
    weakest = report.weakest_subscale()
    if strongest and weakest and strongest.key != weakest.key:
        st.info(f"相对优势：{strongest.label}；可加强：{weakest.label}")

    st.download_button(
        "下载结果 (JSON)",
        data=report.model_dump_json(indent=2),
        file_name="mai_results.json",
        mime="application/json",
    )

    st.divider()
    if st.button(RESTART_LABEL, key="restart_survey_button"):
        on_restart()
        st.rerun()
