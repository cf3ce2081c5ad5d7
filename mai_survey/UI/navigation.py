from __future__ import annotations

import logging

import streamlit as st

from mai_survey.services.errors import PageIncompleteError

from . import state

logger = logging.getLogger(__name__)

PREV_LABEL = "上一页"
NEXT_LABEL = "下一页"
TO_INFO_LABEL = "去填写信息"


def render() -> None:
    """Render navigation controls for moving between question pages."""

    controller = state.get_controller()
    page = controller.current_page()
    if page is None:
        return

    prev_disabled = controller.current_step == 0
    next_disabled = not page.is_answered
    next_label = TO_INFO_LABEL if page.is_last else NEXT_LABEL

    if next_disabled:
        remaining = len(controller.unanswered_ids(current_page_only=True))
        st.caption(f"本页还有 {remaining} 题未作答")

    def _go_previous() -> None:
        state.get_controller().go_prev()

    def _go_next() -> None:
        try:
            state.get_controller().advance()
        except PageIncompleteError as exc:
            logger.info("Next blocked: %s", exc)
            state.set_notice(f"请先完成本页所有题目（未作答：{', '.join(map(str, exc.unanswered_ids))}）")

    prev_col, _, next_col = st.columns([1, 2, 1])
    with prev_col:
        st.button(PREV_LABEL, on_click=_go_previous, disabled=prev_disabled, key="nav_prev")
    with next_col:
        st.button(
            next_label,
            on_click=_go_next,
            disabled=next_disabled,
            type="primary",
            key="nav_next",
        )
