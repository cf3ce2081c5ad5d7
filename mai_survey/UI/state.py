from __future__ import annotations

import streamlit as st

from mai_survey.models.survey import QuestionCatalog
from mai_survey.services.flow_controller import SurveyFlowController
from mai_survey.services.survey_shell import SurveyShell

SHELL_KEY = "survey_shell"
NOTICE_KEY = "survey_notice"
_WIDGET_PREFIXES = ("answer_", "info_")


def ensure_defaults(catalog: QuestionCatalog, page_size: int) -> None:
    """Ensure a survey shell exists for this browser session."""

    if SHELL_KEY not in st.session_state:
        st.session_state[SHELL_KEY] = SurveyShell(catalog, page_size=page_size)
    st.session_state.setdefault(NOTICE_KEY, None)


def get_shell() -> SurveyShell:
    """Return the shell owning the current attempt."""

    return st.session_state[SHELL_KEY]


def get_controller() -> SurveyFlowController:
    """Return the active flow controller."""

    return get_shell().controller


def is_complete() -> bool:
    """Return True once the info form has been submitted."""

    return bool(get_shell().completed)


def set_notice(message: str | None) -> None:
    """Store a message to show above the next render."""

    st.session_state[NOTICE_KEY] = message


def pop_notice() -> str | None:
    """Return and clear any pending notice."""

    message = st.session_state.get(NOTICE_KEY)
    st.session_state[NOTICE_KEY] = None
    return message


def forget_widgets() -> None:
    """Drop widget values so a new attempt starts with empty inputs."""

    for key in [name for name in st.session_state.keys() if str(name).startswith(_WIDGET_PREFIXES)]:
        del st.session_state[key]


def restart() -> None:
    """Discard the current attempt and start a new one."""

    get_shell().restart()
    forget_widgets()
    set_notice(None)
