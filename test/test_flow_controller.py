from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from mai_survey.models.survey import INFO_FIELDS, InfoRecord
from mai_survey.services.errors import (
    AlreadySubmittedError,
    EmptyCatalogError,
    InvalidFieldError,
    InvalidQuestionIdError,
    PageIncompleteError,
    PrematureSubmitError,
)
from mai_survey.services.flow_controller import PAGE_SIZE, SurveyFlowController


def _answer_page(controller: SurveyFlowController, value: bool = True) -> None:
    for question in controller.current_page_questions:
        controller.set_answer(question.id, value)


def _walk_to_info_stage(controller: SurveyFlowController) -> None:
    while not controller.is_info_stage:
        _answer_page(controller)
        controller.advance()


def _fill_info(controller: SurveyFlowController) -> None:
    controller.set_info_field("name", "李华")
    controller.set_info_field("age", "15")
    controller.set_info_field("school", "第一中学")
    controller.set_info_field("grade", "初三")


def test_page_size_constant_is_ten() -> None:
    assert PAGE_SIZE == 10


def test_new_controller_starts_on_first_page_with_empty_answers(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    assert controller.current_step == 0
    assert controller.answers == (None,) * 52
    assert controller.info == InfoRecord()
    assert not controller.is_info_stage


def test_mai_catalog_has_six_pages_with_short_final_page(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    assert controller.total_pages == 6
    sizes = [controller.page(index).size for index in range(controller.total_pages)]
    assert sizes == [10, 10, 10, 10, 10, 2]


@pytest.mark.parametrize("size", [1, 2, 9, 10, 11, 19, 20, 21, 52, 99, 100, 101])
def test_pagination_covers_contiguous_id_ranges(catalog_factory, size: int) -> None:
    controller = SurveyFlowController(catalog_factory(size))
    total_pages = controller.total_pages

    assert total_pages == math.ceil(size / 10)

    covered = []
    for index in range(total_pages):
        page = controller.page(index)
        ids = [question.id for question in page.questions]
        assert ids == list(range(index * 10 + 1, min((index + 1) * 10, size) + 1))
        covered.extend(ids)

    assert covered == list(range(1, size + 1))
    last_page = controller.page(total_pages - 1)
    assert last_page.size == size - (total_pages - 1) * 10
    assert 1 <= last_page.size <= 10
    assert last_page.is_last


def test_custom_page_size_changes_partition(catalog_factory) -> None:
    controller = SurveyFlowController(catalog_factory(7), page_size=3)

    assert controller.total_pages == 3
    assert [controller.page(index).size for index in range(3)] == [3, 3, 1]


def test_empty_catalog_is_rejected(catalog_factory) -> None:
    with pytest.raises(EmptyCatalogError):
        SurveyFlowController(catalog_factory(0))


def test_non_positive_page_size_is_rejected(catalog_factory) -> None:
    with pytest.raises(ValueError):
        SurveyFlowController(catalog_factory(5), page_size=0)


def test_set_answer_only_touches_target_slot(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    controller.set_answer(7, True)

    answers = controller.answers
    assert len(answers) == 52
    assert answers[6] is True
    assert all(value is None for index, value in enumerate(answers) if index != 6)


def test_reanswering_overwrites_previous_value(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    controller.set_answer(3, True)
    controller.set_answer(3, False)

    assert controller.get_answer(3) is False
    assert len(controller.answers) == 52
    assert controller.answered_count == 1


def test_set_answer_never_moves_position(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    _answer_page(controller)

    assert controller.current_step == 0


def test_previously_visited_page_can_be_reanswered(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _answer_page(controller, True)
    controller.advance()

    controller.set_answer(1, False)

    assert controller.current_step == 1
    assert controller.get_answer(1) is False


@pytest.mark.parametrize("question_id", [0, 53, -1, 100])
def test_set_answer_rejects_unknown_id(mai_catalog, question_id: int) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(InvalidQuestionIdError):
        controller.set_answer(question_id, True)

    assert controller.answers == (None,) * 52


def test_set_answer_rejects_non_integer_id(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(InvalidQuestionIdError):
        controller.set_answer("1", True)  # type: ignore[arg-type]


@pytest.mark.parametrize("value", [1, 0, "true", None])
def test_set_answer_rejects_non_boolean_value(mai_catalog, value) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(TypeError):
        controller.set_answer(1, value)

    assert controller.get_answer(1) is None


def test_alternating_first_page_then_advance(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    for question_id in range(1, 11):
        controller.set_answer(question_id, question_id % 2 == 1)

    assert controller.is_page_answered
    controller.advance()

    assert controller.current_step == 1
    answers = controller.answers
    assert list(answers[:10]) == [True, False] * 5
    assert all(value is None for value in answers[10:])


def test_is_page_answered_requires_every_item(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    for question_id in range(1, 10):
        controller.set_answer(question_id, False)

    assert not controller.is_page_answered
    assert controller.unanswered_ids(current_page_only=True) == (10,)

    controller.set_answer(10, False)

    assert controller.is_page_answered
    assert controller.current_page().is_answered


def test_answers_on_other_pages_do_not_complete_current_page(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    for question_id in range(11, 21):
        controller.set_answer(question_id, True)

    assert not controller.is_page_answered
    assert controller.page(1).is_answered


def test_go_next_is_permissive(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    assert not controller.is_page_answered
    assert controller.go_next() == 1


def test_advance_blocks_incomplete_page(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    controller.set_answer(1, True)

    with pytest.raises(PageIncompleteError) as excinfo:
        controller.advance()

    assert controller.current_step == 0
    assert excinfo.value.unanswered_ids == tuple(range(2, 11))


def test_go_prev_at_first_page_stays_put(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    assert controller.go_prev() == 0
    assert controller.current_step == 0


def test_navigation_clamps_to_valid_range(catalog_factory) -> None:
    controller = SurveyFlowController(catalog_factory(25))

    for _ in range(10):
        controller.go_next()
        assert 0 <= controller.current_step <= controller.total_pages
    assert controller.current_step == controller.total_pages == 3
    assert controller.is_info_stage

    for _ in range(10):
        controller.go_prev()
        assert 0 <= controller.current_step <= controller.total_pages
    assert controller.current_step == 0


def test_go_prev_leaves_info_stage(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)

    controller.go_prev()

    assert controller.current_step == 5
    assert controller.current_page().is_last


def test_info_stage_has_no_question_page(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)

    assert controller.current_page() is None
    assert controller.current_page_questions == ()
    assert controller.is_page_answered


def test_page_index_out_of_range(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(IndexError):
        controller.page(6)


def test_set_info_field_replaces_only_that_field(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    controller.set_info_field("school", "实验中学")

    assert controller.info.school == "实验中学"
    assert controller.info.name == ""
    assert controller.missing_info_fields() == ("name", "age", "grade")


def test_set_info_field_rejects_unknown_field(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(InvalidFieldError):
        controller.set_info_field("email", "a@example.com")

    assert controller.info == InfoRecord()


def test_set_info_field_rejects_non_string(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(TypeError):
        controller.set_info_field("age", 15)  # type: ignore[arg-type]


def test_info_copy_does_not_leak_mutations(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    snapshot = controller.info
    snapshot.name = "someone else"

    assert controller.info.name == ""


def test_submit_before_info_stage_is_rejected(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)

    with pytest.raises(PrematureSubmitError):
        controller.submit()

    assert not controller.submitted


def test_submit_emits_answers_and_info(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)
    controller.set_answer(52, False)
    _fill_info(controller)

    signal = controller.submit()

    expected_answers = (True,) * 51 + (False,)
    assert signal.answers == expected_answers
    assert signal.info.model_dump() == {
        "name": "李华",
        "age": "15",
        "school": "第一中学",
        "grade": "初三",
    }
    assert tuple(signal.info.model_dump()) == INFO_FIELDS
    assert controller.current_step == controller.total_pages


def test_submit_payload_is_not_mutated_afterwards(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)
    _fill_info(controller)
    signal = controller.submit()

    controller.set_answer(1, False)
    controller.set_info_field("name", "changed")

    assert signal.answers[0] is True
    assert signal.info.name == "李华"


def test_submit_does_not_require_info_fields(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)

    signal = controller.submit()

    assert signal.info.model_dump() == InfoRecord().model_dump()


def test_submit_fires_only_once(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)
    _fill_info(controller)
    controller.submit()

    with pytest.raises(AlreadySubmittedError):
        controller.submit()


def test_submitted_info_is_read_only(mai_catalog) -> None:
    controller = SurveyFlowController(mai_catalog)
    _walk_to_info_stage(controller)
    _fill_info(controller)
    signal = controller.submit()

    with pytest.raises(ValidationError):
        signal.info.school = "changed"

    assert signal.info.school == "第一中学"
