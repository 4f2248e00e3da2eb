"""Tests for the single-cell edit state machine."""

import pytest
from controllers.cell_editor import CellEditor, EditState, GradeCell, parse_score_input
from models.errors import AssignmentNotFoundError, EditStateError, GradeValidationError
from tests.conftest import EventLog


@pytest.fixture
def events():
    return EventLog()


@pytest.fixture
def editor(matrix, directory, events):
    return CellEditor(matrix, directory, notify=events)


CELL = GradeCell("s1", "A1")


class TestParseScoreInput:
    @pytest.mark.parametrize("raw, expected", [("0", 0), ("85", 85), (" 100 ", 100), (42, 42)])
    def test_valid(self, raw, expected):
        assert parse_score_input(raw, 100) == expected

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_empty(self, raw):
        with pytest.raises(GradeValidationError, match="enter a score"):
            parse_score_input(raw, 100)

    @pytest.mark.parametrize("raw", ["abc", "85.5", "8 5"])
    def test_not_a_whole_number(self, raw):
        with pytest.raises(GradeValidationError, match="not a whole number"):
            parse_score_input(raw, 100)

    def test_negative(self):
        with pytest.raises(GradeValidationError, match="negative"):
            parse_score_input("-1", 100)

    def test_over_maximum(self):
        with pytest.raises(GradeValidationError, match="exceed 100") as exc_info:
            parse_score_input("150", 100)
        assert exc_info.value.raw_input == "150"
        assert exc_info.value.maximum == 100


class TestBeginEdit:
    def test_empty_cell_prefills_blank(self, editor, events):
        assert editor.begin_edit(CELL) == ""
        assert editor.state is EditState.EDITING
        assert editor.editing_cell == CELL
        assert events.names() == ["edit_started"]

    def test_prefills_existing_score(self, editor, matrix):
        matrix.upsert("s1", "A1", "c1", 85)
        assert editor.begin_edit(CELL) == "85"
        assert editor.buffer == "85"

    def test_prefill_truncates_fraction(self, editor, matrix):
        matrix.upsert("s1", "A1", "c1", 72.5)
        assert editor.begin_edit(CELL) == "72"

    def test_opening_other_cell_cancels_current(self, editor, matrix, events):
        other = GradeCell("s2", "A1")
        editor.begin_edit(CELL)
        editor.begin_edit(other)
        assert editor.editing_cell == other
        assert not editor.is_editing(CELL)
        assert events.names() == ["edit_started", "edit_cancelled", "edit_started"]
        assert len(matrix) == 0

    def test_reopening_same_cell(self, editor, events):
        editor.begin_edit(CELL)
        editor.begin_edit(CELL)
        assert editor.is_editing(CELL)
        assert events.count("edit_cancelled") == 0


class TestCommit:
    def test_writes_score(self, editor, matrix, events):
        editor.begin_edit(CELL)
        grade = editor.commit(CELL, "85")
        assert grade.score == 85
        assert grade.class_id == "c1"
        assert matrix.get("s1", "A1").score == 85
        assert editor.state is EditState.VIEWING
        assert editor.editing_cell is None
        assert events.last() == ("edit_committed", grade)

    def test_invalid_input_stays_editing(self, editor, matrix, events):
        matrix.upsert("s1", "A1", "c1", 60)
        editor.begin_edit(CELL)
        with pytest.raises(GradeValidationError):
            editor.commit(CELL, "150")
        assert editor.state is EditState.EDITING
        assert editor.is_editing(CELL)
        assert editor.last_error is not None
        assert matrix.get("s1", "A1").score == 60
        assert events.last()[0] == "edit_rejected"

    def test_retry_after_rejection(self, editor, matrix):
        editor.begin_edit(CELL)
        with pytest.raises(GradeValidationError):
            editor.commit(CELL, "abc")
        editor.commit(CELL, "90")
        assert matrix.get("s1", "A1").score == 90
        assert editor.last_error is None

    def test_commit_without_begin(self, editor):
        with pytest.raises(EditStateError):
            editor.commit(CELL, "85")

    def test_commit_wrong_cell(self, editor):
        editor.begin_edit(CELL)
        with pytest.raises(EditStateError):
            editor.commit(GradeCell("s2", "A1"), "85")
        assert editor.is_editing(CELL)

    def test_keeps_existing_class_and_status(self, editor, matrix):
        matrix.upsert("s1", "A1", "other-class", 40)
        editor.begin_edit(CELL)
        grade = editor.commit(CELL, "50")
        assert grade.class_id == "other-class"

    def test_unknown_assignment_without_entry(self, editor, matrix):
        cell = GradeCell("s1", "nope")
        editor.begin_edit(cell)
        with pytest.raises(AssignmentNotFoundError):
            editor.commit(cell, "50")
        assert editor.is_editing(cell)
        assert len(matrix) == 0

    def test_as_points_converts_to_percentage(self, editor, matrix):
        cell = GradeCell("s1", "A2")
        editor.begin_edit(cell)
        grade = editor.commit(cell, "29", as_points=True)
        assert grade.score == 72.5

    def test_as_points_checks_assignment_total(self, editor, matrix):
        cell = GradeCell("s1", "A2")
        editor.begin_edit(cell)
        with pytest.raises(GradeValidationError, match="exceed 40"):
            editor.commit(cell, "41", as_points=True)
        assert matrix.get("s1", "A2") is None

    def test_custom_max_percentage(self, matrix, directory):
        editor = CellEditor(matrix, directory, max_percentage=110)
        editor.begin_edit(CELL)
        assert editor.commit(CELL, "105").score == 105

    def test_manual_commit_clears_rubric_flag(self, editor, matrix):
        matrix.upsert("s1", "A1", "c1", 80).rubric_scored = True
        editor.begin_edit(CELL)
        grade = editor.commit(CELL, "95")
        assert grade.score == 95
        assert not grade.rubric_scored


class TestCancel:
    def test_cancel_leaves_matrix_unchanged(self, editor, matrix, events):
        matrix.upsert("s1", "A1", "c1", 70)
        before = matrix.snapshot()
        editor.begin_edit(CELL)
        editor.cancel(CELL)
        assert matrix.snapshot() == before
        assert editor.state is EditState.VIEWING
        assert events.last() == ("edit_cancelled", CELL)

    def test_cancel_after_rejection(self, editor, matrix):
        editor.begin_edit(CELL)
        with pytest.raises(GradeValidationError):
            editor.commit(CELL, "-3")
        editor.cancel(CELL)
        assert len(matrix) == 0
        assert editor.state is EditState.VIEWING

    def test_cancel_when_not_editing(self, editor):
        with pytest.raises(EditStateError):
            editor.cancel(CELL)
