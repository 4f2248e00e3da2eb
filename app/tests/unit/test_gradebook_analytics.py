"""Tests for gradebook statistics and score distributions."""

import pytest
from grading.gradebook_analytics import (
    achievement_distribution,
    assignment_statistics,
    class_average,
    compute_score_bins,
    create_histogram_figure,
    letter_grade_distribution,
    weighted_final_grade,
)
from models.assignment import AssignmentData
from models.grade import AchievementLevel, GradeStatus


class TestWeightedFinalGrade:
    def test_weights_by_points(self, matrix, directory):
        matrix.upsert("s1", "A1", "c1", 90)  # 90 of 100
        matrix.upsert("s1", "A2", "c1", 50)  # 20 of 40
        final = weighted_final_grade(matrix, "s1", directory.assignments_for_class("c1"))
        assert final == pytest.approx(110 / 140 * 100)

    def test_ungraded_assignments_ignored(self, matrix, directory):
        matrix.upsert("s1", "A3", "c1", 80)
        assert weighted_final_grade(
            matrix, "s1", directory.assignments_for_class("c1")
        ) == pytest.approx(80.0)

    def test_excused_ignored(self, matrix, directory):
        matrix.upsert("s1", "A1", "c1", 40)
        matrix.set_status("s1", "A1", GradeStatus.EXCUSED)
        matrix.upsert("s1", "A3", "c1", 100)
        assert weighted_final_grade(
            matrix, "s1", directory.assignments_for_class("c1")
        ) == pytest.approx(100.0)

    def test_missing_counts_as_zero(self, matrix):
        assignments = [AssignmentData("A1", "c1", 50), AssignmentData("A2", "c1", 50)]
        matrix.upsert("s1", "A1", "c1", 100)
        matrix.set_status("s1", "A2", GradeStatus.MISSING, class_id="c1")
        assert weighted_final_grade(matrix, "s1", assignments) == pytest.approx(50.0)

    def test_nothing_graded(self, matrix, directory):
        assert weighted_final_grade(matrix, "s1", directory.assignments_for_class("c1")) is None


class TestAverages:
    def test_class_average(self, matrix):
        matrix.upsert("s1", "A1", "c1", 80)
        matrix.upsert("s2", "A1", "c1", 60)
        matrix.upsert("s9", "A1", "c2", 10)
        assert class_average(matrix, "c1") == pytest.approx(70.0)
        assert class_average(matrix, "c3") is None

    def test_assignment_statistics(self, matrix):
        for sid, score in [("s1", 60), ("s2", 80), ("s3", 95)]:
            matrix.upsert(sid, "A1", "c1", score)
        st = assignment_statistics(matrix, "A1")
        assert st.count == 3
        assert st.mean == pytest.approx(78.333, abs=0.01)
        assert st.median == 80.0
        assert st.min_score == 60.0
        assert st.max_score == 95.0

    def test_assignment_statistics_empty(self, matrix):
        st = assignment_statistics(matrix, "A1")
        assert st.count == 0
        assert st.mean == 0.0


class TestDistributions:
    def test_letter_grades(self):
        dist = letter_grade_distribution([98, 95, 91, 85, 50, 12])
        assert dist["A+"] == 1
        assert dist["A"] == 1
        assert dist["A-"] == 1
        assert dist["B"] == 1
        assert dist["F"] == 2
        assert list(dist)[0] == "A+"
        assert list(dist)[-1] == "F"

    def test_achievement_levels(self):
        dist = achievement_distribution([10, 65, 80, 85, 95])
        assert dist == {
            AchievementLevel.LEVEL_1: 1,
            AchievementLevel.LEVEL_2: 1,
            AchievementLevel.LEVEL_3: 2,
            AchievementLevel.LEVEL_4: 1,
        }


class TestScoreBins:
    def test_default_bins(self):
        labels, counts = compute_score_bins([5, 15, 15, 100])
        assert labels[0] == "0-10%"
        assert labels[-1] == "90-100%"
        assert counts[0] == 1
        assert counts[1] == 2
        assert counts[-1] == 1
        assert sum(counts) == 4

    def test_out_of_range_clamped(self):
        _, counts = compute_score_bins([-5, 120], num_bins=4)
        assert counts == [1, 0, 0, 1]

    def test_empty(self):
        labels, counts = compute_score_bins([], num_bins=5)
        assert len(labels) == 5
        assert counts == [0] * 5

    def test_uneven_bin_labels(self):
        labels, _ = compute_score_bins([], num_bins=3)
        assert labels == ["0-33%", "33-67%", "67-100%"]

    def test_needs_at_least_one_bin(self):
        with pytest.raises(ValueError):
            compute_score_bins([50], num_bins=0)


class TestHistogramFigure:
    def test_creates_figure(self):
        pytest.importorskip("matplotlib")
        fig = create_histogram_figure([55, 72.5, 88, 91, 100], num_bins=5, title="Quiz 1")
        ax = fig.axes[0]
        assert ax.get_title() == "Quiz 1"
        assert len(ax.patches) == 5

    def test_bars_coloured_by_achievement_level(self):
        pytest.importorskip("matplotlib")
        from matplotlib.colors import to_hex

        fig = create_histogram_figure([10, 95], num_bins=4)
        colours = [to_hex(bar.get_facecolor()) for bar in fig.axes[0].patches]
        # bins start at 0, 25, 50, 75 -> levels 1, 1, 1, 3
        assert colours[0] == colours[1] == colours[2]
        assert colours[3] != colours[0]

    def test_mean_line_only_with_scores(self):
        pytest.importorskip("matplotlib")
        assert len(create_histogram_figure([50, 70], num_bins=5).axes[0].lines) == 1
        assert len(create_histogram_figure([], num_bins=5).axes[0].lines) == 0
