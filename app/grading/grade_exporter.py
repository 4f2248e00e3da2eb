"""Gradebook export to CSV and Excel.

Produces one row per enrolled student and one column per assignment of
a class. Cells with no grade are left blank; missing, incomplete and
excused entries show their status instead of a score.

No Qt dependencies - pure Python module.
"""

import csv
import statistics
from datetime import datetime
from pathlib import Path
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from grading.gradebook_analytics import assignment_statistics
from models.directory import CourseDirectory
from models.grade import GradeData, GradeStatus
from models.grade_matrix import GradeMatrix


def _cell_value(grade: Optional[GradeData]):
    if grade is None:
        return ""
    if grade.status is not GradeStatus.GRADED:
        return grade.status.label
    return grade.score


def build_gradebook_table(
    matrix: GradeMatrix, directory: CourseDirectory, class_id: str
) -> tuple[list[str], list[list]]:
    """Return (header, rows) for a class gradebook.

    Format:
        Student ID, Student Name, <assignment> (Npts), ..., Average
    """
    assignments = directory.assignments_for_class(class_id)
    header = ["Student ID", "Student Name"]
    header += [f"{a.title or a.assignment_id} ({a.total_points:g}pts)" for a in assignments]
    header.append("Average")

    rows = []
    for student_id in directory.students_in_class(class_id):
        student = directory.get_student(student_id)
        row = [student_id, student.display_name if student else student_id]
        scores = []
        for assignment in assignments:
            grade = matrix.get(student_id, assignment.assignment_id)
            row.append(_cell_value(grade))
            if grade is not None and grade.status is GradeStatus.GRADED:
                scores.append(grade.score)
        row.append(round(statistics.fmean(scores), 1) if scores else "")
        rows.append(row)
    return header, rows


def export_gradebook_csv(
    matrix: GradeMatrix, directory: CourseDirectory, class_id: str, filepath
) -> None:
    """Export a class gradebook as CSV, followed by per-assignment statistics."""
    filepath = Path(filepath)
    header, rows = build_gradebook_table(matrix, directory, class_id)

    with open(filepath, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if not rows:
            writer.writerow(["No students to export"])
            return

        writer.writerow(header)
        for row in rows:
            writer.writerow(row)

        writer.writerow([])
        writer.writerow(["Assignment", "Graded", "Mean", "Median", "Min", "Max"])
        for assignment in directory.assignments_for_class(class_id):
            st = assignment_statistics(matrix, assignment.assignment_id)
            writer.writerow(
                [
                    assignment.title or assignment.assignment_id,
                    st.count,
                    f"{st.mean:.1f}%",
                    f"{st.median:.1f}%",
                    f"{st.min_score:.1f}%",
                    f"{st.max_score:.1f}%",
                ]
            )


def _style_header_row(ws, row_num=1):
    """Apply header styling to a worksheet row."""
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    for cell in ws[row_num]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")


def export_gradebook_excel(
    matrix: GradeMatrix, directory: CourseDirectory, class_id: str, filepath
) -> None:
    """Export a class gradebook to an Excel workbook.

    The first sheet holds the grade table, the second one summary
    statistics per assignment.
    """
    header, rows = build_gradebook_table(matrix, directory, class_id)

    wb = Workbook()
    ws = wb.active
    ws.title = "Gradebook"
    ws.append(header)
    _style_header_row(ws)
    for row in rows:
        ws.append(row)
    ws.column_dimensions["A"].width = 14
    ws.column_dimensions["B"].width = 24

    summary = wb.create_sheet("Summary")
    summary.append(["Class", class_id])
    summary.append(["Exported", datetime.now().strftime("%Y-%m-%d %H:%M:%S")])
    summary["A1"].font = Font(bold=True)
    summary["A2"].font = Font(bold=True)
    summary.append([])
    summary.append(["Assignment", "Graded", "Mean", "Median", "Min", "Max"])
    _style_header_row(summary, 4)
    for assignment in directory.assignments_for_class(class_id):
        st = assignment_statistics(matrix, assignment.assignment_id)
        summary.append(
            [
                assignment.title or assignment.assignment_id,
                st.count,
                round(st.mean, 1),
                round(st.median, 1),
                round(st.min_score, 1),
                round(st.max_score, 1),
            ]
        )
    summary.column_dimensions["A"].width = 24

    wb.save(filepath)
