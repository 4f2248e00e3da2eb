"""Exception types raised by the gradebook core.

Each class also derives from the builtin that callers would naturally
catch (ValueError, KeyError, RuntimeError), so existing ``except``
clauses keep working.
"""

from typing import Optional


class GradebookError(Exception):
    """Base class for gradebook errors."""


class GradeValidationError(GradebookError, ValueError):
    """Raised when a score input is non-numeric or out of range."""

    def __init__(self, message: str, raw_input=None, maximum: Optional[float] = None):
        super().__init__(message)
        self.raw_input = raw_input
        self.maximum = maximum


class NotFoundError(GradebookError, KeyError):
    """Raised when an entity expected by the caller does not exist."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class AssignmentNotFoundError(NotFoundError):
    """No assignment with the requested id."""


class RubricNotFoundError(NotFoundError):
    """No rubric with the requested id."""


class InconsistentRubricDataError(GradebookError, ValueError):
    """A rubric selection references a criterion or level the rubric lacks."""


class EditStateError(GradebookError, RuntimeError):
    """A commit or cancel was addressed to a cell that is not being edited."""
