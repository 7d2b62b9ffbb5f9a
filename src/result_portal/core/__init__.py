"""
Student Result Portal Core Package

Shared data models, scoring and serialization used by every other
subpackage.

1. **Immutable Data Models**
   - Records are frozen dataclasses; edits create new instances.

2. **Calculated Scores (Never Stored)**
   - `total`, `percentage` and `grade` are always derived from subjects.
   - Values supplied by imported files are ignored.

3. **One Wire Shape**
   - The persisted slot, JSON export and JSON import share one shape
     (see `core.utils.serialization`).
"""

from .models import SubjectEntry, StudentRecord
from .scoring import compute_totals, compute_grade, grade_tone, Totals

__all__ = [
    "SubjectEntry",
    "StudentRecord",
    "Totals",
    "compute_totals",
    "compute_grade",
    "grade_tone",
]
