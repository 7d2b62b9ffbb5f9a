"""
Core Models Package

Immutable, validated data models that serve as the single source of truth
for student results.

**DESIGN RATIONALE:**

All models in this package are frozen dataclasses. This ensures:
1. No accidental mutation while records move between store, merge and views
2. Derived scores are calculated properties, never stale stored values
3. Safe to use as dict keys or in sets
"""

from .subjects import SubjectEntry, clamp_marks, is_number
from .records import StudentRecord, new_record_id, now_millis

__all__ = [
    "SubjectEntry",
    "StudentRecord",
    "clamp_marks",
    "is_number",
    "new_record_id",
    "now_millis",
]
