import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import result_portal
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from result_portal.core.models import StudentRecord, SubjectEntry
from result_portal.registry import MemoryStorage, RecordStore, ResultPortal


# Common test fixtures
@pytest.fixture
def make_record():
    """Factory for records with sensible defaults."""
    def _make(
        roll: str = "R01",
        name: str = "Test Student",
        marks=(80, 70, 90),
        created_at: int = 1000,
        record_id: str | None = None,
    ) -> StudentRecord:
        subjects = tuple(
            SubjectEntry(f"Subject {i}", m) for i, m in enumerate(marks, start=1)
        )
        return StudentRecord(
            id=record_id or f"id-{roll.lower()}",
            name=name,
            roll=roll,
            subjects=subjects,
            created_at=created_at,
        )
    return _make


@pytest.fixture
def storage():
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def store(storage):
    """Restored (empty) record store over in-memory storage."""
    s = RecordStore(storage)
    s.restore()
    return s


@pytest.fixture
def portal(store):
    """Controller over an empty in-memory store."""
    return ResultPortal(store)
