"""
Service for reading student scores and writing grade reports.
"""

from pathlib import Path
from typing import Dict, List, Optional

from config import STUDENTS_INPUT_FILE, STUDENTS_REPORT_FILE, MIN_SCORE, MAX_SCORE
from events import EventBus, Event, EventType
from models import Student
from repositories import EntityStore


class StudentRecordError(Exception):
    """A line of the student input file could not be turned into a Student."""

    def __init__(self, line_number: int, line: str, reason: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Line {line_number}: {reason} Line: '{line}'")


class MissingFieldError(StudentRecordError):
    """A line has fewer than three fields, or an empty one."""


class InvalidScoreFormatError(StudentRecordError):
    """The ID or score is not an integer, or the score is out of range."""


def parse_student_line(line: str, line_number: int) -> Student:
    """
    Parse one ``id, full name, score`` line.

    Fields beyond the third are ignored.

    Raises
    ------
    MissingFieldError
        If there are fewer than three fields or one of them is blank.
    InvalidScoreFormatError
        If the ID or score is not an integer, or the score is outside
        MIN_SCORE..MAX_SCORE.
    """
    parts = line.split(',')
    if len(parts) < 3:
        raise MissingFieldError(line_number, line, "expected 3 fields (ID, FullName, Score).")

    id_part, name_part, score_part = (part.strip() for part in parts[:3])
    if not id_part or not name_part or not score_part:
        raise MissingFieldError(line_number, line, "one or more fields empty.")

    try:
        student_id = int(id_part)
    except ValueError:
        raise InvalidScoreFormatError(line_number, line, "ID is not an integer.") from None
    try:
        score = int(score_part)
    except ValueError:
        raise InvalidScoreFormatError(line_number, line, "Score is not an integer.") from None
    if not MIN_SCORE <= score <= MAX_SCORE:
        raise InvalidScoreFormatError(line_number, line, f"Score out of range ({MIN_SCORE}-{MAX_SCORE}).")

    return Student(student_id, name_part, score)


class StudentResultService:
    """Reads student results into a store and writes grade reports."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._event_bus = event_bus

    def read_students(self, input_path: Optional[str] = None) -> EntityStore[Student]:
        """
        Read every student from the input file.

        Blank lines are skipped. Students are inserted in file order, so
        a repeated ID raises ``DuplicateIdentityError``. A missing file
        raises ``FileNotFoundError``.
        """
        path = Path(input_path or STUDENTS_INPUT_FILE)
        store: EntityStore[Student] = EntityStore()
        with open(path, 'r', encoding='utf-8') as f:
            for line_number, raw in enumerate(f, start=1):
                line = raw.rstrip('\r\n')
                if not line.strip():
                    continue
                store.insert(parse_student_line(line, line_number))
        return store

    def write_report(self, students: List[Student], output_path: Optional[str] = None) -> Path:
        """Write one formatted line per student, replacing any previous report."""
        path = Path(output_path or STUDENTS_REPORT_FILE)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            for student in students:
                f.write(f"{student}\n")
        self._emit(EventType.REPORT_WRITTEN, {'path': str(path), 'count': len(students)})
        return path

    def _emit(self, event_type: EventType, data: Dict) -> None:
        """Emit an event if event bus is available."""
        if self._event_bus:
            self._event_bus.publish(Event(type=event_type, data=data, source='student_results_service'))
