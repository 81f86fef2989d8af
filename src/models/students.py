"""
Student result records and grading.
"""

from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict

from repositories import field_value
from config import GRADE_BOUNDARIES, FAILING_GRADE, MIN_SCORE, MAX_SCORE


def valid_score(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and MIN_SCORE <= value <= MAX_SCORE


def grade_for_score(score: int) -> str:
    """Return the letter grade for a score between MIN_SCORE and MAX_SCORE."""
    for lower_bound, grade in GRADE_BOUNDARIES:
        if score >= lower_bound:
            return grade
    return FAILING_GRADE


@dataclass(frozen=True)
class Student:
    """A student and their exam score."""
    id: int
    full_name: str
    score: int

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = {'score': valid_score}

    @property
    def grade(self) -> str:
        return grade_for_score(self.score)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'full_name': self.full_name, 'score': self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Student':
        return cls(
            id=field_value(data, 'id', int),
            full_name=field_value(data, 'full_name', str),
            score=field_value(data, 'score', int),
        )

    def __str__(self) -> str:
        return f"{self.full_name} (ID: {self.id}): Score = {self.score}, Grade = {self.grade}"
