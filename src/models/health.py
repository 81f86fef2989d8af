"""
Patient and prescription records for the health system.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, ClassVar, Dict

from repositories import field_value


@dataclass(frozen=True)
class Patient:
    id: int
    name: str
    age: int
    gender: str

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = {}

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'age': self.age, 'gender': self.gender}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Patient':
        return cls(
            id=field_value(data, 'id', int),
            name=field_value(data, 'name', str),
            age=field_value(data, 'age', int),
            gender=field_value(data, 'gender', str),
        )

    def __str__(self) -> str:
        return f"{self.name} (ID: {self.id}, Age: {self.age}, Gender: {self.gender})"


@dataclass(frozen=True)
class Prescription:
    """A medication issued to a patient on a given day."""
    id: int
    patient_id: int
    medication_name: str
    date_issued: date

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'medication_name': self.medication_name,
            'date_issued': self.date_issued.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Prescription':
        return cls(
            id=field_value(data, 'id', int),
            patient_id=field_value(data, 'patient_id', int),
            medication_name=field_value(data, 'medication_name', str),
            date_issued=date.fromisoformat(field_value(data, 'date_issued', str)),
        )

    def __str__(self) -> str:
        return f"Prescription {self.id}: {self.medication_name} - {self.date_issued:%Y-%m-%d}"
