"""
Service for patients and their prescriptions.
"""

from datetime import date, timedelta
from typing import Dict, List, Optional

from models import Patient, Prescription
from repositories import EntityStore


class HealthSystemService:
    """
    Holds patients and prescriptions in two stores and indexes
    prescriptions by patient.

    The index is rebuilt on demand by ``build_prescription_map``; it is
    not kept in sync with later changes to the prescription store.
    """

    def __init__(
        self,
        patients: Optional[EntityStore[Patient]] = None,
        prescriptions: Optional[EntityStore[Prescription]] = None,
    ):
        self.patients = patients if patients is not None else EntityStore()
        self.prescriptions = prescriptions if prescriptions is not None else EntityStore()
        self._prescription_map: Dict[int, List[Prescription]] = {}

    def seed_data(self, today: Optional[date] = None) -> None:
        """Add three patients and five prescriptions issued in the last ten days."""
        today = today or date.today()

        self.patients.insert(Patient(1, "Alice Mensah", 29, "Female"))
        self.patients.insert(Patient(2, "Kwesi Boateng", 41, "Male"))
        self.patients.insert(Patient(3, "Esi Owusu", 35, "Female"))

        self.prescriptions.insert(Prescription(101, 1, "Amoxicillin 500mg", today - timedelta(days=10)))
        self.prescriptions.insert(Prescription(102, 1, "Paracetamol 1g", today - timedelta(days=7)))
        self.prescriptions.insert(Prescription(103, 2, "Ibuprofen 400mg", today - timedelta(days=5)))
        self.prescriptions.insert(Prescription(104, 2, "Cetirizine 10mg", today - timedelta(days=2)))
        self.prescriptions.insert(Prescription(105, 3, "Azithromycin 500mg", today - timedelta(days=1)))

    def build_prescription_map(self) -> Dict[int, List[Prescription]]:
        """Group prescriptions by patient ID, newest first."""
        grouped: Dict[int, List[Prescription]] = {}
        for prescription in self.prescriptions.list_all():
            grouped.setdefault(prescription.patient_id, []).append(prescription)
        for entries in grouped.values():
            entries.sort(key=lambda p: p.date_issued, reverse=True)
        self._prescription_map = grouped
        return grouped

    def get_prescriptions_for_patient(self, patient_id: int) -> List[Prescription]:
        """Prescriptions from the last built map; empty if the patient has none."""
        return list(self._prescription_map.get(patient_id, []))

    def get_patient(self, patient_id: int) -> Patient:
        """Look up a patient. Raises NotFoundError if absent."""
        return self.patients.get(patient_id)

    def list_patients(self) -> List[Patient]:
        return self.patients.list_all()
