"""
Entity dataclasses stored in entity stores.
"""

from .inventory import InventoryItem, ElectronicItem, GroceryItem
from .health import Patient, Prescription
from .students import Student, grade_for_score
from .finance import Transaction, Account, SavingsAccount

__all__ = [
    'InventoryItem',
    'ElectronicItem',
    'GroceryItem',
    'Patient',
    'Prescription',
    'Student',
    'grade_for_score',
    'Transaction',
    'Account',
    'SavingsAccount',
]
