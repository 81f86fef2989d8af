"""
Service layer for Stockroom.

This package provides service classes that encapsulate the business
logic of each exercise and coordinate between entity stores, snapshot
repositories and the event bus.
"""

from .warehouse_service import WarehouseService, ItemCategory
from .inventory_log_service import InventoryLogService
from .health_service import HealthSystemService
from .student_results_service import (
    StudentResultService,
    StudentRecordError,
    MissingFieldError,
    InvalidScoreFormatError,
)
from .finance_service import (
    FinanceService,
    TransactionProcessor,
    BankTransferProcessor,
    MobileMoneyProcessor,
    CryptoWalletProcessor,
)

__all__ = [
    'WarehouseService',
    'ItemCategory',
    'InventoryLogService',
    'HealthSystemService',
    'StudentResultService',
    'StudentRecordError',
    'MissingFieldError',
    'InvalidScoreFormatError',
    'FinanceService',
    'TransactionProcessor',
    'BankTransferProcessor',
    'MobileMoneyProcessor',
    'CryptoWalletProcessor',
]
