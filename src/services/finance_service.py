"""
Service for processing transactions against a savings account.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from config import DEFAULT_ACCOUNT_NUMBER, DEFAULT_OPENING_BALANCE
from events import EventBus, Event, EventType
from models import Account, SavingsAccount, Transaction
from repositories import EntityStore, DuplicateIdentityError


def format_currency(amount: Decimal) -> str:
    return f"${amount:,.2f}"


class TransactionProcessor(ABC):
    """Channel a transaction is paid through."""

    label: str = ""

    @abstractmethod
    def process(self, transaction: Transaction) -> str:
        """Process the transaction and return a description of it."""


class BankTransferProcessor(TransactionProcessor):
    label = "Bank Transfer"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_currency(transaction.amount)} for {transaction.category}"


class MobileMoneyProcessor(TransactionProcessor):
    label = "Mobile Money"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_currency(transaction.amount)} for {transaction.category}"


class CryptoWalletProcessor(TransactionProcessor):
    label = "Crypto Wallet"

    def process(self, transaction: Transaction) -> str:
        return f"[{self.label}] Processed {format_currency(transaction.amount)} for {transaction.category}"


class FinanceService:
    """
    Runs transactions through processors, applies them to an account and
    keeps every processed transaction in a store keyed by transaction ID.
    """

    def __init__(self, account: Optional[Account] = None, event_bus: Optional[EventBus] = None):
        self.account = account or SavingsAccount(DEFAULT_ACCOUNT_NUMBER, Decimal(DEFAULT_OPENING_BALANCE))
        self.transactions: EntityStore[Transaction] = EntityStore()
        self._event_bus = event_bus

    def handle(self, transaction: Transaction, processor: TransactionProcessor) -> List[str]:
        """
        Process, apply and record one transaction.

        The transaction is recorded even when the account refuses it.
        Raises ``DuplicateIdentityError`` for an already recorded ID,
        before anything is processed.

        Returns
        -------
        List[str]
            The processor's description and the account outcome.
        """
        if self.transactions.exists(transaction.id):
            raise DuplicateIdentityError(transaction.id)

        messages = [processor.process(transaction)]
        if self.account.apply_transaction(transaction):
            messages.append(f"Transaction applied. New balance: {format_currency(self.account.balance)}")
            self._emit(EventType.TRANSACTION_PROCESSED, {
                'id': transaction.id,
                'processor': processor.label,
                'balance': self.account.balance,
            })
        else:
            messages.append("Insufficient funds")
            self._emit(EventType.ERROR_OCCURRED, {
                'operation': 'apply_transaction',
                'id': transaction.id,
                'message': "Insufficient funds",
            })
        self.transactions.insert(transaction)
        return messages

    def run(self, now: Optional[datetime] = None) -> List[str]:
        """Process the three sample transactions, one per processor."""
        now = now or datetime.now()
        scenario = [
            (Transaction(1, now, Decimal("150"), "Groceries"), MobileMoneyProcessor()),
            (Transaction(2, now, Decimal("300"), "Utilities"), BankTransferProcessor()),
            (Transaction(3, now, Decimal("120"), "Entertainment"), CryptoWalletProcessor()),
        ]
        messages: List[str] = []
        for transaction, processor in scenario:
            messages.extend(self.handle(transaction, processor))
        return messages

    def _emit(self, event_type: EventType, data: Dict) -> None:
        """Emit an event if event bus is available."""
        if self._event_bus:
            self._event_bus.publish(Event(type=event_type, data=data, source='finance_service'))
