"""
Transactions and accounts for the finance app.

Amounts are written to snapshots as decimal strings, so no precision is
lost on a round trip.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, ClassVar, Dict

from repositories import field_value


def parse_amount(value: Any) -> Decimal:
    """Turn a stored amount (decimal string or integer) into a finite Decimal."""
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TypeError(f"amount must be a decimal string, got {value!r}")
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise ValueError(f"amount is not a decimal number: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    return amount


@dataclass(frozen=True)
class Transaction:
    """A single payment charged against an account."""
    id: int
    date: datetime
    amount: Decimal
    category: str

    MUTABLE_FIELDS: ClassVar[Dict[str, Callable[[Any], bool]]] = {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'date': self.date.isoformat(),
            'amount': str(self.amount),
            'category': self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        return cls(
            id=field_value(data, 'id', int),
            date=datetime.fromisoformat(field_value(data, 'date', str)),
            amount=parse_amount(data['amount']),
            category=field_value(data, 'category', str),
        )


class Account:
    """An account whose balance every transaction reduces."""

    def __init__(self, account_number: str, initial_balance: Decimal):
        self._account_number = account_number
        self.balance = Decimal(initial_balance)

    @property
    def account_number(self) -> str:
        return self._account_number

    def apply_transaction(self, transaction: Transaction) -> bool:
        """Deduct the transaction amount. Returns True when applied."""
        self.balance -= transaction.amount
        return True


class SavingsAccount(Account):
    """An account that refuses transactions larger than its balance."""

    def apply_transaction(self, transaction: Transaction) -> bool:
        if transaction.amount > self.balance:
            return False
        return super().apply_transaction(transaction)
