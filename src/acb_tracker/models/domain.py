from datetime import datetime
from typing import ClassVar, Optional
from dataclasses import dataclass

from acb_tracker.exceptions import InvalidTransactionError
from .types import TransactionType


@dataclass(frozen=True)
class Transaction:
    """
    A single ledger entry for one security.

    Concrete kinds are the subclasses below; each carries only the fields
    that kind uses and validates them on construction.
    """
    transaction_id: str
    date: datetime
    sort_order: int

    type: ClassVar[TransactionType]

    def __post_init__(self):
        if not hasattr(self.__class__, "type"):
            raise TypeError("Transaction is abstract; construct one of its kinds")

    def _base_dict(self) -> dict:
        return {
            "transaction_id": self.transaction_id,
            "date": self.date.isoformat(),
            "type": self.type.value,
            "sort_order": self.sort_order,
        }


@dataclass(frozen=True)
class ShareTransaction(Transaction):
    """Kinds that move shares: acquisitions and sells."""
    num_shares: float
    total_amount_cents: int
    commission_fee_cents: int = 0

    def __post_init__(self):
        super().__post_init__()
        if self.num_shares == 0:
            raise InvalidTransactionError("Number of shares cannot be zero")
        if self.total_amount_cents < 0:
            raise InvalidTransactionError("Total price cannot be negative")
        if self.commission_fee_cents < 0:
            raise InvalidTransactionError("Commission fee cannot be negative")

    def to_dict(self) -> dict:
        base_dict = self._base_dict()
        base_dict.update({
            "num_shares": self.num_shares,
            "total_amount_cents": self.total_amount_cents,
            "commission_fee_cents": self.commission_fee_cents,
        })
        return base_dict


class Buy(ShareTransaction):
    type = TransactionType.BUY


class Sell(ShareTransaction):
    type = TransactionType.SELL


class ReinvestedDividend(ShareTransaction):
    type = TransactionType.REINVESTED_DIVIDEND


class ReinvestedCapitalGainsDistribution(ShareTransaction):
    type = TransactionType.REINVESTED_CAPITAL_GAINS_DISTRIBUTION


@dataclass(frozen=True)
class ReturnOfCapital(Transaction):
    """
    Reduces cost base by amount_per_share for every share held.
    Carries no share count and no total amount.
    """
    amount_per_share: float
    # Recorded for display only; does not change the cost base
    commission_fee_cents: int = 0

    type = TransactionType.RETURN_OF_CAPITAL

    def __post_init__(self):
        super().__post_init__()
        if self.amount_per_share < 0:
            raise InvalidTransactionError("Return of capital per share cannot be negative")
        if self.commission_fee_cents < 0:
            raise InvalidTransactionError("Commission fee cannot be negative")

    @property
    def total_amount_cents(self) -> int:
        return 0

    def to_dict(self) -> dict:
        base_dict = self._base_dict()
        base_dict.update({
            "amount_per_share": self.amount_per_share,
            "total_amount_cents": 0,
            "commission_fee_cents": self.commission_fee_cents,
        })
        return base_dict


TRANSACTION_CLASSES = {
    TransactionType.BUY: Buy,
    TransactionType.SELL: Sell,
    TransactionType.RETURN_OF_CAPITAL: ReturnOfCapital,
    TransactionType.REINVESTED_DIVIDEND: ReinvestedDividend,
    TransactionType.REINVESTED_CAPITAL_GAINS_DISTRIBUTION: ReinvestedCapitalGainsDistribution,
}


@dataclass
class Security:
    security_id: str
    name: str
    ticker: str
    currency: str = "CAD"
    portfolio_id: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "security_id": self.security_id,
            "name": self.name,
            "ticker": self.ticker,
            "currency": self.currency,
            "portfolio_id": self.portfolio_id,
        }
