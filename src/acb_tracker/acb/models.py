from dataclasses import dataclass, field
from datetime import datetime
from typing import List

@dataclass(frozen=True)
class CapitalGainRecord:
    transaction_id: str
    date: datetime
    num_shares: float                 # Quantity sold
    sell_price_per_share_cents: float # Net of commission
    acb_per_share_cents: float        # Pool average immediately before the sale
    capital_gain_loss_cents: float
    currency: str

    def to_dict(self):
        return {
            "transaction_id": self.transaction_id,
            "date": self.date.isoformat(),
            "num_shares": self.num_shares,
            "sell_price_per_share_cents": self.sell_price_per_share_cents,
            "acb_per_share_cents": self.acb_per_share_cents,
            "capital_gain_loss_cents": self.capital_gain_loss_cents,
            "currency": self.currency
        }

@dataclass(frozen=True)
class SecuritySummary:
    total_shares: float
    total_acb_cents: float
    acb_per_share_cents: float
    currency: str

    def to_dict(self):
        return {
            "total_shares": self.total_shares,
            "total_acb_cents": self.total_acb_cents,
            "acb_per_share_cents": self.acb_per_share_cents,
            "currency": self.currency
        }

@dataclass
class ACBResult:
    currency: str
    total_shares: float = 0.0
    total_acb_cents: float = 0.0
    acb_per_share_cents: float = 0.0
    capital_gains: List[CapitalGainRecord] = field(default_factory=list)

    total_gains_cents: float = 0.0
    total_losses_cents: float = 0.0
    net_gain_loss_cents: float = 0.0

    def add_capital_gain(self, record: CapitalGainRecord):
        self.capital_gains.append(record)
        if record.capital_gain_loss_cents > 0:
            self.total_gains_cents += record.capital_gain_loss_cents
        else:
            self.total_losses_cents += record.capital_gain_loss_cents # This will be negative

        self.net_gain_loss_cents += record.capital_gain_loss_cents

    @property
    def summary(self) -> SecuritySummary:
        return SecuritySummary(
            total_shares=self.total_shares,
            total_acb_cents=self.total_acb_cents,
            acb_per_share_cents=self.acb_per_share_cents,
            currency=self.currency
        )

    def gain_for(self, transaction_id: str):
        for record in self.capital_gains:
            if record.transaction_id == transaction_id:
                return record
        return None

    def to_dict(self):
        return {
            **self.summary.to_dict(),
            "total_gains_cents": self.total_gains_cents,
            "total_losses_cents": self.total_losses_cents,
            "net_gain_loss_cents": self.net_gain_loss_cents,
            "capital_gains": [r.to_dict() for r in self.capital_gains]
        }
