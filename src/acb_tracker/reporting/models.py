from dataclasses import dataclass, field
from typing import Dict, List, Optional

from acb_tracker.models.domain import Transaction, Security
from acb_tracker.acb.models import CapitalGainRecord, SecuritySummary

@dataclass
class AnnotatedTransaction:
    """A ledger row with its capital gain attached (sells only)."""
    transaction: Transaction
    capital_gain: Optional[CapitalGainRecord] = None

    def to_dict(self):
        base_dict = self.transaction.to_dict()
        if self.capital_gain is not None:
            base_dict["capital_gains"] = {
                "sell_price_per_share_cents": self.capital_gain.sell_price_per_share_cents,
                "acb_per_share_cents": self.capital_gain.acb_per_share_cents,
                "capital_gain_loss_cents": self.capital_gain.capital_gain_loss_cents,
            }
        return base_dict

@dataclass
class SecurityHolding:
    security: Security
    summary: SecuritySummary
    net_gain_loss_cents: float = 0.0

    def to_dict(self):
        return {
            **self.security.to_dict(),
            **self.summary.to_dict(),
            "net_gain_loss_cents": self.net_gain_loss_cents
        }

@dataclass
class PortfolioSummary:
    holdings: List[SecurityHolding] = field(default_factory=list)
    # Per currency; amounts in different currencies are never added together
    total_acb_cents: Dict[str, float] = field(default_factory=dict)
    net_gain_loss_cents: Dict[str, float] = field(default_factory=dict)

    def add_holding(self, holding: SecurityHolding):
        self.holdings.append(holding)
        currency = holding.summary.currency
        self.total_acb_cents[currency] = self.total_acb_cents.get(currency, 0.0) + holding.summary.total_acb_cents
        self.net_gain_loss_cents[currency] = self.net_gain_loss_cents.get(currency, 0.0) + holding.net_gain_loss_cents

    def to_dict(self):
        return {
            "holdings": [h.to_dict() for h in self.holdings],
            "total_acb_cents": dict(self.total_acb_cents),
            "net_gain_loss_cents": dict(self.net_gain_loss_cents)
        }
