import pytest
from datetime import datetime, timedelta, timezone

from acb_tracker.models.domain import (
    Buy, Sell, ReturnOfCapital, ReinvestedDividend, ReinvestedCapitalGainsDistribution
)

BASE_DATE = datetime(2024, 1, 1, tzinfo=timezone.utc)

SHARE_KINDS = {
    "buy": Buy,
    "sell": Sell,
    "reinvested_dividend": ReinvestedDividend,
    "reinvested_capital_gains_distribution": ReinvestedCapitalGainsDistribution,
}


@pytest.fixture
def mk_tx():
    """
    Factory for typed transactions. Dates follow sort_order by default so
    they never influence the result.
    """
    def _mk(kind, sort_order, num_shares=None, total=0, fee=0, amount_per_share=None, tx_id=None):
        tx_id = tx_id or f"t{sort_order}"
        date = BASE_DATE + timedelta(days=sort_order)
        if kind == "return_of_capital":
            return ReturnOfCapital(
                transaction_id=tx_id,
                date=date,
                sort_order=sort_order,
                amount_per_share=amount_per_share,
                commission_fee_cents=fee,
            )
        return SHARE_KINDS[kind](
            transaction_id=tx_id,
            date=date,
            sort_order=sort_order,
            num_shares=num_shares,
            total_amount_cents=total,
            commission_fee_cents=fee,
        )
    return _mk


@pytest.fixture
def raw_records():
    """Ledger records in the exported camelCase shape."""
    return [
        {"id": "b1", "date": "2024-01-02T00:00:00Z", "transactionType": "buy",
         "numShares": 100, "totalPriceCents": 100000, "commissionFeeCents": 0},
        {"id": "s1", "date": "2024-02-01T00:00:00Z", "transactionType": "sell",
         "numShares": 50, "totalPriceCents": 60000},
        {"id": "r1", "date": "2024-03-01T00:00:00Z", "transactionType": "return_of_capital",
         "totalPriceCents": 0, "amountPerShare": 100},
    ]
