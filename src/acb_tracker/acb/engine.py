import logging
from typing import Iterable, List, Optional

from acb_tracker.config import settings
from acb_tracker.models import ACQUISITION_TYPES, TransactionType
from acb_tracker.models.domain import Transaction
from acb_tracker.acb.models import ACBResult, CapitalGainRecord
from acb_tracker.acb.numeric import safe_divide
from acb_tracker.acb.position import Position

logger = logging.getLogger(__name__)


class ACBEngine:
    """
    Calculates Adjusted Cost Base and realised capital gains using the
    Canadian average cost method.

    Single chronological pass over one security's ledger (by sort_order):
    1. Buys and reinvested distributions add shares and cost to the pool.
    2. Sells release cost at the pool average and produce a gain record.
    3. Returns of capital lower the cost base, never below zero.
    """

    def __init__(self, sort_transactions: Optional[bool] = None):
        if sort_transactions is None:
            sort_transactions = settings.SORT_TRANSACTIONS
        self.sort_transactions = sort_transactions

    def calculate(self, transactions: Iterable[Transaction], currency: str) -> ACBResult:
        ordered: List[Transaction] = list(transactions)
        if self.sort_transactions:
            # Stable, so a caller-sorted ledger is left untouched
            ordered.sort(key=lambda t: t.sort_order)

        result = ACBResult(currency=currency)
        position = Position()

        for tx in ordered:
            self._apply(tx, position, result)

        result.total_shares = position.shares
        result.total_acb_cents = position.cost_base
        result.acb_per_share_cents = position.cost_base_per_share

        logger.debug(
            f"Processed {len(ordered)} transactions: {result.total_shares} shares, "
            f"ACB {result.total_acb_cents} {currency}, {len(result.capital_gains)} dispositions"
        )
        return result

    def _apply(self, tx: Transaction, position: Position, result: ACBResult):
        if tx.type in ACQUISITION_TYPES:
            position.acquire(tx.num_shares, tx.total_amount_cents + tx.commission_fee_cents)

        elif tx.type == TransactionType.SELL:
            # Gain is measured against the pool as it stood before this sale
            acb_per_share = position.cost_base_per_share
            sell_price_per_share = safe_divide(
                tx.total_amount_cents - tx.commission_fee_cents, tx.num_shares
            )
            gain = (sell_price_per_share - acb_per_share) * tx.num_shares

            result.add_capital_gain(CapitalGainRecord(
                transaction_id=tx.transaction_id,
                date=tx.date,
                num_shares=tx.num_shares,
                sell_price_per_share_cents=sell_price_per_share,
                acb_per_share_cents=acb_per_share,
                capital_gain_loss_cents=gain,
                currency=result.currency
            ))

            if tx.num_shares > position.shares:
                # Permitted; negative holdings are left to caller policy
                logger.warning(
                    f"Transaction {tx.transaction_id} sells {tx.num_shares} shares "
                    f"but only {position.shares} are held"
                )
            position.dispose(tx.num_shares)

        elif tx.type == TransactionType.RETURN_OF_CAPITAL:
            if position.shares <= 0:
                logger.warning(
                    f"Return of capital {tx.transaction_id} applied with no shares held; ignored"
                )
            position.return_capital(tx.amount_per_share)


def compute_acb(transactions: Iterable[Transaction], currency: str) -> ACBResult:
    """Run the ACB fold with default settings."""
    return ACBEngine().calculate(transactions, currency)
