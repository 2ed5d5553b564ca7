import logging
from typing import Iterable, List, Optional, Tuple

from acb_tracker.models.domain import Transaction, Security
from acb_tracker.acb import ACBEngine, ACBResult
from acb_tracker.reporting.models import AnnotatedTransaction, SecurityHolding, PortfolioSummary

logger = logging.getLogger(__name__)


def annotate_transactions(transactions: Iterable[Transaction], result: ACBResult) -> List[AnnotatedTransaction]:
    """
    Join each capital gain record back onto its source transaction by id.
    Rows keep the order they were given in.
    """
    gains_by_id = {record.transaction_id: record for record in result.capital_gains}
    return [
        AnnotatedTransaction(transaction=tx, capital_gain=gains_by_id.get(tx.transaction_id))
        for tx in transactions
    ]


class PortfolioReportingEngine:
    """
    Builds the portfolio overview: one row per security, each computed
    independently by the ACB engine, then collected.
    """

    def __init__(self, engine: Optional[ACBEngine] = None):
        self.engine = engine or ACBEngine()

    def summarize(self, holdings: Iterable[Tuple[Security, Iterable[Transaction]]]) -> PortfolioSummary:
        summary = PortfolioSummary()

        for security, transactions in holdings:
            result = self.engine.calculate(transactions, security.currency)
            summary.add_holding(SecurityHolding(
                security=security,
                summary=result.summary,
                net_gain_loss_cents=result.net_gain_loss_cents
            ))

        logger.info(f"Summarized {len(summary.holdings)} securities")
        return summary
