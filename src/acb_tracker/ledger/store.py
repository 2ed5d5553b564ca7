import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from acb_tracker.config import settings
from acb_tracker.exceptions import InvalidTransactionError, TransactionNotFoundError
from acb_tracker.models.domain import Transaction
from acb_tracker.acb import ACBEngine, ACBResult
from acb_tracker.ledger.schemas import parse_record

logger = logging.getLogger(__name__)


class Ledger:
    """
    In-memory transaction ledger for a single security.

    Owns validation of incoming records and assignment of sort_order:
    new transactions are appended at max + 1, and reorder() renumbers from 1.
    """

    def __init__(self, security_id: Optional[str] = None, currency: Optional[str] = None):
        self.security_id = security_id
        self.currency = currency or settings.DEFAULT_CURRENCY
        self._transactions: Dict[str, Transaction] = {}

    def __len__(self):
        return len(self._transactions)

    def __iter__(self):
        return iter(self.list())

    def _next_sort_order(self) -> int:
        return max((t.sort_order for t in self._transactions.values()), default=0) + 1

    def create(self, raw: Any) -> Transaction:
        """Validate a record and append it to the end of the ledger."""
        record = parse_record(raw)
        transaction_id = record.transaction_id or uuid.uuid4().hex
        if transaction_id in self._transactions:
            raise InvalidTransactionError(f"Duplicate transaction id {transaction_id}")

        tx = record.to_transaction(transaction_id, self._next_sort_order())
        self._transactions[transaction_id] = tx
        logger.debug(f"Created {tx.type.value} {transaction_id} at position {tx.sort_order}")
        return tx

    def load(self, records: Iterable[Any]) -> List[Transaction]:
        """
        Bulk import. Records that already carry a sort_order keep it;
        the rest are appended in the order given.
        """
        loaded = []
        for raw in records:
            record = parse_record(raw)
            tx = self.create(record)
            if record.sort_order is not None:
                tx = replace(tx, sort_order=record.sort_order)
                self._transactions[tx.transaction_id] = tx
            loaded.append(tx)
        logger.info(f"Loaded {len(loaded)} transactions")
        return loaded

    def get(self, transaction_id: str) -> Transaction:
        try:
            return self._transactions[transaction_id]
        except KeyError:
            raise TransactionNotFoundError(transaction_id) from None

    def list(self) -> List[Transaction]:
        return sorted(self._transactions.values(), key=lambda t: t.sort_order)

    def update(self, transaction_id: str, raw: Any) -> Transaction:
        """Replace a transaction's details, keeping its id and sort_order."""
        existing = self.get(transaction_id)
        record = parse_record(raw)
        tx = record.to_transaction(transaction_id, existing.sort_order)
        self._transactions[transaction_id] = tx
        return tx

    def delete(self, transaction_id: str):
        self.get(transaction_id)
        del self._transactions[transaction_id]
        logger.debug(f"Deleted transaction {transaction_id}")

    def reorder(self, transaction_ids: List[str]):
        """Assign sort_order 1..n to the given ids, in order."""
        # Check all ids first so a bad id leaves the ledger untouched
        for transaction_id in transaction_ids:
            self.get(transaction_id)

        for i, transaction_id in enumerate(transaction_ids):
            self._transactions[transaction_id] = replace(
                self._transactions[transaction_id], sort_order=i + 1
            )
        logger.info(f"Reordered {len(transaction_ids)} transactions")

    def calculate(self, engine: Optional[ACBEngine] = None) -> ACBResult:
        engine = engine or ACBEngine()
        return engine.calculate(self.list(), self.currency)
