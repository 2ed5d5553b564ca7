from .schemas import TransactionRecord, parse_record
from .store import Ledger

__all__ = ["TransactionRecord", "parse_record", "Ledger"]
