class ACBError(Exception):
    """Base class for all errors raised by acb_tracker."""


class InvalidTransactionError(ACBError, ValueError):
    """A transaction record is missing a field or carries an out-of-range value."""


class TransactionNotFoundError(ACBError, KeyError):
    def __init__(self, transaction_id: str):
        super().__init__(transaction_id)
        self.transaction_id = transaction_id

    def __str__(self):
        return f"Transaction {self.transaction_id} not found"


class LedgerFileError(ACBError):
    """A ledger file could not be read or decoded."""
