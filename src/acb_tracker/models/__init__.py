from .types import TransactionType, ACQUISITION_TYPES
from .domain import (
    Transaction,
    ShareTransaction,
    Buy,
    Sell,
    ReinvestedDividend,
    ReinvestedCapitalGainsDistribution,
    ReturnOfCapital,
    Security,
    TRANSACTION_CLASSES,
)
