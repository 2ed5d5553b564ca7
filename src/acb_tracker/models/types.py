from enum import Enum

class TransactionType(str, Enum):
    BUY = "buy"
    SELL = "sell"
    RETURN_OF_CAPITAL = "return_of_capital"
    REINVESTED_DIVIDEND = "reinvested_dividend"
    REINVESTED_CAPITAL_GAINS_DISTRIBUTION = "reinvested_capital_gains_distribution"

# Kinds that add shares and cost to the pool
ACQUISITION_TYPES = frozenset({
    TransactionType.BUY,
    TransactionType.REINVESTED_DIVIDEND,
    TransactionType.REINVESTED_CAPITAL_GAINS_DISTRIBUTION,
})
