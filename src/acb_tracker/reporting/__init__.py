from .models import AnnotatedTransaction, SecurityHolding, PortfolioSummary
from .engine import PortfolioReportingEngine, annotate_transactions
from .renderers import MarkdownRenderer
from .currency import cents_to_dollars, dollars_to_cents, format_currency

__all__ = [
    "AnnotatedTransaction",
    "SecurityHolding",
    "PortfolioSummary",
    "PortfolioReportingEngine",
    "annotate_transactions",
    "MarkdownRenderer",
    "cents_to_dollars",
    "dollars_to_cents",
    "format_currency",
]
