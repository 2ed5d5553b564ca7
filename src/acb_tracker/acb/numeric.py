"""
Division helpers for the ACB fold.

Every per-share figure in the engine goes through these two functions so the
zero-shares policy lives in one place: a division with nothing to divide by
resolves to 0.0, never an exception or NaN.
"""


def safe_divide(numerator: float, denominator: float) -> float:
    """Return numerator / denominator, or 0.0 when the denominator is zero."""
    if denominator == 0:
        return 0.0
    return numerator / denominator


def per_share(amount: float, shares: float) -> float:
    """
    Average amount per share held.

    A flat or short position (shares <= 0) has no meaningful average, so it
    yields 0.0.
    """
    if shares <= 0:
        return 0.0
    return safe_divide(amount, shares)
