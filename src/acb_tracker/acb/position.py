from acb_tracker.acb.numeric import per_share


class Position:
    """
    Running average-cost pool for a single security.
    Tracks the number of shares held and their total cost base in cents.

    One Position is created per engine call and discarded afterwards.
    """
    def __init__(self):
        self.shares = 0.0
        self.cost_base = 0.0

    def acquire(self, num_shares: float, cost: float):
        """
        Add shares to the pool (Buy or reinvested distribution).
        """
        self.shares += num_shares
        self.cost_base += cost

    def dispose(self, num_shares: float) -> float:
        """
        Remove shares from the pool (Sell).
        Returns the cost base released for the removed shares at the current average.
        """
        # Zero when nothing (or a short position) is held, so the sale carries no cost
        cost_released = self.cost_base_per_share * num_shares

        self.cost_base -= cost_released
        self.shares -= num_shares

        # Floating point leftovers when selling down to exactly zero
        if self.cost_base < 0:
            self.cost_base = 0.0

        return cost_released

    def return_capital(self, amount_per_share: float) -> float:
        """
        Reduce the cost base by amount_per_share for every share held, capped at
        the remaining cost base. Share count is unchanged.
        Returns the reduction applied.
        """
        if self.shares <= 0:
            return 0.0

        reduction = min(amount_per_share * self.shares, self.cost_base)
        self.cost_base -= reduction
        return reduction

    @property
    def cost_base_per_share(self) -> float:
        return per_share(self.cost_base, self.shares)

    def __repr__(self):
        return f"Position(shares={self.shares!r}, cost_base={self.cost_base!r})"
