from typing import Optional

from acb_tracker.models.domain import Security
from acb_tracker.acb.models import ACBResult
from acb_tracker.reporting.currency import format_currency
from acb_tracker.reporting.models import PortfolioSummary

class MarkdownRenderer:
    @staticmethod
    def render_security(result: ACBResult, security: Optional[Security] = None) -> str:
        lines = []
        cur = result.currency

        # Header
        if security:
            lines.append(f"# {security.name} ({security.ticker})")
        else:
            lines.append("# Security Report")
        lines.append(f"**Currency:** {cur}")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append(f"- **Total Shares:** {result.total_shares:,.4f}")
        lines.append(f"- **Total ACB:** {format_currency(result.total_acb_cents, cur)}")
        lines.append(f"- **ACB per Share:** {format_currency(result.acb_per_share_cents, cur)}")
        lines.append("")

        # Capital Gains
        lines.append("## Capital Gains/Losses")
        if not result.capital_gains:
            lines.append("No sell transactions recorded.")
        else:
            lines.append("| Date | Shares | Sell Price/Share | ACB/Share | Gain/Loss |")
            lines.append("|---|---|---|---|---|")
            for r in result.capital_gains:
                lines.append(
                    f"| {r.date.date().isoformat()} | {r.num_shares:,.4f} "
                    f"| {format_currency(r.sell_price_per_share_cents, cur)} "
                    f"| {format_currency(r.acb_per_share_cents, cur)} "
                    f"| {format_currency(r.capital_gain_loss_cents, cur)} |"
                )
            lines.append("")
            lines.append(f"**Total Capital Gain/Loss:** {format_currency(result.net_gain_loss_cents, cur)}")

        return "\n".join(lines)

    @staticmethod
    def render_portfolio(summary: PortfolioSummary) -> str:
        lines = ["# Portfolio Summary", ""]

        if not summary.holdings:
            lines.append("No securities found.")
            return "\n".join(lines)

        lines.append("| Security | Ticker | Shares | Total ACB | ACB/Share | Realised Gain/Loss |")
        lines.append("|---|---|---|---|---|---|")
        for h in summary.holdings:
            s = h.summary
            lines.append(
                f"| {h.security.name} | {h.security.ticker} | {s.total_shares:,.4f} "
                f"| {format_currency(s.total_acb_cents, s.currency)} "
                f"| {format_currency(s.acb_per_share_cents, s.currency)} "
                f"| {format_currency(h.net_gain_loss_cents, s.currency)} |"
            )
        lines.append("")

        lines.append("## Totals")
        for currency, total in sorted(summary.total_acb_cents.items()):
            net = summary.net_gain_loss_cents.get(currency, 0.0)
            lines.append(
                f"- **{currency}:** ACB {format_currency(total, currency)}, "
                f"realised {format_currency(net, currency)}"
            )

        return "\n".join(lines)
