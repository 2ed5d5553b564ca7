import argparse
import sys
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.theme import Theme
from rich import box
from rich.markup import escape

from acb_tracker.config import settings
from acb_tracker.exceptions import ACBError, LedgerFileError
from acb_tracker.models.domain import Security
from acb_tracker.acb import ACBEngine, ACBResult
from acb_tracker.ledger import Ledger
from acb_tracker.reporting import (
    MarkdownRenderer, PortfolioReportingEngine, PortfolioSummary, format_currency
)

logger = logging.getLogger(__name__)

# --- THEME CONFIGURATION ---
custom_theme = Theme({
    "brand": "bold blue",
    "header": "bold white",
    "gain": "green",
    "loss": "red",
    "status.error": "red",
    "muted": "dim white",
})

IS_TTY = sys.stdout.isatty()

console = Console(
    theme=custom_theme,
    force_terminal=None,  # Auto-detect
    no_color=not IS_TTY,
)
err_console = Console(stderr=True, theme=custom_theme)


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# --- LEDGER FILES ---

def find_ledger_files(input_path: Path) -> List[Path]:
    if input_path.is_file() and input_path.suffix.lower() == '.json':
        return [input_path]
    elif input_path.is_dir():
        return sorted(input_path.glob('*.json'))
    return []


def load_ledger_file(path: Path, currency: Optional[str] = None) -> Tuple[Security, Ledger]:
    """
    Read a ledger file. Accepts either a bare list of transaction records or
    an object with "transactions" and optional "currency" / "security" keys.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise LedgerFileError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LedgerFileError(f"{path} is not valid JSON: {e}") from e

    if isinstance(data, list):
        data = {"transactions": data}
    if not isinstance(data, dict) or not isinstance(data.get("transactions"), list):
        raise LedgerFileError(f"{path} has no transaction list")

    meta = data.get("security")
    if not isinstance(meta, dict):
        meta = {}
    security = Security(
        security_id=str(meta.get("id") or path.stem),
        name=meta.get("name") or path.stem,
        ticker=meta.get("ticker") or path.stem.upper(),
        currency=currency or meta.get("currency") or data.get("currency") or settings.DEFAULT_CURRENCY,
    )

    ledger = Ledger(security_id=security.security_id, currency=security.currency)
    ledger.load(data["transactions"])
    return security, ledger


# --- OUTPUT ---

def _gain_style(cents: float) -> str:
    return "gain" if cents >= 0 else "loss"


def print_security_report(security: Security, result: ACBResult):
    cur = result.currency

    grid = Table.grid(expand=True)
    grid.add_column(justify="left", ratio=1)
    grid.add_column(justify="right", ratio=1)
    grid.add_row(f"[bold]{security.name}[/] [dim]{security.ticker}[/]", f"[dim]{cur}[/]")
    console.print(Panel(grid, box=box.SIMPLE))

    summary = Table(box=box.SIMPLE, show_header=False)
    summary.add_column(style="muted")
    summary.add_column(justify="right")
    summary.add_row("Total Shares", f"{result.total_shares:,.4f}")
    summary.add_row("Total ACB", format_currency(result.total_acb_cents, cur))
    summary.add_row("ACB per Share", format_currency(result.acb_per_share_cents, cur))
    console.print(summary)

    if not result.capital_gains:
        console.print("[muted]No sell transactions recorded.[/]")
        return

    table = Table(
        title="Capital Gains/Losses",
        box=box.SIMPLE_HEAD,
        header_style="bold",
        row_styles=["", "dim"]
    )
    table.add_column("Date")
    table.add_column("Shares", justify="right")
    table.add_column("Sell Price/Share", justify="right")
    table.add_column("ACB/Share", justify="right")
    table.add_column("Gain/Loss", justify="right")

    for r in result.capital_gains:
        table.add_row(
            r.date.date().isoformat(),
            f"{r.num_shares:,.4f}",
            format_currency(r.sell_price_per_share_cents, cur),
            format_currency(r.acb_per_share_cents, cur),
            f"[{_gain_style(r.capital_gain_loss_cents)}]{format_currency(r.capital_gain_loss_cents, cur)}[/]",
        )
    console.print(table)

    net = result.net_gain_loss_cents
    console.print(f"Total Capital Gain/Loss: [{_gain_style(net)}]{format_currency(net, cur)}[/]")


def print_portfolio_report(summary: PortfolioSummary):
    table = Table(
        title="Portfolio Summary",
        box=box.SIMPLE_HEAD,
        header_style="bold",
        row_styles=["", "dim"]
    )
    table.add_column("Security")
    table.add_column("Ticker")
    table.add_column("Shares", justify="right")
    table.add_column("Total ACB", justify="right")
    table.add_column("ACB/Share", justify="right")
    table.add_column("Realised Gain/Loss", justify="right")

    for h in summary.holdings:
        s = h.summary
        table.add_row(
            h.security.name,
            h.security.ticker,
            f"{s.total_shares:,.4f}",
            format_currency(s.total_acb_cents, s.currency),
            format_currency(s.acb_per_share_cents, s.currency),
            f"[{_gain_style(h.net_gain_loss_cents)}]{format_currency(h.net_gain_loss_cents, s.currency)}[/]",
        )
    console.print(table)

    for currency, total in sorted(summary.total_acb_cents.items()):
        net = summary.net_gain_loss_cents.get(currency, 0.0)
        console.print(
            f"{currency}: ACB {format_currency(total, currency)}, "
            f"realised [{_gain_style(net)}]{format_currency(net, currency)}[/]"
        )


# --- MAIN LOGIC ---

def run_report(input_path: Path, args) -> int:
    files = find_ledger_files(input_path)
    if not files:
        err_console.print(f"[status.error]No ledger files found at {input_path}[/]")
        return 1

    engine = ACBEngine()
    loaded = []
    for path in files:
        loaded.append(load_ledger_file(path, currency=args.currency))

    # Single security: detailed report
    if len(loaded) == 1:
        security, ledger = loaded[0]
        result = ledger.calculate(engine)
        if args.format == "json":
            print(json.dumps({"security": security.to_dict(), **result.to_dict()}, indent=2))
        elif args.format == "markdown":
            print(MarkdownRenderer.render_security(result, security))
        else:
            print_security_report(security, result)
        return 0

    # Directory: one row per security
    summary = PortfolioReportingEngine(engine).summarize(
        (security, ledger.list()) for security, ledger in loaded
    )
    if args.format == "json":
        print(json.dumps(summary.to_dict(), indent=2))
    elif args.format == "markdown":
        print(MarkdownRenderer.render_portfolio(summary))
    else:
        print_portfolio_report(summary)
    return 0


PROGRAM_DESCRIPTION = """
ACB Tracker - Adjusted Cost Base and capital gains (Canadian average cost method)

Examples:
  %(prog)s report vfv.json                     Report on a single security ledger
  %(prog)s report vfv.json --format markdown   Render the report as Markdown
  %(prog)s report ./ledgers/ --format json     Portfolio summary for a directory of ledgers
"""

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="acb-tracker",
        description=PROGRAM_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version="%(prog)s 1.0.0"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    report = subparsers.add_parser(
        "report",
        help="ACB summary and capital gains for a ledger file or directory"
    )
    report.add_argument(
        "input",
        help="Ledger JSON file, or a directory of ledger files"
    )
    report.add_argument(
        "--currency", "-c",
        help=f"Currency code to report in (default: from file, else {settings.DEFAULT_CURRENCY})"
    )
    report.add_argument(
        "--format", "-f",
        choices=["table", "markdown", "json"],
        default="table",
        help="Output format (default: table)"
    )
    report.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        # LOG_LEVEL from the environment is not checked by argparse
        configure_logging(args.log_level)
        return run_report(Path(args.input), args)
    except (ACBError, ValueError) as e:
        logger.debug("Report failed", exc_info=True)
        err_console.print(f"[status.error]Error:[/] {escape(str(e))}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
