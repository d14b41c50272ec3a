"""
run_calculations.py – Command-line front end for the emission calculator.

Usage
──────
# List the built-in emission factor catalog (optionally filtered)
python run_calculations.py factors --category purchased_electricity --region US

# Calculate with a catalog factor (activity unit is converted to the factor unit)
python run_calculations.py calculate --scope scope_1 --category mobile_combustion \
    --amount 500 --unit L --factor-id mobile_combustion.diesel_fuel.gallon

# Market-based Scope 2 with 40 % renewable supply
python run_calculations.py calculate --scope scope_2 --category purchased_electricity \
    --amount 12000 --unit kWh --factor-id purchased_electricity.us_average.kWh \
    --method market_based --renewable-pct 40

# Convert a quantity between units
python run_calculations.py convert 1000 kWh MWh
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from ghg_engine.calculator import EmissionCalculator
from ghg_engine.config import get_config
from ghg_engine.constants import (
    ALLOWED_CATEGORIES,
    ALLOWED_SCOPES,
    FACTOR_QUERY_DEFAULT_LIMIT,
    METHOD_LOCATION_BASED,
    METHOD_MARKET_BASED,
    STATUS_COMPLETED,
)
from ghg_engine.emission_factors import filter_emission_factors, get_default_emission_factors
from ghg_engine.exceptions import IncompatibleUnitsError
from ghg_engine.schemas import CalculationResult
from ghg_engine.unit_conversion import convert_unit, get_unit_display_name

console = Console()
log = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# Sub-commands
# ─────────────────────────────────────────────────────────────

def cmd_factors(args: argparse.Namespace) -> int:
    """Handle: factors. Print the built-in catalog as a table."""
    try:
        factors = filter_emission_factors(
            get_default_emission_factors(),
            category=args.category,
            region=args.region,
            limit=args.limit,
        )
    except ValueError as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1

    table = Table(title=f"Emission factors ({len(factors)})")
    table.add_column("id", style="cyan")
    table.add_column("kg CO₂e / unit", justify="right", style="green")
    table.add_column("unit")
    table.add_column("source", style="dim")
    table.add_column("region", style="dim")
    for f in factors:
        table.add_row(f.id, f"{f.factor:.4f}", f.unit, f.source, f.region or "")
    console.print(table)
    return 0


def _print_calculation(result: CalculationResult) -> None:
    table = Table(title="Calculation result", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    status_str = (
        "[green]completed[/]" if result.status == STATUS_COMPLETED else "[red]error[/]"
    )
    table.add_row("status", status_str)
    table.add_row("method", result.calculation_method)
    table.add_row("kg CO₂e", f"{result.calculated_emissions:.4f}")
    table.add_row("tCO₂e", f"{result.calculated_emissions / 1_000:.6f}")
    if result.uncertainty_range:
        table.add_row(
            "uncertainty",
            f"{result.uncertainty_range.min:.4f} – {result.uncertainty_range.max:.4f}",
        )
    if result.emission_factor:
        f = result.emission_factor
        table.add_row("factor", f"{f.id} = {f.factor} kg CO₂e/{f.unit} ({f.source})")
    for err in result.errors or []:
        table.add_row("error", f"[red]{err}[/]")
    console.print(table)


def cmd_calculate(args: argparse.Namespace) -> int:
    """Handle: calculate. Run one calculation and print the result."""
    calculator = EmissionCalculator.from_config(args.config)
    log.debug("Calculator ready with %d factor(s)", len(calculator.list_emission_factors()))

    metadata: dict = {}
    if args.method:
        metadata["calculationMethod"] = args.method
    if args.renewable_pct is not None:
        metadata["renewablePercentage"] = args.renewable_pct

    today = date.today().isoformat()
    payload = {
        "scope": args.scope,
        "category": args.category,
        "subcategory": args.subcategory or "",
        "activityData": {
            "amount": args.amount,
            "unit": args.unit,
            "startDate": args.start_date or today,
            "endDate": args.end_date or today,
        },
        "emissionFactorId": args.factor_id,
        "customEmissionFactor": args.custom_factor,
        "metadata": metadata or None,
    }

    result = calculator.calculate(payload)
    _print_calculation(result)
    return 0 if result.status == STATUS_COMPLETED else 1


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle: convert. Convert a value between two units."""
    try:
        converted = convert_unit(args.value, args.from_unit, args.to_unit)
    except IncompatibleUnitsError as exc:
        console.print(f"[red]Error:[/] {exc}")
        return 1
    console.print(
        f"{args.value:g} {get_unit_display_name(args.from_unit)} = "
        f"[bold]{converted:g}[/] {get_unit_display_name(args.to_unit)}"
    )
    return 0


# ─────────────────────────────────────────────────────────────
# Argument parsing
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    """Construct and return the top-level argument parser."""
    root = argparse.ArgumentParser(
        prog="run_calculations.py",
        description="GHG emission calculator – local CLI tool.",
    )
    sub = root.add_subparsers(dest="command", required=True)

    # ── factors ────────────────────────────────────────────────
    p_factors = sub.add_parser("factors", help="List built-in emission factors.")
    p_factors.add_argument("--category", choices=ALLOWED_CATEGORIES, default=None)
    p_factors.add_argument("--region", default=None, help="e.g. US, EU, ERCOT")
    p_factors.add_argument(
        "--limit", type=int, default=FACTOR_QUERY_DEFAULT_LIMIT,
        help=f"Max rows (1-100, default {FACTOR_QUERY_DEFAULT_LIMIT})",
    )

    # ── calculate ──────────────────────────────────────────────
    p_calc = sub.add_parser("calculate", help="Calculate emissions for one activity.")
    p_calc.add_argument("--scope", required=True, choices=ALLOWED_SCOPES)
    p_calc.add_argument("--category", required=True, choices=ALLOWED_CATEGORIES)
    p_calc.add_argument("--subcategory", default=None)
    p_calc.add_argument("--amount", required=True, type=float)
    p_calc.add_argument("--unit", required=True, help='Activity unit, e.g. "kWh", "L"')
    source = p_calc.add_mutually_exclusive_group(required=True)
    source.add_argument("--factor-id", dest="factor_id", default=None)
    source.add_argument("--custom-factor", dest="custom_factor", type=float, default=None,
                        help="kg CO₂e per activity unit")
    p_calc.add_argument(
        "--method", choices=[METHOD_LOCATION_BASED, METHOD_MARKET_BASED], default=None,
        help="Scope 2 accounting method (default: location_based)",
    )
    p_calc.add_argument("--renewable-pct", dest="renewable_pct", type=float, default=None)
    p_calc.add_argument("--start-date", dest="start_date", default=None, metavar="YYYY-MM-DD")
    p_calc.add_argument("--end-date", dest="end_date", default=None, metavar="YYYY-MM-DD")

    # ── convert ────────────────────────────────────────────────
    p_conv = sub.add_parser("convert", help="Convert a value between units.")
    p_conv.add_argument("value", type=float)
    p_conv.add_argument("from_unit")
    p_conv.add_argument("to_unit")

    return root


# ─────────────────────────────────────────────────────────────
# Entry point
# ─────────────────────────────────────────────────────────────

def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the correct sub-command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config()
    except EnvironmentError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )

    args.config = config

    dispatch = {
        "factors": cmd_factors,
        "calculate": cmd_calculate,
        "convert": cmd_convert,
    }
    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    sys.exit(handler(args))


if __name__ == "__main__":
    main()
