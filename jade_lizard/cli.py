"""CLI: evaluate Jade Lizard / Reverse Jade Lizard setups and save their charts."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .analytics.summary import StrategySummary
from .strategy.errors import PayoffInputError
from .strategy.lizards import JadeLizardInputs, ReverseJadeLizardInputs, strategy_chart
from .utils.config import DEFAULT_CONFIG_PATH, DEFAULTS, load_config, run_defaults, strategy_inputs_from_config
from .utils.logging import setup_logger

LOGGER = logging.getLogger("jade_lizard")


def _fmt_money(value: float) -> str:
    return f"${value:,.2f}"


def _print_summary(label: str, summary: StrategySummary, chart_path: Path) -> None:
    side = "upside" if summary.strategy == "jade_lizard" else "downside"
    breakevens = ", ".join(f"{x:.2f}" for x in summary.breakevens) or "none in range"
    print(f"\n{label} ({summary.strategy})")
    print("   " + "─" * 40)
    print(f"   Net Credit:   {_fmt_money(summary.net_credit)}")
    print(f"   Max Profit:   {_fmt_money(summary.max_profit)} at spot {summary.max_profit_spot:.2f}")
    print(f"   Max Loss:     {_fmt_money(summary.max_loss)} at spot {summary.max_loss_spot:.2f}")
    print(f"   Breakevens:   {breakevens}")
    print(f"   No {side} risk: {'yes' if summary.capped_side_risk_free else 'no'}")
    print(f"   Chart:        {chart_path}")


def _add_range_args(parser: argparse.ArgumentParser, hl: float, hu: float) -> None:
    parser.add_argument("--hl", type=float, default=hl, help="Lower spot bound as a multiple of ST")
    parser.add_argument("--hu", type=float, default=hu, help="Upper spot bound as a multiple of ST")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--output-dir", type=str, default=None, help="Where charts are written")
    parser.add_argument("--strict", action="store_true", help="Reject inverted spread strikes")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    jade = sub.add_parser("jade", help="Jade Lizard: short put + bear call spread")
    for name in ("ST", "XHU", "XHL", "XM", "lcp", "scp", "spp"):
        jade.add_argument(name, type=float)
    _add_range_args(jade, 0.0, 1.9)

    reverse = sub.add_parser("reverse", help="Reverse Jade Lizard: short call + bull put spread")
    for name in ("ST", "XLL", "XLU", "XH", "lpp", "spp", "scp"):
        reverse.add_argument(name, type=float)
    _add_range_args(reverse, 0.4, 2.5)

    config = sub.add_parser("config", help="Every setup listed in a YAML config")
    config.add_argument("--config", type=str, default=str(DEFAULT_CONFIG_PATH))
    return parser


def _setups(args) -> Tuple[List[Tuple[str, object]], dict]:
    if args.command == "config":
        config = load_config(args.config)
        return strategy_inputs_from_config(config), run_defaults(config)
    if args.command == "jade":
        inputs = JadeLizardInputs(args.ST, args.XHU, args.XHL, args.XM, args.lcp, args.scp, args.spp, args.hl, args.hu)
    else:
        inputs = ReverseJadeLizardInputs(args.ST, args.XLL, args.XLU, args.XH, args.lpp, args.spp, args.scp, args.hl, args.hu)
    return [(inputs.name, inputs)], dict(DEFAULTS)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger("jade_lizard", level=getattr(logging, args.log_level))

    try:
        setups, defaults = _setups(args)
    except (OSError, KeyError, ValueError) as exc:
        LOGGER.error("Could not load strategy setups: %s", exc)
        return 1

    output_dir = Path(args.output_dir or defaults["output_dir"])
    strict = args.strict or bool(defaults["strict"])
    failures = 0
    for label, inputs in setups:
        try:
            chart = strategy_chart(inputs, strict=strict)
        except PayoffInputError as exc:
            LOGGER.error("%s: %s", label, exc)
            failures += 1
            continue
        path = chart.save(output_dir / f"{label}.png", dpi=int(defaults["dpi"]))
        chart.close()
        LOGGER.info("Saved %s (%d spots)", path, len(chart.table))
        _print_summary(label, chart.summary, path)

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
