#!/usr/bin/env python3
import argparse
import logging
import sys

from fraction import NegativeFractionError
from integers import WidthOverflowError
from reference import float_search
from search import MatchPolicy, PowerSearch, SearchConfig


def build_parser():
    p = argparse.ArgumentParser(
        prog="powercycle",
        description="Find the first power of a fraction that repeats once folded into [1, 2).",
    )
    p.add_argument("base", nargs="?", default="3/2", help="base fraction as top/bottom (default 3/2)")
    p.add_argument("--max-power", type=int, default=64, help="give up after this power")
    p.add_argument("--policy", choices=[m.value for m in MatchPolicy], default=MatchPolicy.EXACT.value,
                   help="exact: identical reduced fractions; approx: equal when truncated to --decimals")
    p.add_argument("--decimals", type=int, default=4, help="decimal places kept by the approx policy")
    p.add_argument("--width", default="u128", help="integer width of numerator and denominator")
    p.add_argument("--float-reference", action="store_true",
                   help="also run the float64 search and report where it stops")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = SearchConfig.from_mapping({
            "base": args.base,
            "max_power": args.max_power,
            "policy": args.policy,
            "decimals": args.decimals,
            "width": args.width,
        })
    except (ValueError, NotImplementedError, ZeroDivisionError, OverflowError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        result = PowerSearch(config, logging.getLogger("powercycle.search")).run()
    except (WidthOverflowError, NegativeFractionError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if not result.found:
        print(f"No repeat up to power {config.max_power}")

    if args.float_reference:
        ref = float_search(config.base, config.max_power, config.decimals)
        if ref.found:
            print(f"Float reference: {ref.index} and {ref.power}")
        else:
            print(f"Float reference: no repeat up to power {config.max_power}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
