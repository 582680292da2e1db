"""
ucumkit Command Line

Usage:
    python -m ucumkit.run validate "kg.m/s2"
    python -m ucumkit.run canonize "N"
    python -m ucumkit.run vector "m.s-1"
    python -m ucumkit.run convert "[in_i]" cm 12
    python -m ucumkit.run commensurable m km
    python -m ucumkit.run multiply m 2 s-1 3
    python -m ucumkit.run divide m 10 s 2
    python -m ucumkit.run display "kg/m3"
    python -m ucumkit.run notation 0.05
    python -m ucumkit.run --config settings.yaml canonize "kPa"

Exit status is 1 when the expression is invalid or ineligible.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ucumkit.config import ConfigurationError, load_settings
from ucumkit.service import UcumService


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="UCUM unit expression tool")
    parser.add_argument("--config", help="Path to settings YAML")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log at DEBUG")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("validate", help="Check an expression, naming the failure")
    p.add_argument("expression")
    p.add_argument("--purpose", default="validity",
                   choices=["validity", "canonization", "operations"])

    for name, help_text in [
        ("canonize", "Base units and magnitude"),
        ("vector", "Base-unit exponent vector"),
        ("display", "Human-readable name"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("expression")

    p = sub.add_parser("convert", help="Convert a quantity between units")
    p.add_argument("source")
    p.add_argument("target")
    p.add_argument("quantity", type=float, nargs="?", default=1.0)

    p = sub.add_parser("commensurable", help="Do two expressions share base units")
    p.add_argument("source")
    p.add_argument("target")

    for name in ("multiply", "divide"):
        p = sub.add_parser(name, help=f"{name.capitalize()} two quantities")
        p.add_argument("source")
        p.add_argument("source_quantity", type=float)
        p.add_argument("target")
        p.add_argument("target_quantity", type=float)

    p = sub.add_parser("notation", help="Write a number as a UCUM literal")
    p.add_argument("quantity", type=float)

    return parser


def _run(args, ucum: UcumService) -> int:
    if args.command == "validate":
        error = ucum.diagnose(args.expression, args.purpose)
        if error is None:
            print(f"[OK]   {args.expression}")
            return 0
        print(f"[FAIL] {args.expression}: {error.kind} - {error.message}")
        return 1

    if args.command == "commensurable":
        commensurable = ucum.is_commensurable(args.source, args.target)
        print(commensurable)
        return 0 if commensurable else 1

    if args.command == "canonize":
        result = ucum.canonize(args.expression)
    elif args.command == "vector":
        result = ucum.canon_vector(args.expression)
    elif args.command == "display":
        result = ucum.display_name(args.expression)
    elif args.command == "convert":
        result = ucum.convert(args.source, args.target, args.quantity)
    elif args.command == "multiply":
        result = ucum.multiply(args.source, args.source_quantity, args.target, args.target_quantity)
    elif args.command == "divide":
        if args.target_quantity == 0:
            print("[FAIL] target quantity must be non-zero")
            return 1
        result = ucum.divide(args.source, args.source_quantity, args.target, args.target_quantity)
    else:
        result = ucum.number_to_notation(args.quantity)

    if result is None:
        print("[FAIL] ineligible")
        return 1
    print(result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    level = "DEBUG" if args.verbose else settings.log_level.upper()
    logging.basicConfig(level=getattr(logging, level), format='%(message)s')

    return _run(args, UcumService(settings=settings))


if __name__ == "__main__":
    sys.exit(main())
