"""Command-line interface for inspecting elasticity model input.

Usage:
    python -m simelastic.cli summary model.inp --dim 3 --patches 4
    python -m simelastic.cli summary model.xinp --dim 2 --plane-strain
    python -m simelastic.cli config
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from simelastic.config import ConfigurationError, create_validated_config, get_defaults
from simelastic.model.driver import ElasticityDriver

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def cmd_summary(args: argparse.Namespace) -> int:
    """Parse and pre-process a model, then print what got bound."""
    overrides = {"dimension": args.dim}
    if args.plane_strain:
        overrides["plane_strain"] = True
    if args.axisymmetric:
        overrides["axisymmetric"] = True

    try:
        config = create_validated_config(**overrides)
    except ConfigurationError as e:
        logger.error(str(e))
        return 2

    owned = None
    if args.owned:
        owned = [int(p) for p in args.owned.split(",")]

    driver = ElasticityDriver(config, num_patches=args.patches, owned_patches=owned)

    path = Path(args.input)
    if not path.exists():
        logger.error(f"Input file not found: {path}")
        return 2

    if args.format == "xml":
        ok = driver.read_xml(path)
    elif args.format == "legacy":
        with open(path, encoding="utf-8") as f:
            ok = driver.read_legacy(f)
    else:
        ok = driver.read(path)

    if not ok:
        logger.error(f"Failed to parse {path}")
        return 1

    driver.preprocess()
    print(json.dumps(driver.summary(), indent=2))
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the defaults currently in effect."""
    print(yaml.safe_dump(get_defaults(), default_flow_style=False, sort_keys=False))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Property and boundary condition binding for linear elasticity models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarise a legacy input file for a 4-patch 3D model
  python -m simelastic.cli summary model.inp --patches 4

  # Summarise the part of an XML model owned by a partition
  python -m simelastic.cli summary model.xinp --patches 4 --owned 1,2

  # Show defaults
  python -m simelastic.cli config
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    summary_parser = subparsers.add_parser("summary", help="Parse a model and summarise its bindings")
    summary_parser.add_argument("input", help="Model input file")
    summary_parser.add_argument(
        "--dim",
        type=int,
        choices=[2, 3],
        default=3,
        help="Spatial dimension (default: 3)",
    )
    summary_parser.add_argument(
        "--patches",
        type=int,
        default=1,
        help="Number of patches in the model (default: 1)",
    )
    summary_parser.add_argument(
        "--owned",
        default="",
        help="Comma-separated global patch numbers owned locally (default: all)",
    )
    summary_parser.add_argument(
        "--format",
        choices=["auto", "legacy", "xml"],
        default="auto",
        help="Input syntax (default: from file suffix)",
    )
    summary_parser.add_argument("--plane-strain", action="store_true", help="Plane strain (2D only)")
    summary_parser.add_argument("--axisymmetric", action="store_true", help="Axisymmetric (2D only)")

    subparsers.add_parser("config", help="Show default configuration")

    args = parser.parse_args(argv)

    if args.command == "summary":
        return cmd_summary(args)
    if args.command == "config":
        return cmd_config(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
