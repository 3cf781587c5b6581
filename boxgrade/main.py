from __future__ import annotations

import argparse
import logging

from boxgrade.cli import add_config_args, add_run_args, config_overrides
from boxgrade.config import load_config
from boxgrade.errors import main_guard
from boxgrade.orchestrator import RunReport, find_vagrant, run_vagrant_boxes
from boxgrade.paths import default_config_file
from boxgrade.vagrant import VagrantClient

LOG_FORMAT = "%(levelname)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxgrade",
        description="Run topgrade inside Vagrant boxes, restoring their power state afterwards",
    )
    add_config_args(parser, default_config_file())
    add_run_args(parser)
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=LOG_FORMAT)


def _print_summary(report: RunReport) -> None:
    summary = f"Upgraded {len(report.upgraded)} box(es)"
    if report.skipped:
        summary += f", skipped {len(report.skipped)} powered off box(es)"
    print(summary)


def main() -> None:
    args = parse_args()
    configure_logging(args.verbose)

    def run() -> None:
        config = load_config(args.config).with_overrides(**config_overrides(args))
        config.require_directories()
        vagrant = VagrantClient(find_vagrant(), dry_run=args.dry_run)
        _print_summary(run_vagrant_boxes(vagrant, config))

    main_guard(run)


if __name__ == "__main__":
    main()
