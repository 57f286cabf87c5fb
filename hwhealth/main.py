"""Main entry point for the hwhealth hardware health report."""
import argparse
import logging
import os
import sys
import webbrowser

from rich.console import Console
from rich.logging import RichHandler

from .collectors.system_collector import SystemCollector
from .config.config_manager import ConfigManager
from .core.aggregator import ReportModel
from .core.errors import ConfigError
from .core.scan_manager import ScanManager
from .display import FORMATS, ReportRenderer

logger = logging.getLogger(__name__)

EXIT_HEALTHY = 0
EXIT_WARNINGS = 1
EXIT_CRITICAL = 2
EXIT_INCONCLUSIVE = 3
EXIT_CONFIG_ERROR = 4


def exit_code_for(report: ReportModel) -> int:
    """Map a report to the process exit status."""
    if not report.is_conclusive:
        return EXIT_INCONCLUSIVE
    if report.critical_issues:
        return EXIT_CRITICAL
    if report.warnings:
        return EXIT_WARNINGS
    return EXIT_HEALTHY


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hardware health report")
    parser.add_argument("--config", default=None,
                        help="YAML configuration file (default: bundled defaults)")
    parser.add_argument("--format", choices=FORMATS, default="text")
    parser.add_argument("--output", default=None,
                        help="write the report to this file instead of the terminal")
    parser.add_argument("--no-color", action="store_true")
    parser.add_argument("--open", action="store_true",
                        help="open the written report in the default viewer")
    parser.add_argument("--verbose", action="store_true")
    return parser


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=verbose)],
    )


def main(argv=None) -> int:
    """Main entry point for the application."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.open and not args.output:
        parser.error("--open requires --output")
    setup_logging(args.verbose)

    try:
        config = ConfigManager.load_config(args.config)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return EXIT_CONFIG_ERROR
    if args.no_color:
        config.display.show_colors = False

    provider = SystemCollector(config.collection)
    report = ScanManager(provider, config).run_scan()
    renderer = ReportRenderer(config.display)

    if args.output:
        content = renderer.export(report, args.format)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(content)
        logger.info("Report written to %s", args.output)
        if args.open:
            webbrowser.open("file://" + os.path.abspath(args.output))
    elif args.format == "text":
        renderer.render(report)
    else:
        sys.stdout.write(renderer.export(report, args.format) + "\n")

    return exit_code_for(report)


if __name__ == "__main__":
    sys.exit(main())
