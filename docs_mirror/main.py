"""CLI entry point and orchestrator."""

import argparse
import logging
import signal
import sys
from typing import Optional

import yaml

from . import __version__
from .config import AppConfig, load_config
from .discovery import discover
from .downloader import Downloader, check_dependencies
from .errors import MirrorError, UsageError
from .logger import setup_logger
from .report import RunReport, show_summary, summarize
from .sync import SyncEngine
from .workspace import run_context

logger = logging.getLogger("docs_mirror")

DESCRIPTION = """\
Downloads all Claude Code documentation from docs.anthropic.com.
Only updates files that have changed (differential updates).
"""

EPILOG = """\
examples:
  docs-mirror                 Download all documentation
  docs-mirror --keep-temp     Download and keep temp files for debugging
"""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(f"{message}. Use --help for usage information.")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="docs-mirror",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument("--keep-temp", action="store_true",
                        help="Keep temporary files for debugging")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a YAML config file (defaults built in)")
    parser.add_argument("--version", action="version",
                        version=(f"Claude Code Documentation Downloader v{__version__}\n"
                                 "URL: https://docs.anthropic.com/en/docs/claude-code/"),
                        help="Show version information")
    return parser


def run(config: AppConfig, keep_temp: bool = False,
        downloader: Optional[Downloader] = None) -> int:
    """Preflight, discover, sync and summarize. Returns the process exit code."""
    downloader = downloader or Downloader(config)
    try:
        check_dependencies(config, downloader)

        with run_context(config, keep_temp) as ctx:
            print("Starting Claude Code documentation download")

            paths = discover(config, downloader)
            engine = SyncEngine(config, downloader, RunReport(ctx.report_path))
            report, counts = engine.sync_all(paths, ctx.scratch_dir)

            summary = summarize(report, counts)
            show_summary(summary, ctx)

            if counts.total and counts.failed == counts.total:
                logger.error("Download process failed: every document failed")
                return 1
            if counts.failed and config.download.fail_on_any_error:
                logger.error(f"Download process failed: {counts.failed} document(s) failed")
                return 1

            logger.info("Claude Code documentation download completed!")
            return 0
    finally:
        downloader.close()


def _terminate(signum, frame):
    raise SystemExit(128 + signum)


def main(argv=None):
    setup_logger()

    try:
        args = build_parser().parse_args(argv)
        config = load_config(args.config)
    except UsageError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except (OSError, yaml.YAMLError, TypeError) as e:
        logger.error(f"Invalid config: {e}")
        sys.exit(UsageError.exit_code)

    if config.log_dir:
        setup_logger(config.log_dir)

    # SIGTERM unwinds like SystemExit so the scratch workspace is released
    signal.signal(signal.SIGTERM, _terminate)

    try:
        code = run(config, keep_temp=args.keep_temp)
    except MirrorError as e:
        logger.error(str(e))
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        logger.error("Interrupted")
        sys.exit(130)

    sys.exit(code)


if __name__ == "__main__":
    main()
