import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core import ClassfyApp
from .exceptions import ConfigError, HashUnavailable
from .reporting import ReportGenerator


def setup_logging(verbose: bool, log_file: Optional[Path] = None):
    """Sets up logging to the console and, if requested, a log file."""
    log_level = logging.DEBUG if verbose else logging.INFO

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(
        description="Classfy: sort files into category folders, rename them by date and drop duplicates. "
                    "Files are MOVED: originals are removed from the source directory."
    )

    p.add_argument("src", type=Path, help="Source directory to scan (recursively)")
    p.add_argument("dest", type=Path, help="Destination directory")

    p.add_argument("--dry-run", action="store_true", help="Simulate actions without modifying disk")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    p.add_argument("--log-file", type=Path, default=None, help="Also write the log to this file")
    p.add_argument("--report-csv", type=Path, default=None, help="Write a per-file CSV report to this path")

    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        setup_logging(args.verbose, args.log_file)
    except OSError as e:
        print(f"Error: cannot open log file {args.log_file}: {e}", file=sys.stderr)
        return 1

    logging.info("=== Classfy Started ===")
    logging.info(f"Source: {args.src}")
    logging.info(f"Dest:   {args.dest}")

    try:
        app = ClassfyApp()
        summary = app.organize(
            src_root=args.src,
            dest_root=args.dest,
            dry_run=args.dry_run,
            show_progress=not args.no_progress,
        )
    except ConfigError as e:
        logging.error(f"Error: {e}")
        return 1
    except HashUnavailable as e:
        logging.error(f"Error: {e}")
        logging.error("Please install the necessary tools and try again.")
        return 1
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        return 1
    except Exception:
        logging.exception("Fatal error during organization.")
        return 1

    reporter = ReportGenerator(summary)
    print(reporter.render())

    if args.report_csv:
        try:
            reporter.write_csv(args.report_csv)
        except OSError as e:
            logging.error(f"Failed to write report {args.report_csv}: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
