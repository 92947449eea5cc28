#!/usr/bin/env python3
"""
Taxis - Ancient Greek τάξις (arrangement, order)

Organizes photos into a dated folder tree:

    <destination>/<device alias>/<year>/<month>/<original name>

The capture date and device come from EXIF. Files without usable EXIF fall
back to dates encoded in the file name (mmexport<epoch> export codes,
20230401_101500 style timestamps) and are placed without a device folder.

Usage:
    taxis organize -s ~/Inbox -d ~/Photos -m copy          # Confirm each file
    taxis organize -s ~/Inbox -d ~/Photos -m move -t       # Confirm the whole plan once
    taxis organize -s ~/Inbox -d ~/Photos -m move -y       # No questions asked
    taxis organize -s ~/Inbox -d ~/Photos -m copy --dry-run
    taxis extensions ~/Inbox                               # List file extensions
"""

import argparse
import logging
import pathlib
import sys
from typing import Optional, Sequence

from rich.logging import RichHandler
from rich.markup import escape

from batch_coordinator import BatchCoordinator, BatchReport
from console_ui import ConsoleUI
from media_scanner import MediaScanner, count_extensions
from taxis_config import TaxisConfig
from taxis_errors import ConfigurationError

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io

    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding="utf-8")

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_CONFIGURATION = 2
EXIT_CANCELLED = 130

logger = logging.getLogger("taxis")


def setup_logging(console, verbose: bool = False):
    """Route the taxis logger through a RichHandler on the shared console"""
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # exifread warns about every file without an EXIF block
    logging.getLogger("exifread").setLevel(logging.DEBUG if verbose else logging.ERROR)


class Taxis:
    """Main application class for Taxis"""

    def __init__(self, args: argparse.Namespace, ui: Optional[ConsoleUI] = None):
        self.args = args
        self.ui = ui or ConsoleUI()
        setup_logging(self.ui.console, getattr(args, "verbose", False))

    def run(self) -> int:
        """Execute the selected command and return the exit code"""
        try:
            if self.args.command == "organize":
                return self.cmd_organize()
            return self.cmd_extensions()
        except ConfigurationError as e:
            self.ui.print_error(f"Configuration error: {escape(str(e))}")
            return EXIT_CONFIGURATION
        except (KeyboardInterrupt, EOFError):
            self.ui.console.print()
            self.ui.print_warning("Operation cancelled by user")
            return EXIT_CANCELLED

    def cmd_organize(self) -> int:
        """Organize images from the source into the destination tree"""
        config = TaxisConfig.from_args(self.args)

        self.ui.print_header("Taxis", "Organize photos by device and date")
        self.ui.show_configuration(config.as_display_dict())

        scan = MediaScanner().scan(config.source)
        logger.info(
            "Found %d images, %d videos and %d audio files in %s",
            len(scan.images),
            len(scan.videos),
            len(scan.audio),
            config.source,
        )
        if scan.videos or scan.audio:
            logger.debug("Videos and audio files are left where they are")

        if not scan.images:
            self.ui.print_info("No images to organize")
            logger.info("done")
            return EXIT_OK

        coordinator = BatchCoordinator.from_config(config, self.ui)
        report = coordinator.run(scan.images)
        self.show_summary(report, coordinator.past_tense)

        if config.dry_run:
            self.ui.print_info("Dry run mode - no files were modified")

        return EXIT_FAILURES if report.failure_count else EXIT_OK

    def show_summary(self, report: BatchReport, past_tense: str):
        """Summarize the run on the console"""
        self.ui.console.print()
        if report.planned and not report.transferred and not report.declined:
            self.ui.print_info(f"{len(report.planned)} files would be {past_tense}")
        if report.in_place:
            self.ui.print_info(f"{len(report.in_place)} files already in place")
        if report.declined:
            self.ui.print_info(f"{len(report.declined)} files left untouched")
        self.ui.show_operation_summary(
            [source.name for source, _target in report.transferred],
            [(str(source), reason) for source, reason in report.failed],
            past_tense,
        )

    def cmd_extensions(self) -> int:
        """List the distinct file extensions under a directory"""
        root = pathlib.Path(self.args.path).expanduser()
        counts = count_extensions(root)
        self.ui.show_extension_counts(dict(counts), f"Extensions under {root}")
        return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taxis",
        description="Taxis - organize photos into device/year/month folders",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands", required=True)

    organize_parser = subparsers.add_parser("organize", help="Copy or move images into the dated tree")
    organize_parser.add_argument("-s", "--source", required=True, help="Source directory")
    organize_parser.add_argument("-d", "--dest", required=True, help="Destination directory")
    organize_parser.add_argument(
        "-m", "--mode", required=True, choices=["copy", "move"], help="Copy files or move them"
    )
    organize_parser.add_argument(
        "--dry-run", "--dry", dest="dry_run", action="store_true", help="Show what would be done without changes"
    )
    organize_parser.add_argument(
        "--no-skip", action="store_true", help="Rename instead of skipping when the destination exists"
    )
    organize_parser.add_argument(
        "-o", "--overwrite", action="store_true", help="Overwrite when the destination exists"
    )
    organize_parser.add_argument("-y", "--yes", action="store_true", help="Answer yes to every confirmation")
    organize_parser.add_argument(
        "-t", "--together", action="store_true", help="Plan all files first and confirm once"
    )
    organize_parser.add_argument(
        "-a", "--aliases", help="Device alias file (.toml, .yaml or .json) mapping EXIF models to folder names"
    )
    organize_parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")

    extensions_parser = subparsers.add_parser("extensions", help="List file extensions found under a directory")
    extensions_parser.add_argument("path", help="Directory to scan")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    app = Taxis(args)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
