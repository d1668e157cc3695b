#!/usr/bin/env python3
"""
dupesniff CLI — find duplicate files by sampled content fingerprints.
Decisions (delete, playlists, index persistence) come from flags, or from
[y/N] prompts with --interactive. Nothing is deleted without confirmation.
"""
from __future__ import annotations
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn, Callable
import logging

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dupesniff.core.models import ScanOptions, Classification, ClassifiedPair
from dupesniff.core.deduplicator import ScanContext
from dupesniff.core.reporter import Reporter
from dupesniff.core.resolver import ResolutionPolicy
from dupesniff.commands import ScanCommand
from dupesniff.services.duplicate_service import DuplicateService
from dupesniff.utils.convert_utils import ConvertUtils
from dupesniff.aliases import (
    TIE_BREAK_ALIASES, TIE_BREAK_CHOICES, TIE_BREAK_HELP_TEXT,
    PROMPTS, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.interactive: bool = False
        self.input_func = input_func

        # UTF-8 output; non-UTF-8 file names print as escapes
        for stream in (sys.stdout, sys.stderr):
            if hasattr(stream, "reconfigure"):
                stream.reconfigure(encoding="utf-8", errors="backslashreplace")

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="dupesniff",
            description="dupesniff — duplicate file finder using sampled content fingerprints",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "root",
            type=str,
            help="Root directory to scan for duplicates"
        )
        parser.add_argument(
            "output_dir",
            nargs="?",
            default=None,
            type=str,
            help="Directory holding the persisted index. Default: the root directory"
        )

        # Decisions
        decisions = parser.add_argument_group("decisions")
        decisions.add_argument("--preload-index", action="store_true",
                               help="Load the index saved by a previous run before scanning")
        decisions.add_argument("--delete-dupes", action="store_true", dest="delete_duplicates",
                               help="Delete the newer file of every duplicate pair")
        decisions.add_argument("--dupe-playlist", action="store_true", dest="write_duplicate_playlist",
                               help="Write <root>/dupes.xspf for manual review")
        decisions.add_argument("--show-suspects", action="store_true",
                               help="List every suspect pair, not only the summary")
        decisions.add_argument("--suspect-playlist", action="store_true", dest="write_suspect_playlist",
                               help="Write <root>/suspects.xspf for manual review")
        decisions.add_argument("--show-empty", action="store_true",
                               help="List every empty (all-zero) file")
        decisions.add_argument("--delete-empty", action="store_true",
                               help="Delete empty (all-zero) files")
        decisions.add_argument("--persist-index", action="store_true",
                               help="Save the index at the end of the run, replacing any previous one")
        decisions.add_argument("--interactive", "-I", action="store_true",
                               help="Ask for each decision at a [y/N] prompt instead of using flags")

        # Deletion options
        parser.add_argument(
            "--tie-break",
            choices=TIE_BREAK_CHOICES,
            default="first",
            type=str,
            help=TIE_BREAK_HELP_TEXT
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            dest="use_trash",
            help="Move deleted files to the system trash instead of removing them"
        )
        parser.add_argument(
            "--exclude-dirs", "-e",
            nargs="+",
            default=[],
            type=str,
            metavar='',
            dest="excluded_dirs",
            help="Directories (space separated) that are not scanned"
        )
        parser.add_argument(
            "--force",
            action="store_true",
            help="Skip the deletion confirmation prompt (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show progress and debug logging"
        )
        return parser

    @classmethod
    def parse_args(cls, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments; print usage and exit when there are none."""
        parser = cls.build_parser()
        argv = sys.argv[1:] if args is None else args
        if not argv:
            parser.print_usage(sys.stderr)
            sys.exit(1)
        return parser.parse_args(argv)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        deletes = args.delete_duplicates or args.delete_empty

        if args.force and not (deletes or args.interactive):
            self.error_exit("--force can only be used with --delete-dupes or --delete-empty")

        if args.delete_duplicates and args.write_duplicate_playlist:
            self.error_exit("--dupe-playlist cannot be combined with --delete-dupes")

        # Prevent interactive confirmation in non-TTY environments
        if deletes and not args.force and not args.interactive:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request deletion confirmation in a non-interactive session.\n"
                    "Use --force to proceed without confirmation when piping output or running in scripts."
                )

        root_path = Path(args.root).resolve()
        if not root_path.exists():
            self.error_exit(f"Directory not found: {args.root}")
        if not root_path.is_dir():
            self.error_exit(f"Path is not a directory: {args.root}")

        if args.output_dir is not None:
            output_path = Path(args.output_dir).resolve()
            if output_path.exists() and not output_path.is_dir():
                self.error_exit(f"Output path is not a directory: {args.output_dir}")

        for excl_dir in args.excluded_dirs:
            excl_path = Path(excl_dir).resolve()
            if not excl_path.exists():
                self.warning(f"Excluded directory not found: {excl_dir}")
            elif not excl_path.is_dir():
                self.warning(f"Excluded path is not a directory: {excl_dir}")

    def create_options(self, args: argparse.Namespace) -> ScanOptions:
        """Create ScanOptions from CLI arguments."""
        try:
            return ScanOptions(
                root_dir=args.root,
                output_dir=args.output_dir,
                preload_index=args.preload_index,
                delete_duplicates=args.delete_duplicates,
                write_duplicate_playlist=args.write_duplicate_playlist,
                show_suspects=args.show_suspects,
                write_suspect_playlist=args.write_suspect_playlist,
                show_empty=args.show_empty,
                delete_empty=args.delete_empty,
                persist_index=args.persist_index,
                tie_break=TIE_BREAK_ALIASES[args.tie_break],
                use_trash=args.use_trash,
                excluded_dirs=args.excluded_dirs,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    @staticmethod
    def configure_logging(verbose: bool, quiet: bool) -> None:
        level = logging.WARNING
        if verbose:
            level = logging.DEBUG
        elif quiet:
            level = logging.ERROR
        logging.getLogger().setLevel(level)

    def ask(self, key: str, options: ScanOptions) -> bool:
        """Ask one [y/N] question; anything but y/yes is a no."""
        question = PROMPTS[key].format(index_path=options.index_path)
        response = self.input_func(f"{question} [y/N]: ")
        return response.strip().lower() in ("y", "yes")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    @staticmethod
    def stopped_flag() -> bool:
        """Check if operation should stop (placeholder for signal handling)."""
        return False

    def run_scan(self, options: ScanOptions, command: ScanCommand) -> ScanContext:
        """Execute the scan workflow."""
        context = command.execute(
            options,
            progress_callback=self.progress_callback if self.verbose else None,
            stopped_flag=self.stopped_flag
        )
        if self.verbose:
            sys.stderr.write("\n")
        return context

    def output_report(self, context: ScanContext, options: ScanOptions) -> None:
        """Summary, then duplicate details and a block per classification."""
        if self.quiet:
            return

        show_suspects = options.show_suspects and not self.interactive
        show_empty = options.show_empty and not self.interactive

        print(context.stats.print_summary())
        print(Reporter.report(Classification.DUPLICATE, context.duplicates, show_details=True))
        print(Reporter.report(Classification.SUSPECT, context.suspects, show_details=show_suspects))
        print(Reporter.report(Classification.EMPTY, context.empties, show_details=show_empty))
        print(Reporter.header("DONE"))

    def confirm_deletion(self, pairs: List[ClassifiedPair], options: ScanOptions, force: bool) -> bool:
        """Preview the files the policy selects and ask before deleting them."""
        policy = ResolutionPolicy(options.tie_break)
        if not self.quiet:
            print()
            for pair in pairs:
                doomed = policy.resolve(pair)
                for record in pair.files():
                    marker = "[DEL] " if record is doomed else "[KEEP]"
                    created = record.resolve_creation_time()
                    created_str = ConvertUtils.timestamp_to_human(created) if created is not None else "N/A"
                    print(f"   {marker} {record.path}  (created {created_str})")
                print()

        if force or self.interactive:
            return True

        # Safety check: confirm we're still in interactive mode
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            self.error_exit(
                "Lost interactive terminal during operation. "
                "Use --force to proceed in non-interactive environments."
            )

        count = len(DuplicateService.files_to_delete(pairs, policy))
        verb = "move to trash" if options.use_trash else "delete"
        response = self.input_func(f"Are you sure you want to {verb} {count} files? [y/N]: ")
        if response.strip().lower() not in ("y", "yes"):
            print("Deletion cancelled by user.")
            return False
        return True

    def execute_delete(self, context: ScanContext, classification: Classification,
                       options: ScanOptions, force: bool) -> None:
        pairs = context.pairs_for(classification)
        if not self.confirm_deletion(pairs, options, force):
            return

        report = ScanCommand.delete(context, classification, options)
        if report.failed:
            print(f"\n⚠️  Partial success: {len(report.deleted)}/{report.attempted} files deleted.")
            print(f"Failed to delete {len(report.failed)} file(s):")
            for path, error in report.failed[:5]:
                print(f"  • {os.path.basename(path)}: {error.split(':')[-1].strip()}")
            if len(report.failed) > 5:
                print(f"  ...and {len(report.failed) - 5} more files")
        elif not self.quiet:
            print(f"✅ Deleted {len(report.deleted)} {classification.header} files.")

    def execute_playlist(self, context: ScanContext, classification: Classification,
                         options: ScanOptions) -> None:
        try:
            path = ScanCommand.write_playlist(context, classification, options)
        except RuntimeError as e:
            self.warning(str(e))
            return
        if not self.quiet:
            print(f"Created playlist {path}")

    def handle_duplicates(self, context: ScanContext, options: ScanOptions, force: bool) -> None:
        if not context.duplicates:
            return
        if self.interactive:
            options.delete_duplicates = self.ask("delete_duplicates", options)

        if options.delete_duplicates:
            self.execute_delete(context, Classification.DUPLICATE, options, force)
            return

        if self.interactive:
            options.write_duplicate_playlist = self.ask("write_duplicate_playlist", options)
        if options.write_duplicate_playlist:
            self.execute_playlist(context, Classification.DUPLICATE, options)

    def handle_suspects(self, context: ScanContext, options: ScanOptions) -> None:
        if not context.suspects:
            return
        if self.interactive:
            options.show_suspects = self.ask("show_suspects", options)
            if options.show_suspects:
                print(Reporter.format_details(Classification.SUSPECT, context.suspects))
            options.write_suspect_playlist = self.ask("write_suspect_playlist", options)

        if options.write_suspect_playlist:
            self.execute_playlist(context, Classification.SUSPECT, options)

    def handle_empties(self, context: ScanContext, options: ScanOptions, force: bool) -> None:
        if not context.empties:
            return
        if self.interactive:
            options.show_empty = self.ask("show_empty", options)
            if options.show_empty:
                print(Reporter.format_details(Classification.EMPTY, context.empties))
            options.delete_empty = self.ask("delete_empty", options)

        if options.delete_empty:
            self.execute_delete(context, Classification.EMPTY, options, force)

    def handle_index(self, context: ScanContext, options: ScanOptions) -> None:
        if self.interactive:
            options.persist_index = self.ask("persist_index", options)
        if not options.persist_index:
            return
        try:
            written = ScanCommand.persist_index(context, options)
        except OSError as e:
            self.warning(f"Could not persist index to {options.index_path}: {e}")
            return
        if not self.quiet:
            print(f"Saved index with {written} entries to {options.index_path}")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.interactive = args.interactive
        self.configure_logging(self.verbose, self.quiet)

        self.validate_args(args)
        options = self.create_options(args)
        command = ScanCommand()

        if self.interactive:
            options.preload_index = self.ask("preload_index", options)

        if not self.quiet:
            print(f"Scanning directory: {options.root_dir}")

        context = self.run_scan(options, command)
        self.output_report(context, options)

        self.handle_duplicates(context, options, force=args.force)
        self.handle_suspects(context, options)
        self.handle_empties(context, options, force=args.force)
        self.handle_index(context, options)

        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\n✅ Completed in {elapsed:.2f} seconds")
        if not self.quiet:
            print("ALL DONE!")


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Early termination: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
