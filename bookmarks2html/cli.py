#!/usr/bin/env python3
"""Command line interface for exporting bookmarks to HTML."""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .chromium_exporter import (
    BookmarkExportError,
    ChromiumDataReader,
    Colors,
    ExportConfig,
    export_to_html,
    setup_logging,
)
from .dialogs import NoFilePicker, TkFilePicker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export browser bookmarks to a Netscape bookmark HTML file.",
    )
    parser.add_argument(
        "-i", "--input", type=Path, metavar="PATH",
        help="bookmarks JSON file (default: the browser profile's Bookmarks file)",
    )
    parser.add_argument(
        "--prompt-input", action="store_true",
        help="choose the bookmarks file with a file dialog",
    )
    parser.add_argument(
        "-o", "--output", type=Path, metavar="PATH",
        help="HTML file to write (default: timestamped file on the desktop)",
    )
    parser.add_argument(
        "--prompt-output", action="store_true",
        help="choose the output file with a save dialog",
    )
    parser.add_argument(
        "--browser", choices=sorted(ChromiumDataReader.BROWSER_DIRS), default="chrome",
        help="browser whose bookmarks are exported by default (default: chrome)",
    )
    parser.add_argument(
        "--profile", default="Default",
        help="browser profile directory name (default: Default)",
    )
    parser.add_argument(
        "--escape", action="store_true",
        help="escape HTML special characters in names and URLs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="show debug logging")
    parser.add_argument("-q", "--quiet", action="store_true", help="disable logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(verbose=args.verbose, silent=args.quiet)

    config = ExportConfig.resolve(
        source_path=args.input,
        output_path=args.output,
        browser=args.browser,
        profile=args.profile,
        prompt_source=args.prompt_input,
        prompt_output=args.prompt_output,
        escape=args.escape,
    )
    picker = TkFilePicker() if (args.prompt_input or args.prompt_output) else NoFilePicker()

    try:
        output_path, bookmarks, folders = export_to_html(config, picker)
    except BookmarkExportError as e:
        print(f"\n{Colors.RED}Error:{Colors.RESET} {e}")
        return 1

    print()
    print(f"{Colors.GREEN}Export completed!{Colors.RESET}")
    print(f"  File: {output_path}")
    print(f"  Bookmarks: {bookmarks}")
    print(f"  Folders: {folders}")
    return 0


def run():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nBye!")
        sys.exit(130)

