#!/usr/bin/env python3
"""Export Chromium browser bookmarks to a Netscape bookmark HTML file."""

import json
import logging
import os
import sys
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from .dialogs import FilePicker, NoFilePicker
from .models import Bookmark, BookmarkFolder, BookmarkNode, UnknownNode


class BookmarkExportError(Exception):
    """Base class for errors that stop an export run."""
    pass


class SourceReadError(BookmarkExportError):
    """The bookmarks file is missing or cannot be opened."""
    pass


class SourceParseError(BookmarkExportError):
    """The bookmarks file is not JSON or lacks the bookmark bar."""
    pass


class DestinationWriteError(BookmarkExportError):
    """The HTML file cannot be written."""
    pass


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    GREY = "\033[90m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    @staticmethod
    def background(color: str) -> str:
        """Convert foreground color to background color."""
        return color.replace("[3", "[4", 1)


class CustomFormatter(logging.Formatter):
    """Custom formatter for colored logging output."""

    def __init__(self):
        super().__init__()
        time_format = f"{Colors.GREY}%(asctime)s{Colors.RESET}"
        self.FORMATS = {
            logging.DEBUG: f"{time_format} {Colors.BOLD}{Colors.CYAN}DEBG{Colors.RESET} %(message)s",
            logging.INFO: f"{time_format} {Colors.BOLD}{Colors.GREEN}INFO{Colors.RESET} %(message)s",
            logging.WARNING: f"{time_format} {Colors.BOLD}{Colors.YELLOW}WARN{Colors.RESET} %(message)s",
            logging.ERROR: f"{time_format} {Colors.BOLD}{Colors.RED}ERRR{Colors.RESET} %(message)s",
            logging.CRITICAL: f"{time_format} {Colors.BOLD}{Colors.background(Colors.RED)}CRIT{Colors.RESET} %(message)s",
        }

    def format(self, record: logging.LogRecord) -> str:
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt, datefmt="%H:%M")
        return formatter.format(record)


class ChromiumDataReader:
    """Locates and reads a Chromium profile's Bookmarks file."""

    FILENAME = "Bookmarks"

    # browser -> (Windows, macOS, Linux) data directory, relative to the
    # platform's application data root
    BROWSER_DIRS = {
        "chrome": (
            Path("Google", "Chrome", "User Data"),
            Path("Google", "Chrome"),
            Path("google-chrome"),
        ),
        "edge": (
            Path("Microsoft", "Edge", "User Data"),
            Path("Microsoft Edge"),
            Path("microsoft-edge"),
        ),
        "brave": (
            Path("BraveSoftware", "Brave-Browser", "User Data"),
            Path("BraveSoftware", "Brave-Browser"),
            Path("BraveSoftware", "Brave-Browser"),
        ),
        "chromium": (
            Path("Chromium", "User Data"),
            Path("Chromium"),
            Path("chromium"),
        ),
    }

    @classmethod
    def get_bookmarks_path(
        cls,
        browser: str = "chrome",
        profile: str = "Default",
        platform: Optional[str] = None,
        home: Optional[Path] = None,
    ) -> Path:
        """Get the path to a profile's Bookmarks file for the operating system."""
        if browser not in cls.BROWSER_DIRS:
            raise ValueError(f"Unknown browser: {browser}")
        platform = platform or sys.platform
        home = home or Path.home()
        windows_dir, macos_dir, linux_dir = cls.BROWSER_DIRS[browser]

        if platform == "win32":
            local_appdata = os.environ.get("LOCALAPPDATA")
            root = Path(local_appdata) if local_appdata else home / "AppData" / "Local"
            data_dir = root / windows_dir
        elif platform == "darwin":
            data_dir = home / "Library" / "Application Support" / macos_dir
        else:
            data_dir = home / ".config" / linux_dir

        return data_dir / profile / cls.FILENAME

    @classmethod
    def read_data(cls, path: Path) -> Dict:
        """Read and decode the bookmarks JSON document at ``path``."""
        logging.info("Reading bookmarks file...")
        logging.debug(f"Source: {path}")

        try:
            with path.open("r", encoding="utf-8-sig") as f:
                text = f.read()
        except FileNotFoundError as e:
            raise SourceReadError(f"File not found: {path}") from e
        except OSError as e:
            raise SourceReadError(f"Cannot read {path}: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise SourceParseError(f"{path} is not UTF-8 text: {e}") from e

        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise SourceParseError(f"{path} is not valid JSON: {e}") from e
        except RecursionError as e:
            raise SourceParseError(f"{path} is nested too deeply to decode") from e


class ChromiumDataParser:
    """Parses the bookmark bar of a Chromium bookmarks document into nodes."""

    def __init__(self, data: Dict):
        self.data = data

    def parse(self) -> List[BookmarkNode]:
        """Parse ``roots.bookmark_bar.children`` into bookmark nodes."""
        logging.info("Parsing bookmark bar...")

        try:
            children = self.data["roots"]["bookmark_bar"]["children"]
        except (KeyError, TypeError) as e:
            raise SourceParseError(
                'Bookmarks file has no "roots.bookmark_bar.children" entry'
            ) from e
        if not isinstance(children, list):
            raise SourceParseError('"roots.bookmark_bar.children" is not a list')

        return self._parse_children(children)

    def _parse_children(self, items: List) -> List[BookmarkNode]:
        """Walk the tree with an explicit stack, preserving order."""
        nodes: List[BookmarkNode] = []
        # (remaining raw items, list receiving their parsed nodes)
        stack = [(iter(items), nodes)]

        while stack:
            remaining, siblings = stack[-1]
            for item in remaining:
                node, raw_children = self._parse_node(item)
                siblings.append(node)
                if raw_children is not None:
                    stack.append((iter(raw_children), node.children))
                    break
            else:
                stack.pop()

        return nodes

    def _parse_node(self, item) -> Tuple[BookmarkNode, Optional[List]]:
        """Parse one node; folders come back empty with their raw children."""
        if not isinstance(item, dict):
            logging.debug(f"Skipping non-object node: {item!r}")
            return UnknownNode(node_type=type(item).__name__), None

        node_type = item.get("type")
        if node_type == "url":
            bookmark = Bookmark(
                title=self._text(item, "name"),
                url=self._text(item, "url"),
                add_date=self._text(item, "date_added"),
            )
            return bookmark, None
        if node_type == "folder":
            children = item.get("children")
            if not isinstance(children, list):
                children = []
            return BookmarkFolder(title=self._text(item, "name")), children

        logging.debug(f"Skipping node of type {node_type!r}: {item.get('name', '')}")
        return UnknownNode(node_type=str(node_type)), None

    @staticmethod
    def _text(item: Dict, key: str) -> str:
        value = item.get(key)
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)


class HTMLExporter:
    """Exports bookmarks to Netscape bookmark HTML format."""

    HEADER = (
        "<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"
        "<!-- This is an automatically generated file.\n"
        "     It will be read and overwritten.\n"
        "     DO NOT EDIT! -->\n"
        '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">\n'
        "<TITLE>Bookmarks</TITLE>\n"
        "<H1>Bookmarks</H1>\n"
        "<DL><p>\n"
    )
    FOOTER = "</DL><p>\n"

    def __init__(self, nodes: List[BookmarkNode], escape: bool = False):
        self.nodes = nodes
        self.escape = escape

    def export(self) -> str:
        """Export bookmarks to HTML string."""
        logging.info("Converting bookmarks to HTML...")

        html_parts = [self.HEADER]
        self._append_nodes(self.nodes, html_parts)
        html_parts.append(self.FOOTER)

        logging.debug("HTML conversion completed")
        return "".join(html_parts)

    render_document = export

    def render_bookmark(self, bookmark: Bookmark) -> str:
        """Render a single bookmark as a ``<DT><A>`` line."""
        return (
            f'<DT><A HREF="{self._text(bookmark.url)}" '
            f'ADD_DATE="{self._text(bookmark.add_date)}">'
            f"{self._text(bookmark.title)}</A>\n"
        )

    def render_folder(self, folder: BookmarkFolder) -> str:
        """Render a folder heading and its nested list."""
        html_parts: List[str] = []
        self._append_nodes([folder], html_parts)
        return "".join(html_parts)

    def _append_nodes(self, nodes: List[BookmarkNode], html_parts: List[str]):
        """Render nodes in order, descending into folders with an explicit stack."""
        # one iterator per open list; the bottom one is the caller's level
        stack = [iter(nodes)]

        while stack:
            for node in stack[-1]:
                if isinstance(node, Bookmark):
                    html_parts.append(self.render_bookmark(node))
                elif isinstance(node, BookmarkFolder):
                    html_parts.append(f"<DT><H3>{self._text(node.title)}</H3>\n")
                    html_parts.append("<DL><p>\n")
                    stack.append(iter(node.children))
                    break
                # UnknownNode renders nothing
            else:
                stack.pop()
                if stack:
                    html_parts.append("</DL><p>\n")

    def _text(self, text: str) -> str:
        if text is None:
            text = ""
        if not self.escape:
            return text
        return self._escape_html(text)

    @staticmethod
    def _escape_html(text: str) -> str:
        """Escape HTML special characters."""
        return (text.replace("&", "&amp;")
                   .replace("<", "&lt;")
                   .replace(">", "&gt;")
                   .replace('"', "&quot;"))


def default_output_path(now: Optional[datetime] = None, home: Optional[Path] = None) -> Path:
    """Timestamped HTML file on the user's desktop (home directory if none)."""
    now = now or datetime.now(timezone.utc)
    home = home or Path.home()
    stamp = now.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    desktop = home / "Desktop"
    directory = desktop if desktop.is_dir() else home
    return directory / f"bookmarks_{stamp}.html"


@dataclass
class ExportConfig:
    """Paths and switches for one export run."""
    source_path: Path
    output_path: Path
    prompt_source: bool = False
    prompt_output: bool = False
    escape: bool = False

    @classmethod
    def resolve(
        cls,
        source_path: Optional[Path] = None,
        output_path: Optional[Path] = None,
        browser: str = "chrome",
        profile: str = "Default",
        prompt_source: bool = False,
        prompt_output: bool = False,
        escape: bool = False,
    ) -> "ExportConfig":
        """Fill in default paths for anything not given explicitly."""
        if source_path is None:
            source_path = ChromiumDataReader.get_bookmarks_path(browser, profile)
        if output_path is None:
            output_path = default_output_path()
        return cls(
            source_path=Path(source_path),
            output_path=Path(output_path),
            prompt_source=prompt_source,
            prompt_output=prompt_output,
            escape=escape,
        )


def setup_logging(verbose: bool = False, silent: bool = False):
    """Configure logging with custom formatting."""
    if silent:
        logging.disable(logging.CRITICAL)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(CustomFormatter())

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, handlers=[handler])


def count_items(nodes: List[BookmarkNode]) -> Tuple[int, int]:
    """Count total bookmarks and folders."""
    total_bm, total_fl = 0, 0
    pending = list(nodes)
    while pending:
        node = pending.pop()
        if isinstance(node, Bookmark):
            total_bm += 1
        elif isinstance(node, BookmarkFolder):
            total_fl += 1
            pending.extend(node.children)
    return total_bm, total_fl


def select_paths(config: ExportConfig, picker: FilePicker) -> Tuple[Path, Path]:
    """Apply interactive selection, keeping the configured path on cancel."""
    source_path, output_path = config.source_path, config.output_path

    if config.prompt_source:
        selected = picker.select_open_file(source_path)
        if selected:
            source_path = selected
        else:
            logging.info(f"No bookmarks file selected, using {source_path}")

    if config.prompt_output:
        selected = picker.select_save_file(output_path)
        if selected:
            output_path = selected
        else:
            logging.info(f"No output file selected, using {output_path}")

    return source_path, output_path


def write_html(output_path: Path, html_content: str):
    """Write the HTML document as UTF-8. The file is not touched if encoding fails."""
    try:
        data = html_content.encode("utf-8")
    except UnicodeEncodeError as e:
        bad_char = e.object[e.start:e.end]
        raise DestinationWriteError(
            f"Cannot write {output_path}: bookmarks contain {bad_char!r}, "
            f"which cannot be encoded as UTF-8"
        ) from e

    try:
        output_path.write_bytes(data)
    except OSError as e:
        raise DestinationWriteError(f"Cannot write {output_path}: {e.strerror or e}") from e


def export_to_html(
    config: ExportConfig,
    picker: Optional[FilePicker] = None,
) -> Tuple[Path, int, int]:
    """
    Export the bookmark bar to an HTML file.

    Returns:
        Tuple of (output_path, total_bookmarks, total_folders)
    """
    source_path, output_path = select_paths(config, picker or NoFilePicker())

    data = ChromiumDataReader.read_data(source_path)
    nodes = ChromiumDataParser(data).parse()

    exporter = HTMLExporter(nodes, escape=config.escape)
    html_content = exporter.export()

    write_html(output_path, html_content)
    logging.info(f"Export completed: {output_path}")

    total_bookmarks, total_folders = count_items(nodes)
    logging.debug(f"{total_bookmarks} bookmarks in {total_folders} folders")

    return output_path, total_bookmarks, total_folders
