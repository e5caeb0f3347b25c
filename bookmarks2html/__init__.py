"""Convert Chromium browser bookmarks to Netscape bookmark HTML."""

from .models import Bookmark, BookmarkFolder, BookmarkNode, UnknownNode
from .chromium_exporter import (
    Colors,
    BookmarkExportError,
    SourceReadError,
    SourceParseError,
    DestinationWriteError,
    ChromiumDataReader,
    ChromiumDataParser,
    HTMLExporter,
    ExportConfig,
    count_items,
    default_output_path,
    export_to_html,
    setup_logging,
)
from .dialogs import FilePicker, NoFilePicker, TkFilePicker

__all__ = [
    # Models
    "Bookmark",
    "BookmarkFolder",
    "BookmarkNode",
    "UnknownNode",
    # Exporter
    "Colors",
    "BookmarkExportError",
    "SourceReadError",
    "SourceParseError",
    "DestinationWriteError",
    "ChromiumDataReader",
    "ChromiumDataParser",
    "HTMLExporter",
    "ExportConfig",
    "count_items",
    "default_output_path",
    "export_to_html",
    "setup_logging",
    # Dialogs
    "FilePicker",
    "NoFilePicker",
    "TkFilePicker",
]
