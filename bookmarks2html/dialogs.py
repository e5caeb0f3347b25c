#!/usr/bin/env python3
"""File selection dialogs used when the user asks to pick paths interactively."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Protocol


class FilePicker(Protocol):
    """Asks the user for a file path. ``None`` means no selection was made."""

    def select_open_file(self, initial: Path) -> Optional[Path]:
        ...

    def select_save_file(self, initial: Path) -> Optional[Path]:
        ...


class NoFilePicker:
    """Picker for headless runs: never selects anything."""

    def select_open_file(self, initial: Path) -> Optional[Path]:
        return None

    def select_save_file(self, initial: Path) -> Optional[Path]:
        return None


class TkFilePicker:
    """Native open/save dialogs through tkinter."""

    @contextmanager
    def _hidden_root(self):
        import tkinter as tk

        root = tk.Tk()
        root.withdraw()
        root.attributes("-topmost", True)
        try:
            yield root
        finally:
            root.destroy()

    def select_open_file(self, initial: Path) -> Optional[Path]:
        """Show an open dialog for the bookmarks JSON file."""
        return self._ask(
            "askopenfilename",
            title="Select bookmarks file",
            initialdir=str(initial.parent),
            initialfile=initial.name,
            filetypes=[("JSON files", "*.json"), ("All files", "*")],
        )

    def select_save_file(self, initial: Path) -> Optional[Path]:
        """Show a save dialog for the HTML output file."""
        return self._ask(
            "asksaveasfilename",
            title="Save bookmarks as",
            initialdir=str(initial.parent),
            initialfile=initial.name,
            defaultextension=".html",
            filetypes=[("HTML files", "*.html")],
        )

    def _ask(self, dialog: str, **options) -> Optional[Path]:
        try:
            from tkinter import TclError, filedialog
        except ImportError:
            logging.warning("tkinter is not available, cannot show file dialog")
            return None

        try:
            with self._hidden_root() as root:
                path = getattr(filedialog, dialog)(parent=root, **options)
        except TclError as e:
            logging.warning(f"Cannot show file dialog: {e}")
            return None

        return Path(path) if path else None
