#!/usr/bin/env python3
"""
Bookmarks to HTML

Export the bookmark bar of a Chromium-based browser (Chrome, Edge, Brave,
Chromium) to a Netscape bookmark HTML file that any browser can import.
"""

from bookmarks2html.cli import run


if __name__ == "__main__":
    run()
