"""Allow ``python -m bookmarks2html``."""

from .cli import run

run()
