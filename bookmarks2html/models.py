#!/usr/bin/env python3
"""Common data models for Chromium bookmarks export."""

from dataclasses import dataclass, field
from typing import List, Union


@dataclass
class Bookmark:
    """Represents a single bookmark."""
    title: str
    url: str
    add_date: str = ""


@dataclass
class BookmarkFolder:
    """Represents a bookmark folder containing other bookmarks or folders."""
    title: str
    children: List["BookmarkNode"] = field(default_factory=list)


@dataclass
class UnknownNode:
    """A node whose type is neither url nor folder (e.g. a separator)."""
    node_type: str


BookmarkNode = Union[Bookmark, BookmarkFolder, UnknownNode]
