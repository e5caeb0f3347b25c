#!/usr/bin/env python3
"""
Tests for the Netscape bookmark HTML renderer
Covers document layout, ordering, nesting and the escaping switch
"""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookmarks2html import (
    Bookmark,
    BookmarkFolder,
    ChromiumDataParser,
    HTMLExporter,
    UnknownNode,
    count_items,
)


def url(name, href, date_added="13350000000000000"):
    return {"type": "url", "name": name, "url": href, "date_added": date_added}


def folder(name, *children):
    return {"type": "folder", "name": name, "children": list(children)}


def document(*children):
    return {"roots": {"bookmark_bar": {"children": list(children)}}}


def render(doc, escape=False):
    nodes = ChromiumDataParser(doc).parse()
    return HTMLExporter(nodes, escape=escape).export()


class TestDocumentLayout(unittest.TestCase):
    """Header, footer and the concrete single-entry documents"""

    def test_header_is_netscape_format(self):
        html = render(document())
        self.assertTrue(html.startswith("<!DOCTYPE NETSCAPE-Bookmark-file-1>\n"))
        self.assertIn("DO NOT EDIT!", html)
        self.assertIn(
            '<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">\n', html
        )
        self.assertIn("<TITLE>Bookmarks</TITLE>\n<H1>Bookmarks</H1>\n", html)

    def test_empty_bookmark_bar(self):
        html = render(document())
        self.assertEqual(html, HTMLExporter.HEADER + "</DL><p>\n")
        self.assertTrue(html.endswith("<DL><p>\n</DL><p>\n"))
        self.assertNotIn("<DT>", html)

    def test_single_url_entry(self):
        html = render(document(url("Example", "https://example.com")))
        self.assertEqual(
            html,
            HTMLExporter.HEADER
            + '<DT><A HREF="https://example.com" ADD_DATE="13350000000000000">Example</A>\n'
            + "</DL><p>\n",
        )

    def test_folder_with_one_entry(self):
        exporter = HTMLExporter([])
        work = BookmarkFolder(
            title="Work",
            children=[Bookmark(title="Mail", url="https://mail.example", add_date="1")],
        )
        self.assertEqual(
            exporter.render_folder(work),
            "<DT><H3>Work</H3>\n"
            "<DL><p>\n"
            '<DT><A HREF="https://mail.example" ADD_DATE="1">Mail</A>\n'
            "</DL><p>\n",
        )

    def test_empty_folder_keeps_list(self):
        exporter = HTMLExporter([])
        self.assertEqual(
            exporter.render_folder(BookmarkFolder(title="Empty")),
            "<DT><H3>Empty</H3>\n<DL><p>\n</DL><p>\n",
        )

    def test_render_document_matches_export(self):
        nodes = ChromiumDataParser(document(url("A", "https://a.example"))).parse()
        exporter = HTMLExporter(nodes)
        self.assertEqual(exporter.render_document(), exporter.export())


class TestTreeStructure(unittest.TestCase):
    """Counts, ordering and nesting of rendered entries"""

    def setUp(self):
        self.doc = document(
            url("Top", "https://top.example"),
            folder(
                "Outer",
                url("First", "https://first.example"),
                folder("Inner", url("Deep", "https://deep.example")),
                url("Last", "https://last.example"),
            ),
            folder("Empty"),
            {"type": "separator"},
            url("Tail", "https://tail.example"),
        )

    def test_tag_counts_match_tree(self):
        html = render(self.doc)
        nodes = ChromiumDataParser(self.doc).parse()
        bookmarks, folders = count_items(nodes)

        self.assertEqual((bookmarks, folders), (5, 3))
        self.assertEqual(html.count("<A HREF="), bookmarks)
        self.assertEqual(html.count("<H3>"), folders)

    def test_child_order_preserved(self):
        html = render(self.doc)
        positions = [
            html.index(f">{name}<")
            for name in ("Top", "Outer", "First", "Inner", "Deep", "Last", "Empty", "Tail")
        ]
        self.assertEqual(positions, sorted(positions))

    def test_nested_entry_between_folder_markers(self):
        html = render(self.doc)
        deep = html.index(">Deep<")

        for name in ("Outer", "Inner"):
            with self.subTest(folder=name):
                heading = html.index(f"<H3>{name}</H3>")
                opening = html.index("<DL><p>", heading)
                self.assertLess(opening, deep)

        # Inner closes before Last, Outer closes after Last
        inner_close = html.index("</DL><p>", deep)
        last = html.index(">Last<")
        outer_close = html.index("</DL><p>", last)
        self.assertLess(inner_close, last)
        self.assertLess(last, outer_close)
        self.assertLess(outer_close, html.index("<H3>Empty</H3>"))

    def test_unknown_types_are_skipped(self):
        doc = document(
            url("Before", "https://before.example"),
            {"type": "separator"},
            {"name": "no type at all"},
            "not an object",
            url("After", "https://after.example"),
        )
        html = render(doc)
        self.assertEqual(html.count("<DT>"), 2)
        self.assertNotIn("separator", html)
        self.assertLess(html.index(">Before<"), html.index(">After<"))

    def test_deep_nesting(self):
        depth = 5000
        self.assertGreater(depth, sys.getrecursionlimit())

        doc_folder = folder("Level 0", url("Bottom", "https://bottom.example"))
        for level in range(1, depth):
            doc_folder = folder(f"Level {level}", doc_folder)

        nodes = ChromiumDataParser(document(doc_folder)).parse()
        html = HTMLExporter(nodes).export()

        self.assertEqual(count_items(nodes), (1, depth))
        self.assertEqual(html.count("<H3>"), depth)
        self.assertEqual(html.count("<DL><p>"), depth + 1)
        self.assertEqual(html.count("</DL><p>"), depth + 1)
        self.assertLess(html.index("<H3>Level 0</H3>"), html.index(">Bottom<"))
        self.assertTrue(html.endswith("</A>\n" + "</DL><p>\n" * (depth + 1)))

    def test_rendering_is_idempotent(self):
        self.assertEqual(render(self.doc), render(self.doc))

    def test_input_not_mutated(self):
        nodes = ChromiumDataParser(self.doc).parse()
        before = repr(nodes)
        HTMLExporter(nodes).export()
        self.assertEqual(repr(nodes), before)

    def test_unknown_node_renders_nothing(self):
        exporter = HTMLExporter([UnknownNode(node_type="separator")])
        self.assertEqual(exporter.export(), HTMLExporter.HEADER + HTMLExporter.FOOTER)


class TestEscaping(unittest.TestCase):
    """Values pass through verbatim unless escaping is requested"""

    def setUp(self):
        self.bookmark = Bookmark(
            title='Fish & <Chips> "menu"',
            url='https://example.com/?a=1&b="2"',
            add_date="42",
        )

    def test_verbatim_by_default(self):
        line = HTMLExporter([]).render_bookmark(self.bookmark)
        self.assertEqual(
            line,
            '<DT><A HREF="https://example.com/?a=1&b="2"" ADD_DATE="42">'
            'Fish & <Chips> "menu"</A>\n',
        )

    def test_escape_opt_in(self):
        line = HTMLExporter([], escape=True).render_bookmark(self.bookmark)
        self.assertEqual(
            line,
            '<DT><A HREF="https://example.com/?a=1&amp;b=&quot;2&quot;" ADD_DATE="42">'
            "Fish &amp; &lt;Chips&gt; &quot;menu&quot;</A>\n",
        )

    def test_escape_folder_title(self):
        html = HTMLExporter([], escape=True).render_folder(BookmarkFolder(title="R&D"))
        self.assertTrue(html.startswith("<DT><H3>R&amp;D</H3>\n"))

    def test_non_ascii_passes_through(self):
        bookmark = Bookmark(title="Заметки 📝", url="https://例え.jp", add_date="1")
        line = HTMLExporter([], escape=True).render_bookmark(bookmark)
        self.assertIn(">Заметки 📝</A>", line)
        self.assertIn('HREF="https://例え.jp"', line)


if __name__ == "__main__":
    unittest.main()
