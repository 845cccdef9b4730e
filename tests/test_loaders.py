import tempfile
from pathlib import Path
import unittest

from blockdedup.loaders import (
    html_to_paragraphs,
    infer_doc_type_from_path,
    load_text,
    markdown_to_paragraphs,
)
from blockdedup.pipeline import dedup_text


PAGE_HTML = """<!doctype html><html><head><title>T</title><style>p {color: red}</style></head>
<body><nav><a href="/">Home</a> | <a href="/about">About</a></nav>
<article><h1>Title</h1><p>Hello <b>world</b>!</p><p>Second   para
spans lines.</p></article><footer>Footer text</footer><script>var x = 1;</script></body></html>"""

ARTICLE_HTML = """<html><body>
<div class="nav"><a href="/">Home</a> <a href="/shop">Shop</a></div>
<div class="content"><article>
<p>The old lighthouse on the northern cape was built in 1864, and its lamp was first lit by a keeper who rowed out every evening.</p>
<p>For more than a century the lighthouse guided fishing boats, cargo ships, and the occasional lost yacht through the rocky strait.</p>
</article></div>
<div class="footer">Copyright 2024</div>
</body></html>"""


class TestHtml(unittest.TestCase):
    def test_paragraph_per_block_element(self):
        self.assertEqual(
            html_to_paragraphs(PAGE_HTML).split("\n\n"),
            ["Home | About", "Title", "Hello world!", "Second para spans lines.", "Footer text"],
        )

    def test_repeated_boilerplate_becomes_separate_blocks(self):
        html = "<body>" + "<p>Follow us on social media for updates and offers.</p><p>Body {}</p>" * 2 + "</body>"
        res = dedup_text(html_to_paragraphs(html))
        self.assertEqual(res.stats.duplicates_found, 1)

    def test_load_html_file(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "page.html"
            p.write_text(PAGE_HTML, encoding="utf-8")
            self.assertEqual(infer_doc_type_from_path(p), "html")
            text = load_text(p)
            self.assertIn("Hello world!", text)
            self.assertNotIn("var x", text)

    def test_readable_keeps_article(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "article.htm"
            p.write_text(ARTICLE_HTML, encoding="utf-8")
            text = load_text(p, readable=True)
            self.assertIn("lighthouse", text)


class TestMarkdownAndText(unittest.TestCase):
    def test_markdown_flattened(self):
        raw = (
            "---\ntitle: Demo\n---\n# Heading\n\nFirst *paragraph* here.\n\n"
            "```\nsecret_code()\n```\n\n- item one\n- item two\n"
        )
        out = markdown_to_paragraphs(raw)
        self.assertEqual(out.split("\n\n"), ["Heading", "First paragraph here.", "item one", "item two"])

    def test_txt_verbatim(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "x.txt"
            p.write_text("  A\n\nB  \n", encoding="utf-8")
            self.assertEqual(load_text(p), "  A\n\nB  \n")

    def test_unknown_extension_read_as_text(self):
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "dump.log"
            p.write_text("<p>not parsed</p>", encoding="utf-8")
            self.assertEqual(infer_doc_type_from_path(p), "other")
            self.assertEqual(load_text(p), "<p>not parsed</p>")

    def test_missing_file(self):
        with self.assertRaises(ValueError):
            load_text("/nonexistent/nope.txt")
        with self.assertRaises(ValueError):
            load_text("/nonexistent/nope.html")

    def test_inference(self):
        self.assertEqual(infer_doc_type_from_path("notes.markdown"), "md")
        self.assertEqual(infer_doc_type_from_path("a.TXT"), "txt")


if __name__ == "__main__":
    unittest.main()
