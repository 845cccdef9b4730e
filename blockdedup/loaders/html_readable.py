"""
HTML loader that keeps paragraph structure.

- Flattens the page to plain text with one paragraph per block element,
  separated by blank lines, so the paragraph splitter sees real boundaries.
- Optional readability mode uses readability-lxml to keep only the main
  article/content (drops most navigation and footers up front). Falls back to
  the full page if readability fails.

Dependencies:
    readability-lxml, beautifulsoup4, lxml
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from bs4 import BeautifulSoup
from readability import Document  # type: ignore

logger = logging.getLogger(__name__)

_BLOCK_TAGS = [
    "p", "div", "section", "article", "aside", "header", "footer", "nav", "main",
    "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre", "table", "tr",
    "dt", "dd", "figcaption", "address",
]
_PARAGRAPH_BREAK = re.compile(r"\n\s*\n")


def html_to_paragraphs(html: str) -> str:
    """Plain text of `html`, one paragraph per block element."""
    soup = BeautifulSoup(html or "", "lxml")
    for tag in soup(["head", "script", "style", "noscript", "template"]):
        tag.decompose()
    for br in soup.find_all("br"):
        br.replace_with("\n")
    for tag in soup.find_all(_BLOCK_TAGS):
        tag.insert_before("\n\n")
        tag.insert_after("\n\n")
    text = soup.get_text()
    paras = [" ".join(p.split()) for p in _PARAGRAPH_BREAK.split(text)]
    return "\n\n".join(p for p in paras if p)


def _readable_html(html: str) -> str:
    try:
        return Document(html).summary(html_partial=True)  # type: ignore
    except Exception as e:
        logger.warning("readability extraction failed (%s); using full page", e)
        return html


def load_html_text(path: str | Path, *, readable: bool = False) -> str:
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise ValueError(f"File not found: {path}")
    html = p.read_text(encoding="utf-8", errors="ignore")
    if readable:
        html = _readable_html(html)
    return html_to_paragraphs(html)
