"""
Plain text and Markdown loaders.

- TXT: read as UTF-8 with ignore errors, returned verbatim.
- MD: strip YAML front matter and fenced code blocks, render to HTML with
      Python-Markdown, then flatten to blank-line separated paragraphs.
"""

from __future__ import annotations

import re
from pathlib import Path

import markdown as md

from blockdedup.loaders.html_readable import html_to_paragraphs


_FRONT_MATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n?", re.DOTALL)
# Match fenced code blocks using ``` or ~~~
_FENCED_CODE_RE = re.compile(
    r"(^|\n)```.*?\n.*?\n```|(^|\n)~~~.*?\n.*?\n~~~",
    re.DOTALL,
)


def load_txt_text(path: str | Path) -> str:
    p = Path(path)
    if not p.exists():
        raise ValueError(f"File not found: {path}")
    return p.read_text(encoding="utf-8", errors="ignore")


def _strip_front_matter(text: str) -> str:
    m = _FRONT_MATTER_RE.match(text)
    if m:
        return text[m.end() :]
    return text


def _strip_fenced_code(text: str) -> str:
    return _FENCED_CODE_RE.sub("\n", text)


def markdown_to_paragraphs(raw: str) -> str:
    cleaned = _strip_front_matter(raw or "")
    cleaned = _strip_fenced_code(cleaned)
    html = md.markdown(
        cleaned,
        extensions=["tables", "sane_lists"],
        output_format="html5",
    )
    return html_to_paragraphs(html)


def load_md_text(path: str | Path) -> str:
    p = Path(path)
    if not p.exists() or p.suffix.lower() not in (".md", ".markdown"):
        raise ValueError(f"Expected an existing .md/.markdown file, got: {path}")
    return markdown_to_paragraphs(p.read_text(encoding="utf-8", errors="ignore"))
