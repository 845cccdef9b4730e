"""
Unified input loader (the I/O side the engine does not own).

Public:
    infer_doc_type_from_path(path) -> str
    load_text(path, *, doc_type=None, readable=False) -> str

Supported:
    - txt (verbatim), md (rendered, flattened to paragraphs)
    - html (flattened to paragraphs; readable=True keeps only main content)
    - anything else is read as plain text
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from .html_readable import html_to_paragraphs, load_html_text
from .text_loader import load_md_text, load_txt_text, markdown_to_paragraphs


def infer_doc_type_from_path(path: str | Path) -> str:
    ext = Path(path).suffix.lower().lstrip(".")
    if ext in {"htm", "html", "xhtml"}:
        return "html"
    if ext in {"md", "markdown"}:
        return "md"
    if ext in {"txt", "text"}:
        return "txt"
    return "other"


def load_text(
    path: str | Path,
    *,
    doc_type: Optional[str] = None,
    readable: bool = False,
) -> str:
    """
    Read one input into a string. "-" reads stdin as plain text.
    Raises ValueError for missing files.
    """
    if str(path) == "-":
        return sys.stdin.read()
    p = Path(path).expanduser()
    t = (doc_type or infer_doc_type_from_path(p)).lower()
    if t == "html":
        return load_html_text(p, readable=readable)
    if t == "md":
        return load_md_text(p)
    return load_txt_text(p)


__all__ = [
    "html_to_paragraphs",
    "infer_doc_type_from_path",
    "load_html_text",
    "load_md_text",
    "load_text",
    "load_txt_text",
    "markdown_to_paragraphs",
]
