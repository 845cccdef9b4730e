from .text import block_signature, parse_pattern_lines

__all__ = [
    "block_signature",
    "parse_pattern_lines",
]
