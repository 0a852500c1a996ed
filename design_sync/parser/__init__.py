"""Utility-class parser package.

Main components:
- tokenizer: whitespace split and per-token decomposition
- handlers: prefix -> handler dispatch table
- class_parser: ClassParser, the never-raising entry point
- style: ParsedStyle and its specificity-aware accessors
"""

from .class_parser import ClassParser, ParseResult, parse
from .config import ParserConfig
from .style import ParsedStyle
from .tokenizer import ClassToken, tokenize, tokenize_one

__all__ = [
    "ClassParser",
    "ClassToken",
    "ParseResult",
    "ParsedStyle",
    "ParserConfig",
    "parse",
    "tokenize",
    "tokenize_one",
]
