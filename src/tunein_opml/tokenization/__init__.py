"""Tokenization layer for OPML reading.

Key Components:
    XMLTokenizer: Lazy token stream over a binary source, backed by lxml
    Token: A single start-tag, text, end-tag or end-of-stream token
    TokenType: Enumeration of token types
"""

from .tokenizer import (
    Token,
    TokenType,
    XMLTokenizer,
    tokenize,
)

__all__ = [
    "Token",
    "TokenType",
    "XMLTokenizer",
    "tokenize",
]
