"""Tokenizer and grammar for calculator expressions."""

from .grammar import parse
from .lexer import Token, TokenKind, lex

__all__ = ["lex", "parse", "Token", "TokenKind"]
