"""Lexing, syntax checking, here-documents, expansion and command building for shell input."""

__version__ = "0.1.0"