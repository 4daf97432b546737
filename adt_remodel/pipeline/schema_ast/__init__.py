"""
Schema model module.

Contains the model node definitions and the line parser for `.adtValue`
documents.
"""

from __future__ import annotations

from .nodes import FieldPair, Schema, Variant
from .parser import ParseResult, ParserState, ParseStatus, SchemaParser

__all__ = [
    "FieldPair",
    "Variant",
    "Schema",
    "ParserState",
    "ParseStatus",
    "ParseResult",
    "SchemaParser",
]
