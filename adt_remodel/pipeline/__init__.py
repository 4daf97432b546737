"""
Pipeline - `.adtValue` schema to code generator.

This module provides a small multi-phase architecture for generating
closed class hierarchies from tagged-union schemas:

1. Phase 1 (Parser): Parse document lines into a Schema model
2. Phase 2 (Validation): Check the Schema against configurable rules
3. Phase 3 (Backend): Render the Schema through Jinja2 templates
4. Phase 4 (Writer): Atomically write the artifact next to its document
"""

from __future__ import annotations

from .config import CodeGeneratorConfig
from .diagnostics import (
    ArtifactWriteError,
    Diagnostic,
    FieldArityError,
    RemodelError,
    SchemaValidationError,
    Severity,
    StructuralError,
    UnknownTopLevelDirective,
)
from .generator import GenerationResult, PipelineGenerator
from .schema_ast import FieldPair, ParseResult, ParseStatus, Schema, SchemaParser, Variant
from .writer import AtomicWriter

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "SchemaParser",
    "ParseResult",
    "ParseStatus",
    "Schema",
    "Variant",
    "FieldPair",
    "Diagnostic",
    "Severity",
    "RemodelError",
    "StructuralError",
    "FieldArityError",
    "UnknownTopLevelDirective",
    "SchemaValidationError",
    "ArtifactWriteError",
    "AtomicWriter",
]
