"""adt_remodel

Generate closed C# class hierarchies with `Match` helpers from terse
`.adtValue` tagged-union schemas.
"""

__version__ = "1.0.0"

from .batch import BatchReport, BatchRunner, DocumentReport, discover_documents
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    GenerationResult,
    PipelineGenerator,
    Schema,
    SchemaParser,
)

__all__ = [
    "PipelineGenerator",
    "GenerationResult",
    "CodeGeneratorConfig",
    "SchemaParser",
    "Schema",
    "AtomicWriter",
    "BatchRunner",
    "BatchReport",
    "DocumentReport",
    "discover_documents",
]
