"""
Pipeline generator for a single schema document.

1. Phase 1 (Parser): Parse the document lines into a Schema
2. Phase 2 (Validation): Run the configured validation rules
3. Phase 3 (Backend): Render the Schema as source code
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from .backends import BACKENDS
from .config import CodeGeneratorConfig
from .diagnostics import Diagnostic
from .schema_ast import Schema, SchemaParser
from .validation import ValidationRule, default_rules, validate_schema


@dataclass
class GenerationResult:
    """Outcome of generating one document.

    Attributes:
        schema: The parsed schema, None when parsing aborted
        artifact: Generated source code, None when the document aborted
        output_name: File name the artifact should be written to
        reason: Why the document aborted
        diagnostics: Every diagnostic produced along the way
    """

    schema: Schema | None = None
    artifact: str | None = None
    output_name: str | None = None
    reason: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.artifact is not None


class PipelineGenerator:
    """Parses, validates and renders schema documents."""

    def __init__(
        self,
        config: CodeGeneratorConfig | None = None,
        language: str = "cs",
        rules: list[ValidationRule] | None = None,
    ):
        """
        Initialize the generator.

        Args:
            config: Code generation configuration
            language: Target language key in BACKENDS
            rules: Validation rules, defaults to the rules derived from config
        """
        self.config = config or CodeGeneratorConfig()
        self.parser = SchemaParser()
        self.backend = BACKENDS[language](self.config)
        self.rules = rules if rules is not None else default_rules(self.config)

    def generate(self, lines: Iterable[str], source_name: str | None = None) -> GenerationResult:
        """
        Generate the artifact of one document.

        Args:
            lines: Raw lines of the document
            source_name: Document name used in the generation comment

        Returns:
            GenerationResult holding the artifact or the abort reason
        """
        parsed = self.parser.parse(lines)
        result = GenerationResult(diagnostics=list(parsed.diagnostics))
        if not parsed.is_completed:
            result.reason = parsed.reason
            return result

        result.schema = parsed.schema
        validation = validate_schema(parsed.schema, self.rules)
        result.diagnostics.extend(validation)
        errors = [d for d in validation if d.is_error]
        if errors:
            result.reason = errors[0].message
            return result

        result.artifact = self.backend.generate(parsed.schema, source_name)
        result.output_name = parsed.schema.name + self.config.output_extension
        return result

    def generate_text(self, text: str, source_name: str | None = None) -> GenerationResult:
        return self.generate(text.splitlines(), source_name)
