"""
Validation rule objects checked against a completed Schema.

The parser accepts schemas without variants and with repeated variant
names. Each rule reports the condition as a warning, or as an error when
the matching config switch is enabled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter

from .config import CodeGeneratorConfig
from .diagnostics import Diagnostic, SchemaValidationError, Severity
from .schema_ast.nodes import Schema


class ValidationRule(ABC):
    """Base class for all schema validation rules"""

    def __init__(self, enforced: bool = False):
        """
        Initialize a validation rule.

        Args:
            enforced: Whether a violation aborts the document
        """
        self.enforced = enforced

    @abstractmethod
    def violations(self, schema: Schema) -> list[str]:
        """Return one message per violation found in the schema."""

    def check(self, schema: Schema) -> list[Diagnostic]:
        severity = Severity.ERROR if self.enforced else Severity.WARNING
        return [
            SchemaValidationError(message).to_diagnostic(severity)
            for message in self.violations(schema)
        ]


class RequireVariantsRule(ValidationRule):
    """A schema should declare at least one variant."""

    def violations(self, schema: Schema) -> list[str]:
        if schema.variants:
            return []
        return [f"{schema.name} declares no variants"]


class UniqueVariantNamesRule(ValidationRule):
    """Variant names should be unique within a schema."""

    def violations(self, schema: Schema) -> list[str]:
        counts = Counter(schema.variant_names())
        return [
            f"Variant {name} is declared {count} times in {schema.name}"
            for name, count in counts.items()
            if count > 1
        ]


def default_rules(config: CodeGeneratorConfig) -> list[ValidationRule]:
    return [
        RequireVariantsRule(enforced=config.require_variants),
        UniqueVariantNamesRule(enforced=config.unique_variant_names),
    ]


def validate_schema(schema: Schema, rules: list[ValidationRule]) -> list[Diagnostic]:
    """Run every rule and collect the diagnostics in rule order."""
    diagnostics: list[Diagnostic] = []
    for rule in rules:
        diagnostics.extend(rule.check(schema))
    return diagnostics
