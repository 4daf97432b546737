"""
C# code generation backend.

Renders a Schema as an abstract, closed base class with one sealed nested
class per variant and two `Match` methods dispatching on the variant type.
"""

from __future__ import annotations

from typing import Any

from ..schema_ast.nodes import FieldPair, Schema, Variant
from .base import CodeBackend


class CSharpBackend(CodeBackend):
    """C# code generation backend."""

    TEMPLATE_LANG = "cs"
    FILE_EXTENSION = "cs"
    COMMENT_PREFIX = "//"
    TEMPLATE_NAMES = ("prefix", "class", "variant", "match", "suffix")

    REQUIRED_IMPORTS = ("System", "System.Runtime.Serialization")

    def generate(self, schema: Schema, source_name: str | None = None) -> str:
        """Generate C# code from a schema."""
        generation_comment = self._generation_comment(source_name) if self.config.add_generation_comment else ""

        out = self.render(
            "prefix",
            generation_comment=generation_comment,
            required_imports=sorted(self.REQUIRED_IMPORTS),
        )
        out += self.render("class", **self._prepare_class_context(schema))
        for variant in schema.variants:
            out += self.render("variant", **self._prepare_variant_context(schema, variant))
        out += self.render("match", **self._prepare_match_context(schema))
        out += self.render("suffix")
        return out

    def format_default_value(self, type_name: str) -> str:
        """Format the default value of a C# type."""
        return f"default({type_name})"

    def _prepare_class_context(self, schema: Schema) -> dict[str, Any]:
        """Prepare the template context of the abstract base class."""
        return {
            "name": schema.name,
            "known_types": [variant.name for variant in schema.variants] if schema.known_types else [],
            "shared_fields": [pair.declaration() for pair in schema.shared_fields],
            "fixed_lines": list(schema.fixed_lines),
        }

    def _prepare_variant_context(self, schema: Schema, variant: Variant) -> dict[str, Any]:
        """
        Prepare the template context of one variant class.

        Constructor parameters are the base fields, the variant's own fields,
        then the default fields. Every parameter is assigned in that order.
        """
        parameters = [pair.declaration() for pair in schema.base_fields + variant.fields]
        parameters += [f"{pair.declaration()} = {self.format_default_value(pair.type_name)}" for pair in schema.default_fields]

        assigned: list[FieldPair] = schema.base_fields + variant.fields + schema.default_fields

        return {
            "name": variant.name,
            "base_name": schema.name,
            "fields": [pair.declaration() for pair in variant.fields],
            "parameters": ", ".join(parameters),
            "assignments": [f"this.{pair.name} = {pair.name};" for pair in assigned],
        }

    def _prepare_match_context(self, schema: Schema) -> dict[str, Any]:
        """
        Prepare the template context of the two Match methods.

        Handlers are tested in variant order as an if / else-if chain, each
        binding the matched instance to `s<index>`.
        """
        handlers = []
        last = len(schema.variants) - 1
        for i, variant in enumerate(schema.variants):
            handlers.append(
                {
                    "name": variant.name,
                    "binding": f"s{i}",
                    "branch": "if" if i == 0 else "} else if",
                    "separator": "" if i == last else ",",
                }
            )

        return {
            "handlers": handlers,
            "null_default": " = null" if schema.allow_nulls else "",
        }
