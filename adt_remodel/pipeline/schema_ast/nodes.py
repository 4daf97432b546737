"""
Schema model node definitions.

These nodes hold what the line parser reads from one `.adtValue` document.
They carry no behavior beyond storage and are consumed by the backends.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldPair:
    """A `<Type> <name>` declaration."""

    type_name: str
    name: str

    def declaration(self) -> str:
        return f"{self.type_name} {self.name}"


@dataclass
class Variant:
    """One named case of the union, with its own fields."""

    name: str
    fields: list[FieldPair] = field(default_factory=list)


@dataclass
class Schema:
    """The tagged union declared by one document.

    Attributes:
        name: Name of the abstract base class
        allow_nulls: Match handlers default to null when set
        known_types: Emit [KnownType] attributes for every variant
        base_fields: Fields shared by every variant
        default_fields: Shared fields rendered with a constructor default
        fixed_lines: Raw lines spliced into the base class
        variants: Variants in generation and dispatch order
    """

    name: str = ""
    allow_nulls: bool = False
    known_types: bool = False
    base_fields: list[FieldPair] = field(default_factory=list)
    default_fields: list[FieldPair] = field(default_factory=list)
    fixed_lines: list[str] = field(default_factory=list)
    variants: list[Variant] = field(default_factory=list)

    @property
    def shared_fields(self) -> list[FieldPair]:
        """Base fields followed by default fields, in declaration order."""
        return self.base_fields + self.default_fields

    def variant_names(self) -> list[str]:
        return [variant.name for variant in self.variants]
