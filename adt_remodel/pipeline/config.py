"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Extension of the schema documents searched for
    schema_extension: str = ".adtValue"

    # Extension of the generated artifacts
    output_extension: str = ".cs"

    # Reject schemas declaring no variant at all
    require_variants: bool = False

    # Reject schemas declaring the same variant name twice
    unique_variant_names: bool = False

    # Add generation comment at top of file
    add_generation_comment: bool = False

    # Check each artifact against its schema before writing it
    validate_output: bool = True

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
