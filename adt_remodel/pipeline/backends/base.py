"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import Schema

TEMPLATE_ROOT = Path(__file__).parent.parent.parent / "templates"


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Line comment prefix of the target language
    COMMENT_PREFIX: str = ""

    # Templates rendered by the backend, without the language suffix
    TEMPLATE_NAMES: tuple[str, ...] = ("prefix", "class", "suffix")

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = TEMPLATE_ROOT / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )
        self.templates: dict[str, jinja2.Template] = {
            name: self.jinja_env.get_template(f"{name}.{self.FILE_EXTENSION}.jinja2") for name in self.TEMPLATE_NAMES
        }

    def render(self, template_name: str, **context: Any) -> str:
        return self.templates[template_name].render(**context)

    @abstractmethod
    def generate(self, schema: Schema, source_name: str | None = None) -> str:
        """
        Generate code from a completed schema.

        Args:
            schema: The schema to render
            source_name: Name of the document the schema was read from

        Returns:
            Generated code as a string
        """

    @abstractmethod
    def format_default_value(self, type_name: str) -> str:
        """
        Format the default value expression of a type.

        Args:
            type_name: The declared type

        Returns:
            Language-specific default value expression
        """

    def _generation_comment(self, source_name: str | None) -> str:
        from ... import __version__

        origin = f" from {source_name}" if source_name else ""
        return f"{self.COMMENT_PREFIX} Generated by adt_remodel {__version__}{origin}. Do not edit."
