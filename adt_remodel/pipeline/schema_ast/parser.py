"""
Line parser that builds a Schema model.

Phase 1 of the pipeline: read the lines of one `.adtValue` document and
materialize a Schema without doing any language-specific processing.

The parser is a three-state machine:

    AT_TOP --"Name {"--> IN_SCHEMA --"Name {"--> IN_VARIANT
    AT_TOP <----"}"----- IN_SCHEMA <----"}"----- IN_VARIANT

Structural and field-arity errors abort the document. Unknown top-level
directives are reported and skipped.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..diagnostics import (
    Diagnostic,
    FieldArityError,
    RemodelError,
    Severity,
    StructuralError,
    UnknownTopLevelDirective,
)
from .nodes import FieldPair, Schema, Variant


class ParserState(Enum):
    """Scope the parser is currently in."""

    AT_TOP = 0
    IN_SCHEMA = 1
    IN_VARIANT = 2


# Legal scope transitions; anything missing here is a StructuralError
OPEN_TRANSITIONS = {
    ParserState.AT_TOP: ParserState.IN_SCHEMA,
    ParserState.IN_SCHEMA: ParserState.IN_VARIANT,
}
CLOSE_TRANSITIONS = {
    ParserState.IN_VARIANT: ParserState.IN_SCHEMA,
    ParserState.IN_SCHEMA: ParserState.AT_TOP,
}


class ParseStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class ParseResult:
    """Outcome of parsing one document: Completed(schema) or Aborted(reason)."""

    status: ParseStatus
    schema: Schema | None = None
    reason: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def is_completed(self) -> bool:
        return self.status == ParseStatus.COMPLETED

    @classmethod
    def completed(cls, schema: Schema, diagnostics: list[Diagnostic]) -> ParseResult:
        return cls(status=ParseStatus.COMPLETED, schema=schema, diagnostics=diagnostics)

    @classmethod
    def aborted(cls, error: RemodelError, diagnostics: list[Diagnostic]) -> ParseResult:
        return cls(
            status=ParseStatus.ABORTED,
            reason=error.message,
            diagnostics=diagnostics + [error.to_diagnostic()],
        )


@dataclass
class _ParseContext:
    """Mutable state of a single parsing pass."""

    state: ParserState = ParserState.AT_TOP
    schema: Schema = field(default_factory=Schema)
    current_variant: Variant | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)
    completed: bool = False


class SchemaParser:
    """Parses the lines of an `.adtValue` document into a Schema."""

    COMMENT_MARKER = "#"
    OPEN_MARKER = "{"
    CLOSE_MARKER = "}"
    FIXED_LINE_MARKER = "&"
    DEFAULT_FIELD_MARKER = "%"
    SET_DIRECTIVE = "Set"

    # `Set <Flag>` name -> Schema attribute
    FLAGS = {
        "AllowNulls": "allow_nulls",
        "KnownTypes": "known_types",
    }

    def parse(self, lines: Iterable[str]) -> ParseResult:
        """
        Parse the lines of one document.

        Args:
            lines: Raw lines of the document, in order

        Returns:
            ParseResult, completed with the Schema or aborted with the reason
        """
        ctx = _ParseContext()
        remaining: list[tuple[int, str]] = []

        try:
            for line_number, raw in enumerate(lines, start=1):
                line = raw.strip()
                if not line or line.startswith(self.COMMENT_MARKER):
                    continue
                if ctx.completed:
                    remaining.append((line_number, line))
                    continue
                self._parse_line(ctx, line_number, line)

            if not ctx.completed:
                self._raise_unfinished(ctx)
        except RemodelError as e:
            return ParseResult.aborted(e, ctx.diagnostics)

        if remaining:
            line_number, line = remaining[0]
            ctx.diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    code=StructuralError.__name__,
                    message=f"Ignoring {len(remaining)} line(s) after the end of {ctx.schema.name}",
                    line_number=line_number,
                    line=line,
                )
            )

        return ParseResult.completed(ctx.schema, ctx.diagnostics)

    def parse_text(self, text: str) -> ParseResult:
        """Parse a whole document held in a string."""
        return self.parse(text.splitlines())

    def _parse_line(self, ctx: _ParseContext, line_number: int, line: str) -> None:
        words = line.split()

        if words[-1] == self.OPEN_MARKER:
            self._open_scope(ctx, words, line_number, line)
        elif words[-1] == self.CLOSE_MARKER:
            self._close_scope(ctx, line_number, line)
        elif ctx.state == ParserState.AT_TOP:
            self._parse_directive(ctx, words, line_number, line)
        elif ctx.state == ParserState.IN_SCHEMA:
            self._parse_schema_line(ctx, words, line_number, line)
        else:
            pair = self._parse_field_pair(words, line_number, line)
            ctx.current_variant.fields.append(pair)

    def _open_scope(self, ctx: _ParseContext, words: list[str], line_number: int, line: str) -> None:
        next_state = OPEN_TRANSITIONS.get(ctx.state)
        if next_state is None:
            raise StructuralError("too many { brackets", line_number, line)
        if len(words) < 2:
            raise StructuralError("block opened without a name", line_number, line)

        if next_state == ParserState.IN_SCHEMA:
            ctx.schema.name = words[0]
        else:
            ctx.current_variant = Variant(name=words[0])
        ctx.state = next_state

    def _close_scope(self, ctx: _ParseContext, line_number: int, line: str) -> None:
        next_state = CLOSE_TRANSITIONS.get(ctx.state)
        if next_state is None:
            raise StructuralError("too many } brackets", line_number, line)

        if ctx.state == ParserState.IN_VARIANT:
            ctx.schema.variants.append(ctx.current_variant)
            ctx.current_variant = None
        else:
            ctx.completed = True
            ctx.diagnostics.append(
                Diagnostic(
                    severity=Severity.INFO,
                    code="ParsingCompleted",
                    message=f"Parsing completed for {ctx.schema.name}",
                    line_number=line_number,
                )
            )
        ctx.state = next_state

    def _parse_directive(self, ctx: _ParseContext, words: list[str], line_number: int, line: str) -> None:
        """Handle a top-level `Set <Flag>` line; anything else is skipped."""
        if len(words) == 2 and words[0] == self.SET_DIRECTIVE and words[1] in self.FLAGS:
            setattr(ctx.schema, self.FLAGS[words[1]], True)
            return

        error = UnknownTopLevelDirective("Unknown command", line_number, line)
        ctx.diagnostics.append(error.to_diagnostic(Severity.WARNING))

    def _parse_schema_line(self, ctx: _ParseContext, words: list[str], line_number: int, line: str) -> None:
        leading = words[0][0]

        if leading == self.FIXED_LINE_MARKER:
            ctx.schema.fixed_lines.append(line[1:])
        elif leading == self.DEFAULT_FIELD_MARKER:
            pair = self._parse_field_pair(words, line_number, line)
            type_name = pair.type_name[1:]
            if not type_name:
                raise FieldArityError(f"Missing type after {self.DEFAULT_FIELD_MARKER}", line_number, line)
            ctx.schema.default_fields.append(FieldPair(type_name, pair.name))
        else:
            ctx.schema.base_fields.append(self._parse_field_pair(words, line_number, line))

    def _parse_field_pair(self, words: list[str], line_number: int, line: str) -> FieldPair:
        if len(words) != 2:
            raise FieldArityError(
                f"There should be exactly two words on the line, found {len(words)}",
                line_number,
                line,
            )
        return FieldPair(type_name=words[0], name=words[1])

    def _raise_unfinished(self, ctx: _ParseContext) -> None:
        if ctx.state == ParserState.AT_TOP:
            raise StructuralError("no schema block found")
        name = ctx.current_variant.name if ctx.state == ParserState.IN_VARIANT else ctx.schema.name
        raise StructuralError(f"unclosed {{ bracket for {name}")
