"""
Artifact writer.

Checks a rendered artifact against the Schema it was rendered from, then
writes it through a temporary file so an interrupted run never leaves a
half-written artifact next to its schema document.
"""

from __future__ import annotations

import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from .diagnostics import ArtifactWriteError
from .schema_ast.nodes import Schema


def fixed_area(schema: Schema) -> str:
    """The fixed-line region exactly as the C# templates render it."""
    if not schema.fixed_lines:
        return ""
    body = "".join(f"  {line}\n" for line in schema.fixed_lines)
    return f"  //fixed area\n{body}  //end fixed area\n"


def check_artifact(content: str, schema: Schema) -> None:
    """Verify that a C# artifact has the shape the backend guarantees.

    Fixed lines are user text and may hold unbalanced braces, so they are
    cut out before anything is counted.

    Raises:
        ArtifactWriteError: If the artifact does not match the schema
    """
    region = fixed_area(schema)
    if region:
        if region not in content:
            raise ArtifactWriteError(f"Fixed area of {schema.name} is missing from the artifact")
        content = content.replace(region, "", 1)

    if f"\npublic abstract class {schema.name} {{\n" not in content:
        raise ArtifactWriteError(f"Artifact does not declare the abstract class {schema.name}")

    pattern = rf"^  public sealed class (\S+) : {re.escape(schema.name)} \{{$"
    declared = re.findall(pattern, content, re.MULTILINE)
    if declared != schema.variant_names():
        raise ArtifactWriteError(f"Artifact declares variants {declared}, expected {schema.variant_names()}")

    code = [line for line in content.splitlines() if not line.lstrip().startswith("//")]
    depth = 0
    for line in code:
        depth += line.count("{") - line.count("}")
        if depth < 0:
            break
    if depth != 0:
        raise ArtifactWriteError(f"Artifact of {schema.name} has unbalanced braces")


class AtomicWriter:
    """Writes artifacts with a temp-file-and-rename commit."""

    def __init__(self, check: Callable[[str, Schema], None] | None = check_artifact):
        """
        Args:
            check: Called with the artifact and its schema before writing,
                None disables checking
        """
        self.check = check

    def write(self, path: Path, content: str, schema: Schema | None = None) -> None:
        """Write an artifact atomically.

        Args:
            path: Target file path
            content: The artifact
            schema: Schema the artifact was rendered from, checks are skipped without it

        Raises:
            ArtifactWriteError: If the artifact fails the check
            OSError: If file operations fail
        """
        if schema is not None and self.check is not None:
            self.check(content, schema)

        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        temp_path = Path(temp_name)
        try:
            with open(fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            temp_path.replace(path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise
