"""
Batch driver: discover schema documents under a root directory and
generate one artifact next to each of them.

Every document is processed independently; an aborted document is
recorded in the report and the batch moves on.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .pipeline import (
    ArtifactWriteError,
    AtomicWriter,
    CodeGeneratorConfig,
    Diagnostic,
    PipelineGenerator,
    Severity,
)

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


def discover_documents(root: Path, extension: str = ".adtValue") -> list[Path]:
    """Recursively find schema documents below root, in a stable order."""
    return sorted(path for path in root.rglob(f"*{extension}") if path.is_file())


@dataclass
class DocumentReport:
    """What happened to one schema document."""

    path: Path
    output_path: Path | None = None
    reason: str | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.output_path is not None


@dataclass
class BatchReport:
    """Aggregated outcome of a batch run."""

    root: Path
    documents: list[DocumentReport] = field(default_factory=list)

    @property
    def succeeded(self) -> list[DocumentReport]:
        return [doc for doc in self.documents if doc.succeeded]

    @property
    def failed(self) -> list[DocumentReport]:
        return [doc for doc in self.documents if not doc.succeeded]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for doc in self.documents for d in doc.diagnostics]

    @property
    def ok(self) -> bool:
        return not self.failed


class BatchRunner:
    """Runs the generator over every schema document of a directory tree."""

    def __init__(
        self,
        config: CodeGeneratorConfig | None = None,
        generator: PipelineGenerator | None = None,
        writer: AtomicWriter | None = None,
    ):
        self.config = config or CodeGeneratorConfig()
        self.generator = generator or PipelineGenerator(self.config)
        self.writer = writer or AtomicWriter()

    def run(self, root: Path) -> BatchReport:
        """Process every document found below root."""
        root = Path(root)
        logger.info("Searching for files in %s", root)
        paths = discover_documents(root, self.config.schema_extension)
        for path in paths:
            logger.info("  %s", path)

        report = BatchReport(root=root)
        for path in paths:
            report.documents.append(self.process(path))

        logger.info("%d generated, %d failed", len(report.succeeded), len(report.failed))
        return report

    def process(self, path: Path) -> DocumentReport:
        """Generate and write the artifact of a single document."""
        doc = DocumentReport(path=path)
        source = str(path)

        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            doc.reason = f"Cannot read {path}: {e}"
            doc.diagnostics.append(Diagnostic(Severity.ERROR, type(e).__name__, doc.reason, source=source))
            self._log(doc)
            return doc

        result = self.generator.generate(lines, source_name=path.name)
        doc.diagnostics = [d.with_source(source) for d in result.diagnostics]

        if not result.succeeded:
            doc.reason = result.reason
            self._log(doc)
            return doc

        output_path = path.parent / result.output_name
        try:
            schema = result.schema if self.config.validate_output else None
            self.writer.write(output_path, result.artifact, schema)
        except ArtifactWriteError as e:
            doc.reason = e.message
            doc.diagnostics.append(e.to_diagnostic().with_source(source))
        except OSError as e:
            doc.reason = f"Cannot write {output_path}: {e}"
            doc.diagnostics.append(Diagnostic(Severity.ERROR, type(e).__name__, doc.reason, source=source))
        else:
            doc.output_path = output_path

        self._log(doc)
        return doc

    def _log(self, doc: DocumentReport) -> None:
        for diagnostic in doc.diagnostics:
            logger.log(_LOG_LEVELS[diagnostic.severity], diagnostic.format())
        if doc.succeeded:
            logger.info("ADT model generated successfully: %s", doc.output_path)
        else:
            logger.error("No output for %s: %s", doc.path, doc.reason)
