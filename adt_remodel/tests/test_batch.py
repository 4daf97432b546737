"""
Tests for document discovery and the batch driver.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from adt_remodel import BatchRunner, CodeGeneratorConfig, discover_documents
from adt_remodel.pipeline import ArtifactWriteError, Severity

TEST_DATA = Path(__file__).parent / "test_data"

BROKEN = "Broken {\n  V {\n    W {\n    }\n  }\n}\n"


@pytest.fixture
def tree(tmp_path):
    """A directory tree with two good documents and a broken one."""
    (tmp_path / "models" / "deep").mkdir(parents=True)
    shutil.copy(TEST_DATA / "shape.adtValue", tmp_path / "models" / "shape.adtValue")
    shutil.copy(TEST_DATA / "result.adtValue", tmp_path / "models" / "deep" / "result.adtValue")
    (tmp_path / "broken.adtValue").write_text(BROKEN, encoding="utf-8")
    (tmp_path / "notes.txt").write_text("Ignored {\n}\n", encoding="utf-8")
    return tmp_path


def test_discover_documents(tree):
    found = discover_documents(tree)

    assert [p.relative_to(tree).as_posix() for p in found] == [
        "broken.adtValue",
        "models/deep/result.adtValue",
        "models/shape.adtValue",
    ]


def test_discover_custom_extension(tree):
    assert [p.name for p in discover_documents(tree, ".txt")] == ["notes.txt"]


def test_batch_continues_after_abort(tree):
    report = BatchRunner().run(tree)

    assert not report.ok
    assert [doc.path.name for doc in report.failed] == ["broken.adtValue"]
    assert report.failed[0].reason == "too many { brackets"
    assert len(report.succeeded) == 2

    shape_cs = tree / "models" / "Shape.cs"
    result_cs = tree / "models" / "deep" / "Result.cs"
    assert shape_cs.read_text(encoding="utf-8") == (TEST_DATA / "Shape.cs").read_text(encoding="utf-8")
    assert result_cs.read_text(encoding="utf-8") == (TEST_DATA / "Result.cs").read_text(encoding="utf-8")
    assert not (tree / "Broken.cs").exists()


def test_diagnostics_carry_their_source(tree):
    report = BatchRunner().run(tree)

    errors = [d for d in report.diagnostics if d.severity == Severity.ERROR]
    assert len(errors) == 1
    assert errors[0].source == str(tree / "broken.adtValue")
    assert errors[0].format().startswith(f"{tree / 'broken.adtValue'}:3: [StructuralError] too many {{ brackets")


def test_batch_logs_progress(tree, caplog):
    with caplog.at_level(logging.INFO, logger="adt_remodel"):
        BatchRunner().run(tree)

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("Searching for files in") for m in messages)
    assert any("Shape.cs" in m for m in messages if "generated successfully" in m)
    assert any(r.levelno == logging.ERROR and "broken.adtValue" in r.getMessage() for r in caplog.records)


def test_all_good_tree_is_ok(tmp_path):
    shutil.copy(TEST_DATA / "point.adtValue", tmp_path / "point.adtValue")

    report = BatchRunner().run(tmp_path)

    assert report.ok
    assert report.succeeded[0].output_path == tmp_path / "Point.cs"


def test_enforced_rule_skips_document(tmp_path):
    shutil.copy(TEST_DATA / "point.adtValue", tmp_path / "point.adtValue")

    report = BatchRunner(CodeGeneratorConfig(require_variants=True)).run(tmp_path)

    assert not report.ok
    assert not (tmp_path / "Point.cs").exists()


def test_write_failure_is_reported(tmp_path):
    class RefusingWriter:
        def write(self, path, content, schema=None):
            raise ArtifactWriteError("refused")

    shutil.copy(TEST_DATA / "point.adtValue", tmp_path / "point.adtValue")

    report = BatchRunner(writer=RefusingWriter()).run(tmp_path)

    assert report.failed[0].reason == "refused"
    assert report.failed[0].diagnostics[-1].code == "ArtifactWriteError"


def test_fixed_line_with_unbalanced_brace_is_written(tmp_path):
    document = 'Shape {\n  &public string Open => "{";\n  Circle {\n    float r\n  }\n}\n'
    (tmp_path / "shape.adtValue").write_text(document, encoding="utf-8")

    report = BatchRunner().run(tmp_path)

    assert report.ok, [doc.reason for doc in report.failed]
    generated = (tmp_path / "Shape.cs").read_text(encoding="utf-8")
    assert '  public string Open => "{";\n' in generated


def test_writer_receives_schema_only_when_validating(tmp_path):
    class RecordingWriter:
        def __init__(self):
            self.schemas = []

        def write(self, path, content, schema=None):
            self.schemas.append(schema)

    shutil.copy(TEST_DATA / "point.adtValue", tmp_path / "point.adtValue")

    checking = RecordingWriter()
    BatchRunner(writer=checking).run(tmp_path)
    unchecked = RecordingWriter()
    BatchRunner(CodeGeneratorConfig(validate_output=False), writer=unchecked).run(tmp_path)

    assert checking.schemas[0].name == "Point"
    assert unchecked.schemas == [None]


def test_empty_tree(tmp_path):
    report = BatchRunner().run(tmp_path)

    assert report.ok
    assert report.documents == []
