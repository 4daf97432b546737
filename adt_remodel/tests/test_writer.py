"""
Tests for the artifact check and the atomic writer.
"""

from __future__ import annotations

import pytest

from adt_remodel.pipeline import ArtifactWriteError, AtomicWriter, PipelineGenerator
from adt_remodel.pipeline.writer import check_artifact, fixed_area


def render(text):
    result = PipelineGenerator().generate_text(text)
    return result.artifact, result.schema


def leftovers(directory):
    return [p.name for p in directory.iterdir() if p.name.endswith(".tmp")]


def test_write_creates_file(tmp_path):
    artifact, schema = render("A {\n  V {\n  }\n}\n")
    target = tmp_path / "nested" / "A.cs"

    AtomicWriter().write(target, artifact, schema)

    assert target.read_text(encoding="utf-8") == artifact
    assert leftovers(target.parent) == []


def test_write_replaces_existing_file(tmp_path):
    artifact, schema = render("A {\n  V {\n  }\n}\n")
    target = tmp_path / "A.cs"
    target.write_text("old", encoding="utf-8")

    AtomicWriter().write(target, artifact, schema)

    assert target.read_text(encoding="utf-8") == artifact


@pytest.mark.parametrize(
    "fixed_line",
    [
        '&public string Open => "{";',
        '&public string Close => "}}";',
        "&// closes with } here",
        "&public int Sides() { return 0;",
    ],
)
def test_unbalanced_fixed_lines_are_written(tmp_path, fixed_line):
    artifact, schema = render(f"Shape {{\n  {fixed_line}\n  Circle {{\n    float r\n  }}\n}}\n")
    target = tmp_path / "Shape.cs"

    AtomicWriter().write(target, artifact, schema)

    assert f"  {fixed_line[1:]}\n" in target.read_text(encoding="utf-8")


def test_fixed_area_matches_rendering():
    artifact, schema = render("A {\n  &x();\n  &y();\n}\n")

    assert fixed_area(schema) == "  //fixed area\n  x();\n  y();\n  //end fixed area\n"
    assert fixed_area(schema) in artifact


def test_check_accepts_generation_comment_with_braces():
    result = PipelineGenerator().generate_text("A {\n  V {\n  }\n}\n")
    backend = PipelineGenerator().backend
    backend.config.add_generation_comment = True
    artifact = backend.generate(result.schema, "odd{name.adtValue")

    check_artifact(artifact, result.schema)


@pytest.mark.parametrize(
    "mutate, message",
    [
        (lambda s: s.replace("public abstract class A {", "public class A {"), "abstract class A"),
        (lambda s: s.replace("public sealed class W : A {", "public sealed class X : A {"), "declares variants"),
        (lambda s: s.replace("  [Serializable]\n  public sealed class W : A {", "  [Serializable]\n  public sealed class W : B {"), "declares variants"),
        (lambda s: s.replace("    return default(T);\n  }\n", "    return default(T);\n"), "unbalanced braces"),
        (lambda s: s.replace("  y();\n", ""), "Fixed area"),
    ],
)
def test_check_rejects_mismatched_artifact(mutate, message):
    artifact, schema = render("A {\n  &y();\n  V {\n  }\n  W {\n  }\n}\n")

    with pytest.raises(ArtifactWriteError, match=message):
        check_artifact(mutate(artifact), schema)


def test_rejected_artifact_leaves_target_untouched(tmp_path):
    artifact, schema = render("A {\n  V {\n  }\n}\n")
    target = tmp_path / "A.cs"
    target.write_text("old", encoding="utf-8")

    with pytest.raises(ArtifactWriteError):
        AtomicWriter().write(target, artifact.replace("sealed class V", "sealed class Z"), schema)

    assert target.read_text(encoding="utf-8") == "old"
    assert leftovers(tmp_path) == []


def test_write_without_schema_skips_check(tmp_path):
    target = tmp_path / "A.cs"
    AtomicWriter().write(target, "not code")

    assert target.read_text(encoding="utf-8") == "not code"


def test_custom_check(tmp_path):
    artifact, schema = render("A {\n}\n")
    seen = []

    AtomicWriter(check=lambda content, s: seen.append(s.name)).write(tmp_path / "A.cs", artifact, schema)

    assert seen == ["A"]


def test_check_disabled(tmp_path):
    artifact, schema = render("A {\n}\n")

    AtomicWriter(check=None).write(tmp_path / "A.cs", "anything", schema)

    assert (tmp_path / "A.cs").read_text(encoding="utf-8") == "anything"
