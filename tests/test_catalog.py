import json

import pytest

from warpgen.core.exceptions import TemplateNotFoundError
from warpgen.core.settings import BUNDLED_TEMPLATES
from warpgen.rendering.catalog import find_template, list_templates, validate_template


def test_list_templates_reads_descriptions(tmp_path):
    (tmp_path / "python").mkdir()
    (tmp_path / "python" / "template.json").write_text(
        json.dumps({"description": "Python package"}), encoding="utf-8"
    )
    (tmp_path / "node").mkdir()
    (tmp_path / "stray-file.txt").write_text("", encoding="utf-8")

    templates = list_templates(tmp_path)

    assert [(t.name, t.description) for t in templates] == [
        ("node", ""),
        ("python", "Python package"),
    ]


def test_list_templates_tolerates_bad_metadata(tmp_path):
    (tmp_path / "broken").mkdir()
    (tmp_path / "broken" / "template.json").write_text("{oops", encoding="utf-8")
    assert list_templates(tmp_path)[0].description == ""


def test_list_templates_missing_root(tmp_path):
    assert list_templates(tmp_path / "nope") == []


def test_find_template(tmp_path):
    (tmp_path / "python").mkdir()
    assert find_template(tmp_path, "python") == tmp_path / "python"
    with pytest.raises(TemplateNotFoundError):
        find_template(tmp_path, "cobol")


def test_validate_template(tmp_path):
    (tmp_path / "{{PACKAGE_NAME}}").mkdir()
    (tmp_path / "{{PACKAGE_NAME}}" / "main.py.template").write_text(
        "{{PROJECT_NAME}} {{include:header.txt}} {{include:gone.txt}}"
        " {{function:uppercase:x}} {{function:shout:x}} {{lower_case}}",
        encoding="utf-8",
    )
    (tmp_path / "{{PACKAGE_NAME}}" / "header.txt").write_text("{{IGNORED}}", encoding="utf-8")

    report = validate_template(tmp_path)

    assert report.variables == ["PACKAGE_NAME", "PROJECT_NAME"]
    assert report.missing_includes == ["{{PACKAGE_NAME}}/main.py.template: gone.txt"]
    assert report.unknown_functions == ["shout"]
    assert not report.ok


def test_validate_missing_template(tmp_path):
    with pytest.raises(TemplateNotFoundError):
        validate_template(tmp_path / "nope")


def test_bundled_python_template_is_valid():
    report = validate_template(BUNDLED_TEMPLATES / "python")
    assert report.ok
    assert "PYTHON_PACKAGE" in report.variables
    assert "PROJECT_NAME" in report.variables
