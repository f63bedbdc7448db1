import pytest

from warpgen.environment import conditions
from warpgen.environment.conditions import evaluate, register_condition
from warpgen.environment.store import VariableStore


def _store(**values):
    return VariableStore(values)


@pytest.mark.parametrize(
    "name, project_type, expected",
    [
        ("python", "python", True),
        ("python", "Python", False),
        ("javascript", "node", True),
        ("js", "javascript", True),
        ("node", "js", True),
        ("node", "typescript", False),
        ("wordpress", "wordpress-plugin", True),
        ("wordpress", "php", False),
        ("php", "php", True),
        ("php", "wordpress-theme", True),
        ("php", "python", False),
    ],
)
def test_project_type_conditions(name, project_type, expected):
    assert evaluate(name, _store(PROJECT_TYPE=project_type)) is expected


@pytest.mark.parametrize(
    "name, variable",
    [("docker", "USE_DOCKER"), ("testing", "INCLUDE_TESTING"), ("ci", "INCLUDE_CI")],
)
def test_feature_flag_conditions(name, variable):
    assert evaluate(name, _store(**{variable: "true"})) is True
    assert evaluate(name, _store(**{variable: "false"})) is False
    assert evaluate(name, _store(**{variable: "True"})) is False
    assert evaluate(name, _store()) is False


def test_unknown_condition_reads_variable():
    assert evaluate("INCLUDE_DOCS", _store(INCLUDE_DOCS="true")) is True
    assert evaluate("INCLUDE_DOCS", _store(INCLUDE_DOCS="yes")) is False
    assert evaluate("INCLUDE_DOCS", _store()) is False


def test_register_condition(monkeypatch):
    monkeypatch.setattr(conditions, "CONDITIONS", dict(conditions.CONDITIONS))

    @register_condition("laravel")
    def _is_laravel(store):
        return store.get("PROJECT_TYPE").startswith("laravel")

    assert conditions.CONDITIONS["laravel"] is _is_laravel
    assert evaluate("laravel", _store(PROJECT_TYPE="laravel-api")) is True
